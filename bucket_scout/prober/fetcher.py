# bucket_scout/prober/fetcher.py
"""
Fetcher module: one HTTP GET against the provider with a fixed retry schedule.
"""
from __future__ import annotations

import asyncio
from collections import deque
from typing import Deque, Final, Sequence, Tuple

from aiohttp import ClientError, ClientSession

from bucket_scout.logger import get_logger
from bucket_scout.prober.models import FetchResult, OutcomeKind
from bucket_scout.utils import join_url

__all__ = ("RETRY_DELAYS", "Fetcher")

#: delays (seconds) consumed front-to-back on request errors
RETRY_DELAYS: Final[Tuple[float, ...]] = (3.0, 3.0, 3.0, 3.0, 3.0)

logger = get_logger("fetcher")


class Fetcher:
    """Issues GET requests to ``<host>/<path>`` with retry on request errors.

    A timeout ends the request at once. Any other :class:`aiohttp.ClientError`
    is retried after the next delay of the schedule; once the schedule is
    exhausted the request is given up, so at most ``1 + len(retry_delays)``
    attempts are made.
    """

    def __init__(self, session: ClientSession, retry_delays: Sequence[float] = RETRY_DELAYS) -> None:
        self.session = session
        self.retry_delays: Tuple[float, ...] = tuple(retry_delays)

    async def fetch(self, host: str, path: str) -> FetchResult:
        url = join_url(host, path)
        delays: Deque[float] = deque(self.retry_delays)
        while True:
            try:
                # the provider's 301 PermanentRedirect carries the XML body we need
                async with self.session.get(url, allow_redirects=False) as resp:
                    body = await resp.text(errors="replace")
                    logger.debug("GET %s -> HTTP %s (%d bytes)", url, resp.status, len(body))
                    return FetchResult(url, body)
            except asyncio.TimeoutError:
                logger.warning("Timeout requesting page: %s", url)
                return FetchResult(url, failure=OutcomeKind.TIMEOUT, error="timeout")
            except ClientError as exc:
                if not delays:
                    logger.error("Error requesting page: %s %s", url, exc)
                    return FetchResult(url, failure=OutcomeKind.REQUEST_ERROR, error=str(exc) or type(exc).__name__)
                delay = delays.popleft()
                logger.warning("Error requesting page: %s %s. Retrying in %.1f s...", url, exc, delay)
                await asyncio.sleep(delay)

    async def probe(self, host: str, path: str) -> str:
        """Returns the response body, or ``""`` when the request failed."""
        result = await self.fetch(host, path)
        return result.body
