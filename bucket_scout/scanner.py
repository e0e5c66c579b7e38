# === FILE: bucket_scout/scanner.py ===
"""
Scan coordinator: a fixed pool of asyncio workers draining a queue of candidates.

Every candidate is probed once at depth 0. A ``PermanentRedirect`` answer is
followed inside the same worker against the endpoint it names (depth + 1),
up to ``max_redirect_depth`` levels.
"""
from __future__ import annotations

import asyncio
from dataclasses import replace
from typing import Final, Iterable, List, Optional

from bucket_scout.downloader import Downloader
from bucket_scout.logger import get_logger
from bucket_scout.parser.s3_parser import MalformedResponse, classify
from bucket_scout.prober.fetcher import Fetcher
from bucket_scout.prober.models import Outcome, OutcomeKind
from bucket_scout.report.console import ReportingSink

__all__ = ["POOL_SIZE", "MAX_REDIRECT_DEPTH", "Scanner"]

POOL_SIZE: Final[int] = 50
MAX_REDIRECT_DEPTH: Final[int] = 10

# one per worker, queued after the last candidate
_STOP: Final = object()

logger = get_logger("scanner")


class Scanner:
    """Probes the seed and every candidate against one provider host."""

    def __init__(
        self,
        fetcher: Fetcher,
        sink: ReportingSink,
        *,
        host: str,
        seed_domain: str,
        pool_size: int = POOL_SIZE,
        max_redirect_depth: int = MAX_REDIRECT_DEPTH,
        downloader: Optional[Downloader] = None,
        prefix_candidates: bool = False,
    ) -> None:
        if pool_size < 1:
            raise ValueError("pool_size must be >= 1")
        self.fetcher = fetcher
        self.sink = sink
        self.host = host
        self.seed_domain = seed_domain
        self.pool_size = pool_size
        self.max_redirect_depth = max_redirect_depth
        self.downloader = downloader
        self.prefix_candidates = prefix_candidates

    def job_path(self, candidate: str) -> str:
        return f"{self.seed_domain}{candidate}" if self.prefix_candidates else candidate

    async def scan(self, candidates: Iterable[str]) -> None:
        # the bare seed goes first, before any worker starts
        await self._guarded_probe(self.seed_domain)

        queue: asyncio.Queue[object] = asyncio.Queue()
        total = 0
        for candidate in candidates:
            if self.job_path(candidate) == self.seed_domain:
                continue
            queue.put_nowait(candidate)
            total += 1
        for _ in range(self.pool_size):
            queue.put_nowait(_STOP)

        logger.info("Scanning %d candidates against %s with %d workers", total, self.host, self.pool_size)
        workers: List[asyncio.Task[None]] = [
            asyncio.create_task(self._worker(queue), name=f"scan-worker-{i}") for i in range(self.pool_size)
        ]
        try:
            await asyncio.gather(*workers)
        finally:
            for w in workers:
                w.cancel()
            await asyncio.gather(*workers, return_exceptions=True)

    async def _worker(self, queue: asyncio.Queue[object]) -> None:
        while True:
            item = await queue.get()
            try:
                if item is _STOP:
                    return
                await self._guarded_probe(self.job_path(str(item)))
            finally:
                queue.task_done()

    async def _guarded_probe(self, path: str) -> None:
        """Depth-0 probe of *path*; an unexpected error is logged, never raised."""
        try:
            await self._probe(path, self.host, path, depth=0)
        except Exception:
            logger.exception("Probe of %s failed", path)

    async def _probe(self, bucket: str, host: str, path: str, depth: int) -> Outcome:
        """Probe ``host/path``, report the outcome and follow a redirect."""
        if depth > self.max_redirect_depth:
            outcome = Outcome(OutcomeKind.REDIRECT_LOOP_EXCEEDED, bucket=bucket, host=host, depth=depth)
            self.sink.report(outcome)
            return outcome

        result = await self.fetcher.fetch(host, path)
        if not result.ok:
            outcome = Outcome(result.failure, detail=result.error)  # type: ignore[arg-type]
        else:
            try:
                outcome = classify(result.body)
            except MalformedResponse as exc:
                outcome = Outcome(OutcomeKind.MALFORMED_RESPONSE, detail=str(exc))
        outcome = replace(outcome, bucket=bucket, host=host, url=result.url, depth=depth)
        self.sink.report(outcome)

        if outcome.kind is OutcomeKind.FOUND and self.downloader is not None:
            await self.downloader.download(outcome)
        elif outcome.kind is OutcomeKind.REDIRECTED and outcome.endpoint:
            await self._probe(bucket, f"http://{outcome.endpoint}", "", depth + 1)
        return outcome
