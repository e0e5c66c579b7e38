"""Download of the public objects of a listable bucket."""

from __future__ import annotations

import asyncio
from pathlib import Path, PurePosixPath
from typing import List, Optional, Union
from urllib.parse import quote

from aiohttp import ClientError, ClientSession

from bucket_scout.logger import get_logger
from bucket_scout.prober.models import Outcome, OutcomeKind
from bucket_scout.utils import join_url

logger = get_logger("downloader")

_CHUNK_SIZE = 64 * 1024


class Downloader:
    """Saves every object listed in a ``FOUND`` outcome to ``output_dir/<bucket>/<key>``."""

    def __init__(self, session: ClientSession, output_dir: Union[str, Path]) -> None:
        self.session = session
        self.output_dir = Path(output_dir)

    def target_path(self, bucket: str, key: str) -> Optional[Path]:
        """Local path for *key*, or ``None`` when the key would leave the bucket directory."""
        parts = PurePosixPath(key).parts
        if not parts or key.endswith("/") or PurePosixPath(key).is_absolute() or ".." in parts:
            return None
        return self.output_dir.joinpath(bucket or "_", *parts)

    async def download(self, outcome: Outcome) -> List[Path]:
        if outcome.kind is not OutcomeKind.FOUND:
            return []
        saved: List[Path] = []
        for key in outcome.keys:
            target = self.target_path(outcome.bucket, key)
            if target is None:
                logger.debug("Skipping key %r of %s", key, outcome.bucket)
                continue
            url = join_url(outcome.url, quote(key))
            if await self._save(url, target):
                saved.append(target)
        logger.info("Downloaded %d/%d files from %s", len(saved), len(outcome.keys), outcome.bucket)
        return saved

    async def _save(self, url: str, target: Path) -> bool:
        try:
            async with self.session.get(url) as resp:
                if resp.status != 200:
                    logger.warning("Download of %s failed: HTTP %s", url, resp.status)
                    return False
                target.parent.mkdir(parents=True, exist_ok=True)
                with target.open("wb") as fh:
                    async for chunk in resp.content.iter_chunked(_CHUNK_SIZE):
                        fh.write(chunk)
        except (ClientError, asyncio.TimeoutError, OSError) as exc:
            logger.warning("Download of %s failed: %s", url, exc)
            return False
        logger.debug("Saved %s -> %s", url, target)
        return True
