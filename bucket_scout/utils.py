# File: bucket_scout/utils.py
"""bucket_scout.utils: helpers for word lists, URL joining and de-duplication."""

from __future__ import annotations

from pathlib import Path
from typing import Collection, List, Sequence, Union

from bucket_scout.logger import logger

__all__: Sequence[str] = (
    "read_wordlist",
    "remove_duplicates",
    "join_url",
)


def read_wordlist(path: Union[str, Path]) -> List[str]:
    """Reads a newline-delimited wordlist, returns the non-empty stripped lines."""
    p = Path(path)
    if not p.is_file():
        logger.error("Wordlist not found: %s", p)
        raise FileNotFoundError(f"Wordlist file not found: {p}")
    words = [line.strip() for line in p.read_text(encoding="utf-8").splitlines() if line.strip()]
    logger.debug("Loaded %d entries from wordlist %s", len(words), p)
    return words


def remove_duplicates(items: Collection[str]) -> List[str]:
    """Removes duplicates keeping the first occurrence of each item."""
    unique = list(dict.fromkeys(items))
    removed = len(items) - len(unique)
    if removed:
        logger.debug("Removed %d duplicate candidates", removed)
    return unique


def join_url(host: str, path: str) -> str:
    """Joins a base URL and a path with exactly one slash between them."""
    return f"{host.rstrip('/')}/{path.lstrip('/')}"
