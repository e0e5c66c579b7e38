# bucket_scout/prober/models.py
"""
Data models for the BucketScout prober.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class OutcomeKind(str, Enum):
    """Classified result of one probe."""

    FOUND = "found"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    KEY_NOT_FOUND = "key_not_found"
    REDIRECTED = "redirected"
    REDIRECT_UNRESOLVED = "redirect_unresolved"
    REDIRECT_LOOP_EXCEEDED = "redirect_loop_exceeded"
    TIMEOUT = "timeout"
    REQUEST_ERROR = "request_error"
    NO_DATA = "no_data"
    MALFORMED_RESPONSE = "malformed_response"
    UNKNOWN_ERROR_CODE = "unknown_error_code"


# shown on the console only in verbose mode
SILENT_KINDS = frozenset({OutcomeKind.NOT_FOUND, OutcomeKind.TIMEOUT, OutcomeKind.REQUEST_ERROR})


@dataclass(frozen=True, slots=True)
class Outcome:
    """One reported probe result.

    The classifier fills ``kind`` and the response-derived fields; the scanner
    adds ``bucket``, ``host``, ``url`` and ``depth``.
    """

    kind: OutcomeKind
    bucket: str = ""
    host: str = ""
    url: str = ""
    depth: int = 0
    endpoint: Optional[str] = None
    code: Optional[str] = None
    detail: Optional[str] = None
    keys: Tuple[str, ...] = ()

    @property
    def silent(self) -> bool:
        return self.kind in SILENT_KINDS

    def as_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        data["keys"] = list(self.keys)
        return data


@dataclass(slots=True)
class FetchResult:
    """Raw body of one GET, or the failure kind when the request gave up."""

    url: str
    body: str = ""
    failure: Optional[OutcomeKind] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.failure is None
