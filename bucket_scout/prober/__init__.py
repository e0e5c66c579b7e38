# File: bucket_scout/prober/__init__.py
"""bucket_scout.prober: HTTP probing of candidate bucket names."""

from .fetcher import RETRY_DELAYS, Fetcher
from .models import FetchResult, Outcome, OutcomeKind

__all__ = ["Fetcher", "FetchResult", "Outcome", "OutcomeKind", "RETRY_DELAYS"]
