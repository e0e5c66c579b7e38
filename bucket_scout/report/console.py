# File: bucket_scout/report/console.py
"""bucket_scout.report.console: one line per probe outcome on the console and in the log."""

from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Dict, List, Optional, Protocol

import click

from bucket_scout.logger import RESULTS_LOGGER
from bucket_scout.prober.models import Outcome, OutcomeKind

__all__ = ["ReportingSink", "ConsoleReporter", "format_outcome", "style_for"]

_STYLES: Dict[OutcomeKind, Dict[str, object]] = {
    OutcomeKind.FOUND: {"fg": "green"},
    OutcomeKind.ACCESS_DENIED: {"fg": "yellow"},
    OutcomeKind.REDIRECTED: {"fg": "blue"},
    OutcomeKind.REDIRECT_LOOP_EXCEEDED: {"fg": "red"},
    OutcomeKind.MALFORMED_RESPONSE: {"fg": "magenta"},
    OutcomeKind.UNKNOWN_ERROR_CODE: {"fg": "magenta"},
    OutcomeKind.REQUEST_ERROR: {"fg": "red"},
    OutcomeKind.TIMEOUT: {"fg": "red"},
}


class ReportingSink(Protocol):
    """Anything the scanner can hand outcomes to."""

    def report(self, outcome: Outcome) -> None: ...


def style_for(kind: OutcomeKind, text: str) -> str:
    """Wraps *text* in the ANSI style associated with *kind* (unstyled if none)."""
    style = _STYLES.get(kind)
    if not style:
        return text
    return click.style(text, **style)  # type: ignore[arg-type]


def format_outcome(outcome: Outcome) -> str:
    """Plain one-line description of *outcome*, indented by redirect depth."""
    name = outcome.bucket
    kind = outcome.kind
    if kind is OutcomeKind.FOUND:
        text = f"Bucket Found: {name} ( {outcome.url} )"
        if outcome.keys:
            text += f" [{len(outcome.keys)} keys]"
    elif kind is OutcomeKind.ACCESS_DENIED:
        text = f"Bucket found but access denied: {name}"
    elif kind is OutcomeKind.NOT_FOUND:
        text = f"Bucket does not exist: {name}"
    elif kind is OutcomeKind.KEY_NOT_FOUND:
        text = f"The specified key does not exist: {name}"
    elif kind is OutcomeKind.REDIRECTED:
        text = f"Bucket {name} redirects to: {outcome.endpoint}"
    elif kind is OutcomeKind.REDIRECT_UNRESOLVED:
        text = f"Redirect found but can't find where to: {name}"
    elif kind is OutcomeKind.REDIRECT_LOOP_EXCEEDED:
        text = f"Too many redirects for {name}, stopped at {outcome.host}"
    elif kind is OutcomeKind.TIMEOUT:
        text = f"Timeout requesting page: {outcome.url}"
    elif kind is OutcomeKind.REQUEST_ERROR:
        text = f"Error requesting page: {outcome.url} {outcome.detail or ''}".rstrip()
    elif kind is OutcomeKind.MALFORMED_RESPONSE:
        text = f"Malformed response for {name}: {outcome.detail}"
    elif kind is OutcomeKind.UNKNOWN_ERROR_CODE:
        text = f"Unhandled error code {outcome.code} for {name}"
    else:
        text = f"No data returned for {name}"
    return "\t" * outcome.depth + text


class ConsoleReporter:
    """Prints outcomes with click and mirrors them to the ``results`` logger.

    Silent outcomes (missing buckets, network failures) reach the console only
    when *verbose* is set; the log always receives every outcome.
    """

    def __init__(self, verbose: bool = False, color: Optional[bool] = None) -> None:
        self.verbose = verbose
        self.color = color
        self.outcomes: List[Outcome] = []
        self._lock = threading.Lock()
        self._log = logging.getLogger(RESULTS_LOGGER)

    def report(self, outcome: Outcome) -> None:
        line = format_outcome(outcome)
        with self._lock:
            self.outcomes.append(outcome)
            if self.verbose or not outcome.silent:
                click.echo(style_for(outcome.kind, line), color=self.color)
            self._log.log(logging.DEBUG if outcome.silent else logging.INFO, line)

    def announce(self, candidates: int, started: datetime) -> None:
        """Run header: candidate count and start time, printed before any outcome."""
        with self._lock:
            click.echo(f"Generated {candidates} candidates", color=self.color)
            click.echo(f"Start time: {started}", color=self.color)
