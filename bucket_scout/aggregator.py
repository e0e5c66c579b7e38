# File: bucket_scout/aggregator.py
"""bucket_scout.aggregator: Модуль агрегатора отчетов сканирования."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from bucket_scout.prober.models import Outcome, OutcomeKind


@dataclass(slots=True)
class ScanReport:
    """Результаты сканирования: исходы всех проб и время выполнения."""

    domain: str = ""
    host: str = ""
    candidates: int = 0
    started: Optional[datetime] = None
    finished: Optional[datetime] = None
    outcomes: List[Outcome] = field(default_factory=list)

    @property
    def elapsed(self) -> float:
        """Длительность сканирования в секундах (0, если время неизвестно)."""
        if self.started is None or self.finished is None:
            return 0.0
        return (self.finished - self.started).total_seconds()

    def counts(self) -> Dict[str, int]:
        """Число исходов каждого вида."""
        counter = Counter(o.kind.value for o in self.outcomes)
        return {kind.value: counter.get(kind.value, 0) for kind in OutcomeKind}

    def of_kind(self, *kinds: OutcomeKind) -> List[Outcome]:
        return [o for o in self.outcomes if o.kind in kinds]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "domain": self.domain,
            "host": self.host,
            "candidates": self.candidates,
            "started": self.started.isoformat() if self.started else None,
            "finished": self.finished.isoformat() if self.finished else None,
            "elapsed": self.elapsed,
            "counts": self.counts(),
            "outcomes": [o.as_dict() for o in self.outcomes],
        }

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ScanReport."""
        return json.dumps(self.as_dict(), ensure_ascii=False, indent=2 if pretty else None)


def aggregate_results(
    outcomes: Iterable[Outcome],
    *,
    domain: str = "",
    host: str = "",
    candidates: int = 0,
    started: Optional[datetime] = None,
    finished: Optional[datetime] = None,
) -> ScanReport:
    """Собирает исходы проб в ScanReport."""
    return ScanReport(
        domain=domain,
        host=host,
        candidates=candidates,
        started=started,
        finished=finished,
        outcomes=list(outcomes),
    )
