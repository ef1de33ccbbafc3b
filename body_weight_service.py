from __future__ import annotations

import datetime
from typing import Dict, List, Optional

from algorithms import WeightConverter
from models import BodyWeightLog


class BodyWeightHistory:
    """Answer body weight lookups from already-loaded log entries."""

    DEFAULT_BODY_WEIGHT_KG: float = 70.0

    def __init__(
        self,
        logs: List[BodyWeightLog],
        default_kg: float = DEFAULT_BODY_WEIGHT_KG,
    ) -> None:
        self.logs = sorted(logs, key=lambda log: log.date)
        self.default_kg = default_kg

    def _log_for_date(self, day: datetime.date) -> Optional[BodyWeightLog]:
        found = None
        for log in self.logs:
            if log.date > day:
                break
            found = log
        return found

    def weight_for_date(self, day: datetime.date | datetime.datetime) -> float:
        """Return the most recent weight on or before ``day`` in kg."""
        if isinstance(day, datetime.datetime):
            day = day.date()
        log = self._log_for_date(day)
        if log is None:
            return self.default_kg
        return WeightConverter.to_kg(log.weight, log.unit)

    def latest(self) -> float:
        if not self.logs:
            return self.default_kg
        log = self.logs[-1]
        return WeightConverter.to_kg(log.weight, log.unit)

    def history(self, unit: str = "kg") -> List[Dict[str, float]]:
        return [
            {
                "date": log.date.isoformat(),
                "value": round(WeightConverter.convert(log.weight, log.unit, unit), 2),
            }
            for log in self.logs
        ]
