from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, time, timedelta

from .strategies.base import ClockInStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class ClockInStrategyFactory:
    """Factory Pattern: choose the clock-in strategy from the workday rules."""

    def for_clock_in(self, *, now: datetime, workday_start: time, grace_minutes: int) -> ClockInStrategy:
        cutoff = datetime.combine(now.date(), workday_start) + timedelta(minutes=grace_minutes)
        if now < cutoff:
            return PresentStrategy()
        return LateStrategy()
