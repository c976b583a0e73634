from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import ClockInStrategy, StatusDecision


class PresentStrategy(ClockInStrategy):
    """Clock-in within the grace window."""

    def decide_clock_in(self, *, now: datetime, workday_start: time, grace_minutes: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)
