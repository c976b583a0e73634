from __future__ import annotations

from datetime import datetime, time

from ...core.enums import AttendanceStatus
from .base import ClockInStrategy, StatusDecision


class LateStrategy(ClockInStrategy):
    """Late clock-in; the note records how late."""

    def decide_clock_in(self, *, now: datetime, workday_start: time, grace_minutes: int) -> StatusDecision:
        start = datetime.combine(now.date(), workday_start)
        late_minutes = int((now - start).total_seconds() // 60)
        return StatusDecision(status=AttendanceStatus.LATE, note=f"Clocked in {late_minutes} min after {workday_start:%H:%M}")
