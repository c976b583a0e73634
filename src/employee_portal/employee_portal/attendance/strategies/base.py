from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, time
from typing import Optional

from ...core.enums import AttendanceStatus


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    note: Optional[str] = None


class ClockInStrategy(ABC):
    """Strategy Pattern: encapsulate how we decide a clock-in status."""

    @abstractmethod
    def decide_clock_in(self, *, now: datetime, workday_start: time, grace_minutes: int) -> StatusDecision:
        raise NotImplementedError
