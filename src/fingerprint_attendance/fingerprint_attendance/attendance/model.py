from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one (staff, date) attendance row."""

    attendance_id: int
    staff_id: int
    attendance_date: date
    arrival_time: Optional[datetime]
    departure_time: Optional[datetime]

    @property
    def status(self) -> AttendanceStatus:
        """Derived from the timestamps, never stored."""

        if self.arrival_time is not None and self.departure_time is not None:
            return AttendanceStatus.COMPLETE
        if self.arrival_time is not None:
            return AttendanceStatus.ARRIVAL_RECORDED
        return AttendanceStatus.INCOMPLETE


@dataclass(frozen=True)
class AttendanceView:
    """Read-model returned to callers, with staff and department context."""

    attendance_id: int
    attendance_date: date
    arrival_time: Optional[datetime]
    departure_time: Optional[datetime]
    staff_id: int
    staff_name: str
    staff_surname: str
    staff_email: str
    department_id: Optional[int]
    department_name: Optional[str]
    status: AttendanceStatus
