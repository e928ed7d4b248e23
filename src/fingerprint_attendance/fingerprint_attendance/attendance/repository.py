from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_for_staff_and_date(
        self, staff_id: int, attendance_date: date, *, for_update: bool = False
    ) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def list_all(self) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_staff(self, staff_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_department(self, department_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_date_and_arrival(self, attendance_date: date, arrival_time: datetime) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_by_date_and_departure(self, attendance_date: date, departure_time: datetime) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_for_staff(self, staff_id: int) -> int:
        raise NotImplementedError

    def create_arrival(self, *, staff_id: int, attendance_date: date, arrival_time: datetime) -> int:
        raise NotImplementedError

    def set_arrival(self, *, attendance_id: int, arrival_time: datetime) -> bool:
        """Only succeeds while both arrival and departure are still null."""

        raise NotImplementedError

    def set_departure(self, *, attendance_id: int, departure_time: datetime) -> bool:
        """Only succeeds while arrival is set and departure is still null."""

        raise NotImplementedError

    def delete_for_staff(self, staff_id: int) -> int:
        raise NotImplementedError
