from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..database.mysql_base import fetch_count, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository

_SELECT = """
    SELECT a.attendance_id, a.staff_id, a.attendance_date, a.arrival_time, a.departure_time
    FROM attendances a
"""


def _to_record(row) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(row["attendance_id"]),
        staff_id=int(row["staff_id"]),
        attendance_date=row["attendance_date"],
        arrival_time=row.get("arrival_time"),
        departure_time=row.get("departure_time"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, cur):
        self._cur = cur

    def _list(self, sql: str, params: tuple = ()) -> Sequence[AttendanceRecord]:
        self._cur.execute(sql, params)
        return [_to_record(r) for r in fetchall(self._cur)]

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        self._cur.execute(_SELECT + " WHERE a.attendance_id=%s", (int(attendance_id),))
        row = fetchone(self._cur)
        return _to_record(row) if row else None

    def get_for_staff_and_date(
        self, staff_id: int, attendance_date: date, *, for_update: bool = False
    ) -> Optional[AttendanceRecord]:
        sql = _SELECT + " WHERE a.staff_id=%s AND a.attendance_date=%s"
        if for_update:
            sql += " FOR UPDATE"
        self._cur.execute(sql, (int(staff_id), attendance_date))
        row = fetchone(self._cur)
        return _to_record(row) if row else None

    def list_all(self) -> Sequence[AttendanceRecord]:
        return self._list(_SELECT + " ORDER BY a.attendance_date DESC, a.attendance_id DESC")

    def list_by_date(self, attendance_date: date) -> Sequence[AttendanceRecord]:
        return self._list(
            _SELECT + " WHERE a.attendance_date=%s ORDER BY a.staff_id",
            (attendance_date,),
        )

    def list_by_staff(self, staff_id: int) -> Sequence[AttendanceRecord]:
        return self._list(
            _SELECT + " WHERE a.staff_id=%s ORDER BY a.attendance_date DESC",
            (int(staff_id),),
        )

    def list_by_department(self, department_id: int) -> Sequence[AttendanceRecord]:
        return self._list(
            _SELECT
            + """
            JOIN staff s ON s.user_id = a.staff_id
            WHERE s.department_id=%s
            ORDER BY a.attendance_date DESC, a.staff_id ASC
            """,
            (int(department_id),),
        )

    def list_by_date_and_arrival(self, attendance_date: date, arrival_time: datetime) -> Sequence[AttendanceRecord]:
        return self._list(
            _SELECT + " WHERE a.attendance_date=%s AND a.arrival_time=%s ORDER BY a.staff_id",
            (attendance_date, arrival_time),
        )

    def list_by_date_and_departure(self, attendance_date: date, departure_time: datetime) -> Sequence[AttendanceRecord]:
        return self._list(
            _SELECT + " WHERE a.attendance_date=%s AND a.departure_time=%s ORDER BY a.staff_id",
            (attendance_date, departure_time),
        )

    def count_for_staff(self, staff_id: int) -> int:
        self._cur.execute("SELECT COUNT(*) AS n FROM attendances WHERE staff_id=%s", (int(staff_id),))
        return fetch_count(self._cur)

    def create_arrival(self, *, staff_id: int, attendance_date: date, arrival_time: datetime) -> int:
        self._cur.execute(
            """
            INSERT INTO attendances(staff_id, attendance_date, arrival_time, departure_time)
            VALUES(%s,%s,%s,NULL)
            """,
            (int(staff_id), attendance_date, arrival_time),
        )
        return int(self._cur.lastrowid)

    def set_arrival(self, *, attendance_id: int, arrival_time: datetime) -> bool:
        self._cur.execute(
            """
            UPDATE attendances
            SET arrival_time=%s
            WHERE attendance_id=%s AND arrival_time IS NULL AND departure_time IS NULL
            """,
            (arrival_time, int(attendance_id)),
        )
        return self._cur.rowcount > 0

    def set_departure(self, *, attendance_id: int, departure_time: datetime) -> bool:
        self._cur.execute(
            """
            UPDATE attendances
            SET departure_time=%s
            WHERE attendance_id=%s AND arrival_time IS NOT NULL AND departure_time IS NULL
            """,
            (departure_time, int(attendance_id)),
        )
        return self._cur.rowcount > 0

    def delete_for_staff(self, staff_id: int) -> int:
        self._cur.execute("DELETE FROM attendances WHERE staff_id=%s", (int(staff_id),))
        return int(self._cur.rowcount)
