from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.mysql_base import fetch_count, fetchall, fetchone
from ..users.model import Person
from ..users.mysql_user_repository import row_to_person
from .repository import StaffRepository

STAFF_SELECT = """
    SELECT u.user_id, u.name, u.surname, u.email, u.role, u.active,
           NULL AS password_hash,
           s.absence_count, s.department_id
    FROM staff s
    JOIN users u ON u.user_id = s.user_id
"""


class MySQLStaffRepository(StaffRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, staff_id: int, *, for_update: bool = False) -> Optional[Person]:
        sql = STAFF_SELECT + " WHERE s.user_id=%s"
        if for_update:
            sql += " FOR UPDATE"
        self._cur.execute(sql, (int(staff_id),))
        row = fetchone(self._cur)
        return row_to_person(row) if row else None

    def get_by_email(self, email: str) -> Optional[Person]:
        self._cur.execute(STAFF_SELECT + " WHERE u.email=%s", (email,))
        row = fetchone(self._cur)
        return row_to_person(row) if row else None

    def list_all(self, *, active_only: bool = False) -> Sequence[Person]:
        sql = STAFF_SELECT
        if active_only:
            sql += " WHERE u.active=1"
        self._cur.execute(sql + " ORDER BY u.user_id")
        return [row_to_person(r) for r in fetchall(self._cur)]

    def list_by_department(self, department_id: int, *, active_only: bool = False) -> Sequence[Person]:
        sql = STAFF_SELECT + " WHERE s.department_id=%s"
        if active_only:
            sql += " AND u.active=1"
        self._cur.execute(sql + " ORDER BY u.user_id", (int(department_id),))
        return [row_to_person(r) for r in fetchall(self._cur)]

    def count_by_department(self, department_id: int) -> int:
        self._cur.execute("SELECT COUNT(*) AS n FROM staff WHERE department_id=%s", (int(department_id),))
        return fetch_count(self._cur)

    def create(
        self,
        *,
        name: str,
        surname: str,
        email: str,
        role: Role,
        active: bool,
        absence_count: int,
        department_id: int,
    ) -> int:
        self._cur.execute(
            """
            INSERT INTO users(name, surname, email, role, active)
            VALUES(%s,%s,%s,%s,%s)
            """,
            (name, surname, email, role.value, int(active)),
        )
        staff_id = int(self._cur.lastrowid)
        self._cur.execute(
            """
            INSERT INTO staff(user_id, absence_count, department_id)
            VALUES(%s,%s,%s)
            """,
            (staff_id, int(absence_count), int(department_id)),
        )
        return staff_id

    def update(
        self,
        *,
        staff_id: int,
        name: str,
        surname: str,
        email: str,
        active: bool,
        absence_count: int,
        department_id: int,
    ) -> bool:
        self._cur.execute(
            """
            UPDATE users u
            JOIN staff s ON s.user_id = u.user_id
            SET u.name=%s, u.surname=%s, u.email=%s, u.active=%s,
                s.absence_count=%s, s.department_id=%s
            WHERE u.user_id=%s
            """,
            (name, surname, email, int(active), int(absence_count), int(department_id), int(staff_id)),
        )
        return self._cur.rowcount > 0

    def set_absence_count(self, staff_id: int, absence_count: int) -> bool:
        self._cur.execute(
            "UPDATE staff SET absence_count=%s WHERE user_id=%s",
            (int(absence_count), int(staff_id)),
        )
        return self._cur.rowcount > 0

    def set_active(self, staff_id: int, *, active: bool) -> bool:
        self._cur.execute(
            """
            UPDATE users u
            JOIN staff s ON s.user_id = u.user_id
            SET u.active=%s
            WHERE u.user_id=%s
            """,
            (int(active), int(staff_id)),
        )
        return self._cur.rowcount > 0

    def delete(self, staff_id: int) -> bool:
        self._cur.execute("DELETE FROM staff WHERE user_id=%s", (int(staff_id),))
        if self._cur.rowcount == 0:
            return False
        self._cur.execute("DELETE FROM users WHERE user_id=%s", (int(staff_id),))
        return self._cur.rowcount > 0
