from __future__ import annotations

from typing import Optional, Sequence

from ..database.mysql_base import fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


def _to_department(row) -> Department:
    return Department(department_id=int(row["department_id"]), name=row["name"])


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, department_id: int) -> Optional[Department]:
        self._cur.execute(
            "SELECT department_id, name FROM departments WHERE department_id=%s",
            (int(department_id),),
        )
        row = fetchone(self._cur)
        return _to_department(row) if row else None

    def get_by_name(self, name: str) -> Optional[Department]:
        # departments.name uses a binary collation, so '=' is case-sensitive.
        self._cur.execute("SELECT department_id, name FROM departments WHERE name=%s", (name,))
        row = fetchone(self._cur)
        return _to_department(row) if row else None

    def name_exists(self, name: str) -> bool:
        self._cur.execute("SELECT 1 AS found FROM departments WHERE name=%s LIMIT 1", (name,))
        return fetchone(self._cur) is not None

    def search_by_name(self, name_part: str) -> Sequence[Department]:
        self._cur.execute(
            """
            SELECT department_id, name FROM departments
            WHERE LOWER(name) LIKE CONCAT('%%', LOWER(%s), '%%')
            ORDER BY name
            """,
            (name_part,),
        )
        return [_to_department(r) for r in fetchall(self._cur)]

    def list_all(self) -> Sequence[Department]:
        self._cur.execute("SELECT department_id, name FROM departments ORDER BY name")
        return [_to_department(r) for r in fetchall(self._cur)]

    def list_with_staff(self) -> Sequence[Department]:
        self._cur.execute(
            """
            SELECT d.department_id, d.name
            FROM departments d
            WHERE EXISTS (SELECT 1 FROM staff s WHERE s.department_id = d.department_id)
            ORDER BY d.name
            """
        )
        return [_to_department(r) for r in fetchall(self._cur)]

    def list_empty(self) -> Sequence[Department]:
        self._cur.execute(
            """
            SELECT d.department_id, d.name
            FROM departments d
            WHERE NOT EXISTS (SELECT 1 FROM staff s WHERE s.department_id = d.department_id)
            ORDER BY d.name
            """
        )
        return [_to_department(r) for r in fetchall(self._cur)]

    def create(self, *, name: str) -> int:
        self._cur.execute("INSERT INTO departments(name) VALUES(%s)", (name,))
        return int(self._cur.lastrowid)

    def rename(self, *, department_id: int, name: str) -> bool:
        self._cur.execute(
            "UPDATE departments SET name=%s WHERE department_id=%s",
            (name, int(department_id)),
        )
        return self._cur.rowcount > 0

    def delete(self, department_id: int) -> bool:
        self._cur.execute("DELETE FROM departments WHERE department_id=%s", (int(department_id),))
        return self._cur.rowcount > 0
