from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.mysql_base import fetchall, fetchone
from .model import AdminDetails, Person, StaffDetails
from .repository import UserRepository

PERSON_SELECT = """
    SELECT u.user_id, u.name, u.surname, u.email, u.role, u.active,
           a.password_hash,
           s.absence_count, s.department_id
    FROM users u
    LEFT JOIN admins a ON a.user_id = u.user_id
    LEFT JOIN staff s ON s.user_id = u.user_id
"""


def row_to_person(row: Dict[str, Any]) -> Person:
    role = Role(row["role"])
    if role == Role.ADMIN:
        details = AdminDetails(password_hash=row.get("password_hash") or "")
    else:
        details = StaffDetails(
            absence_count=int(row.get("absence_count") or 0),
            department_id=int(row["department_id"]),
        )
    return Person(
        user_id=int(row["user_id"]),
        name=row["name"],
        surname=row["surname"],
        email=row["email"],
        role=role,
        active=bool(row.get("active", True)),
        details=details,
    )


class MySQLUserRepository(UserRepository):
    def __init__(self, cur):
        self._cur = cur

    def get_by_id(self, user_id: int) -> Optional[Person]:
        self._cur.execute(PERSON_SELECT + " WHERE u.user_id=%s", (int(user_id),))
        row = fetchone(self._cur)
        return row_to_person(row) if row else None

    def get_by_email(self, email: str) -> Optional[Person]:
        self._cur.execute(PERSON_SELECT + " WHERE u.email=%s", (email,))
        row = fetchone(self._cur)
        return row_to_person(row) if row else None

    def email_exists(self, email: str, *, exclude_user_id: Optional[int] = None) -> bool:
        if exclude_user_id is None:
            self._cur.execute("SELECT 1 AS found FROM users WHERE email=%s LIMIT 1", (email,))
        else:
            self._cur.execute(
                "SELECT 1 AS found FROM users WHERE email=%s AND user_id<>%s LIMIT 1",
                (email, int(exclude_user_id)),
            )
        return fetchone(self._cur) is not None

    def list_admins(self) -> Sequence[Person]:
        self._cur.execute(PERSON_SELECT + " WHERE u.role=%s ORDER BY u.user_id", (Role.ADMIN.value,))
        return [row_to_person(r) for r in fetchall(self._cur)]

    def create_admin(self, *, name: str, surname: str, email: str, password_hash: str, active: bool) -> int:
        self._cur.execute(
            """
            INSERT INTO users(name, surname, email, role, active)
            VALUES(%s,%s,%s,%s,%s)
            """,
            (name, surname, email, Role.ADMIN.value, int(active)),
        )
        user_id = int(self._cur.lastrowid)
        self._cur.execute(
            "INSERT INTO admins(user_id, password_hash) VALUES(%s,%s)",
            (user_id, password_hash),
        )
        return user_id

    def update_identity(self, *, user_id: int, name: str, surname: str, email: str, active: bool) -> bool:
        self._cur.execute(
            """
            UPDATE users
            SET name=%s, surname=%s, email=%s, active=%s
            WHERE user_id=%s
            """,
            (name, surname, email, int(active), int(user_id)),
        )
        return self._cur.rowcount > 0

    def set_active(self, user_id: int, *, active: bool) -> bool:
        self._cur.execute("UPDATE users SET active=%s WHERE user_id=%s", (int(active), int(user_id)))
        return self._cur.rowcount > 0

    def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        self._cur.execute("UPDATE admins SET password_hash=%s WHERE user_id=%s", (password_hash, int(user_id)))
        return self._cur.rowcount > 0

    def delete_admin(self, user_id: int) -> bool:
        self._cur.execute("DELETE FROM admins WHERE user_id=%s", (int(user_id),))
        self._cur.execute("DELETE FROM users WHERE user_id=%s AND role=%s", (int(user_id), Role.ADMIN.value))
        return self._cur.rowcount > 0
