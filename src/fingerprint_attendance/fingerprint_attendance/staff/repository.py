from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from ..users.model import Person


class StaffRepository(Protocol):
    def get_by_id(self, staff_id: int, *, for_update: bool = False) -> Optional[Person]:
        """Return the staff member; ``for_update`` locks the row until commit."""

        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Person]:
        raise NotImplementedError

    def list_all(self, *, active_only: bool = False) -> Sequence[Person]:
        raise NotImplementedError

    def list_by_department(self, department_id: int, *, active_only: bool = False) -> Sequence[Person]:
        raise NotImplementedError

    def count_by_department(self, department_id: int) -> int:
        raise NotImplementedError

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
        raise NotImplementedError

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
        raise NotImplementedError

    def set_absence_count(self, staff_id: int, absence_count: int) -> bool:
        raise NotImplementedError

    def set_active(self, staff_id: int, *, active: bool) -> bool:
        raise NotImplementedError

    def delete(self, staff_id: int) -> bool:
        """Delete the staff row and its identity row. Children must be gone already."""

        raise NotImplementedError
