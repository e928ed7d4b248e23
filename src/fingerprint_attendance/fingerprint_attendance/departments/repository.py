from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Department


class DepartmentRepository(Protocol):
    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError

    def get_by_name(self, name: str) -> Optional[Department]:
        """Exact, case-sensitive match."""

        raise NotImplementedError

    def name_exists(self, name: str) -> bool:
        raise NotImplementedError

    def search_by_name(self, name_part: str) -> Sequence[Department]:
        """Case-insensitive substring search, for discovery only."""

        raise NotImplementedError

    def list_all(self) -> Sequence[Department]:
        raise NotImplementedError

    def list_with_staff(self) -> Sequence[Department]:
        raise NotImplementedError

    def list_empty(self) -> Sequence[Department]:
        raise NotImplementedError

    def create(self, *, name: str) -> int:
        raise NotImplementedError

    def rename(self, *, department_id: int, name: str) -> bool:
        raise NotImplementedError

    def delete(self, department_id: int) -> bool:
        raise NotImplementedError
