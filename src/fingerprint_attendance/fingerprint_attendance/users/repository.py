from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Person


class UserRepository(Protocol):
    """Repository for the shared identity table and the admin specialization.

    Note: email uniqueness spans admins and staff, so it is checked here.
    """

    def get_by_id(self, user_id: int) -> Optional[Person]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Person]:
        raise NotImplementedError

    def email_exists(self, email: str, *, exclude_user_id: Optional[int] = None) -> bool:
        raise NotImplementedError

    def list_admins(self) -> Sequence[Person]:
        raise NotImplementedError

    def create_admin(self, *, name: str, surname: str, email: str, password_hash: str, active: bool) -> int:
        raise NotImplementedError

    def update_identity(self, *, user_id: int, name: str, surname: str, email: str, active: bool) -> bool:
        raise NotImplementedError

    def set_active(self, user_id: int, *, active: bool) -> bool:
        raise NotImplementedError

    def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_admin(self, user_id: int) -> bool:
        raise NotImplementedError
