from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from ..core.enums import Role


@dataclass(frozen=True)
class AdminDetails:
    password_hash: str


@dataclass(frozen=True)
class StaffDetails:
    absence_count: int
    department_id: int


@dataclass(frozen=True)
class Person:
    """Domain entity: one user row plus its role-specific payload.

    Note: This is a plain data object (no DB access). ``details`` is
    AdminDetails for admins and StaffDetails for staff.
    """

    user_id: int
    name: str
    surname: str
    email: str
    role: Role
    active: bool
    details: Union[AdminDetails, StaffDetails]

    @property
    def full_name(self) -> str:
        return f"{self.name} {self.surname}".strip()

    @property
    def is_admin(self) -> bool:
        return isinstance(self.details, AdminDetails)

    @property
    def is_staff(self) -> bool:
        return isinstance(self.details, StaffDetails)


@dataclass(frozen=True)
class AdminView:
    """Admin projection returned to callers. Never carries the password hash."""

    user_id: int
    name: str
    surname: str
    full_name: str
    email: str
    role: Role
    active: bool


@dataclass(frozen=True)
class AdminUpdate:
    name: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[str] = None
    active: Optional[bool] = None


@dataclass(frozen=True)
class Principal:
    """Authenticated identity attached to a request by the auth boundary."""

    user_id: int
    email: str
    role: Role


@dataclass(frozen=True)
class IssuedToken:
    access_token: str
    token_type: str
    expires_in: int
    issued_at: datetime
    expires_at: datetime
    user_id: int
    email: str
    full_name: str
    role: Role
