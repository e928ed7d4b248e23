from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class ContractTerms:
    """Contract data supplied when a staff member is hired."""

    days_per_week: int
    start_time: datetime
    end_time: datetime


@dataclass(frozen=True)
class StaffUpdate:
    """Partial update: fields left as None are not touched."""

    name: Optional[str] = None
    surname: Optional[str] = None
    email: Optional[str] = None
    department_id: Optional[int] = None
    absence_count: Optional[int] = None
    active: Optional[bool] = None


@dataclass(frozen=True)
class StaffView:
    user_id: int
    name: str
    surname: str
    full_name: str
    email: str
    role: Role
    active: bool
    absence_count: int
    department_id: Optional[int]
    department_name: Optional[str]
    contract_id: Optional[int]
    contract_status: str
    total_attendances: int
    fingerprint_registered: bool
