from __future__ import annotations

from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class Department:
    department_id: int
    name: str


@dataclass(frozen=True)
class DepartmentView:
    """Department with statistics computed from the live owned collections."""

    department_id: int
    name: str
    total_staff: int
    active_staff: int
    total_reports: int


@dataclass(frozen=True)
class StaffSummary:
    user_id: int
    full_name: str
    email: str
    active: bool
    absence_count: int


@dataclass(frozen=True)
class DepartmentDetail:
    department_id: int
    name: str
    total_staff: int
    active_staff: int
    total_reports: int
    staff: List[StaffSummary] = field(default_factory=list)
