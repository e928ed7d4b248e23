from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .contracts.service import ContractService
from .core.constants import LONG_TOKEN_EXPIRY_SECONDS, SHORT_TOKEN_EXPIRY_SECONDS
from .database.bootstrap import db_config_from_dict
from .database.connection import DatabaseConnection
from .database.unit_of_work import UnitOfWorkFactory, mysql_uow_factory
from .departments.service import DepartmentService
from .reports.service import NotificationService, ReportService
from .staff.service import StaffService
from .users.service import AdminService, AuthService


@dataclass(frozen=True)
class Container:
    uow_factory: UnitOfWorkFactory

    auth_service: AuthService
    admin_service: AdminService
    department_service: DepartmentService
    staff_service: StaffService
    contract_service: ContractService
    attendance_service: AttendanceService
    report_service: ReportService
    notification_service: NotificationService


def build_container(
    *,
    secret_key: str,
    db_config: Optional[dict] = None,
    uow_factory: Optional[UnitOfWorkFactory] = None,
    short_expiry_seconds: int = SHORT_TOKEN_EXPIRY_SECONDS,
    long_expiry_seconds: int = LONG_TOKEN_EXPIRY_SECONDS,
) -> Container:
    """Wire services onto one unit-of-work factory.

    Production passes ``db_config`` (MySQL); tests pass an in-memory ``uow_factory``.
    """

    if uow_factory is None:
        if db_config is None:
            raise ValueError("Either db_config or uow_factory is required")
        uow_factory = mysql_uow_factory(DatabaseConnection.get_instance(db_config_from_dict(db_config)))

    return Container(
        uow_factory=uow_factory,
        auth_service=AuthService(
            uow_factory,
            secret_key=secret_key,
            short_expiry_seconds=short_expiry_seconds,
            long_expiry_seconds=long_expiry_seconds,
        ),
        admin_service=AdminService(uow_factory),
        department_service=DepartmentService(uow_factory),
        staff_service=StaffService(uow_factory),
        contract_service=ContractService(uow_factory),
        attendance_service=AttendanceService(uow_factory),
        report_service=ReportService(uow_factory),
        notification_service=NotificationService(uow_factory),
    )
