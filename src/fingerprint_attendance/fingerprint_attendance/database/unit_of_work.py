from __future__ import annotations

from contextlib import ExitStack
from typing import Callable, Optional, Protocol

from ..attendance.mysql_attendance_repository import MySQLAttendanceRepository
from ..attendance.repository import AttendanceRepository
from ..contracts.mysql_contract_repository import MySQLContractRepository
from ..contracts.repository import ContractRepository
from ..departments.mysql_department_repository import MySQLDepartmentRepository
from ..departments.repository import DepartmentRepository
from ..fingerprints.mysql_fingerprint_repository import MySQLFingerprintRepository
from ..fingerprints.repository import FingerprintRepository
from ..reports.mysql_report_repository import MySQLNotificationRepository, MySQLReportRepository
from ..reports.repository import NotificationRepository, ReportRepository
from ..staff.mysql_staff_repository import MySQLStaffRepository
from ..staff.repository import StaffRepository
from ..users.mysql_user_repository import MySQLUserRepository
from ..users.repository import UserRepository
from .connection import DatabaseConnection
from .mysql_base import transaction


class UnitOfWork(Protocol):
    """Transaction boundary shared by every repository used in one operation.

    Services open it with ``with uow_factory() as uow:``; leaving the block
    normally commits, leaving it with an exception rolls everything back.
    """

    users: UserRepository
    staff: StaffRepository
    departments: DepartmentRepository
    contracts: ContractRepository
    fingerprints: FingerprintRepository
    attendance: AttendanceRepository
    reports: ReportRepository
    notifications: NotificationRepository

    def __enter__(self) -> "UnitOfWork":
        raise NotImplementedError

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        raise NotImplementedError


UnitOfWorkFactory = Callable[[], UnitOfWork]


class MySQLUnitOfWork:
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory
        self._stack: Optional[ExitStack] = None

    def __enter__(self) -> "MySQLUnitOfWork":
        stack = ExitStack()
        _, cur = stack.enter_context(transaction(self._conn_factory))
        self._stack = stack

        self.users = MySQLUserRepository(cur)
        self.staff = MySQLStaffRepository(cur)
        self.departments = MySQLDepartmentRepository(cur)
        self.contracts = MySQLContractRepository(cur)
        self.fingerprints = MySQLFingerprintRepository(cur)
        self.attendance = MySQLAttendanceRepository(cur)
        self.reports = MySQLReportRepository(cur)
        self.notifications = MySQLNotificationRepository(cur)
        return self

    def __exit__(self, exc_type, exc, tb) -> Optional[bool]:
        stack, self._stack = self._stack, None
        if stack is None:
            return None
        return stack.__exit__(exc_type, exc, tb)


def mysql_uow_factory(conn_factory: DatabaseConnection) -> UnitOfWorkFactory:
    return lambda: MySQLUnitOfWork(conn_factory)
