from __future__ import annotations

import logging
from typing import List

from ..common.validators import require_length_between
from ..core.constants import DEPARTMENT_NAME_MAX_LENGTH, DEPARTMENT_NAME_MIN_LENGTH
from ..core.exceptions import DepartmentNotEmptyError, DuplicateError, NotFoundError
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from ..staff.cascade import delete_staff_cascade
from .model import Department, DepartmentDetail, DepartmentView, StaffSummary

logger = logging.getLogger(__name__)


def _validate_name(name: str) -> str:
    return require_length_between(name, "Department name", DEPARTMENT_NAME_MIN_LENGTH, DEPARTMENT_NAME_MAX_LENGTH)


class DepartmentService:
    """Use case: manage departments and guard them against deletion while staffed.

    Uniqueness is an exact, case-sensitive match; ``search_departments`` is a
    case-insensitive substring search meant for discovery only.
    """

    def __init__(self, uow: UnitOfWorkFactory):
        self._uow = uow

    def create_department(self, name: str) -> DepartmentView:
        name = _validate_name(name)
        logger.info("Creating new department with name: %s", name)
        with self._uow() as uow:
            if uow.departments.name_exists(name):
                logger.warning("Department creation failed: Name already exists: %s", name)
                raise DuplicateError(f"Department name already exists: {name}")
            department_id = uow.departments.create(name=name)
            logger.info("Department created: %s (ID: %s)", name, department_id)
            return self._to_view(uow, Department(department_id=department_id, name=name))

    def get_department(self, department_id: int) -> DepartmentView:
        with self._uow() as uow:
            return self._to_view(uow, self._require(uow, department_id))

    def get_statistics(self, department_id: int) -> DepartmentView:
        return self.get_department(department_id)

    def get_department_by_name(self, name: str) -> DepartmentView:
        with self._uow() as uow:
            department = uow.departments.get_by_name(name)
            if not department:
                raise NotFoundError(f"Department not found with name: {name}")
            return self._to_view(uow, department)

    def get_department_details(self, department_id: int) -> DepartmentDetail:
        with self._uow() as uow:
            department = self._require(uow, department_id)
            staff = uow.staff.list_by_department(department.department_id)
            summaries = [
                StaffSummary(
                    user_id=s.user_id,
                    full_name=s.full_name,
                    email=s.email,
                    active=s.active,
                    absence_count=s.details.absence_count,
                )
                for s in staff
            ]
            return DepartmentDetail(
                department_id=department.department_id,
                name=department.name,
                total_staff=len(summaries),
                active_staff=sum(1 for s in summaries if s.active),
                total_reports=uow.reports.count_by_department(department.department_id),
                staff=summaries,
            )

    def list_departments(self) -> List[DepartmentView]:
        with self._uow() as uow:
            return [self._to_view(uow, d) for d in uow.departments.list_all()]

    def search_departments(self, name_part: str) -> List[DepartmentView]:
        logger.debug("Searching departments with name containing: %s", name_part)
        with self._uow() as uow:
            return [self._to_view(uow, d) for d in uow.departments.search_by_name(name_part or "")]

    def list_departments_with_staff(self) -> List[DepartmentView]:
        with self._uow() as uow:
            return [self._to_view(uow, d) for d in uow.departments.list_with_staff()]

    def list_empty_departments(self) -> List[DepartmentView]:
        with self._uow() as uow:
            return [self._to_view(uow, d) for d in uow.departments.list_empty()]

    def name_exists(self, name: str) -> bool:
        with self._uow() as uow:
            return uow.departments.name_exists(name)

    def update_department(self, department_id: int, name: str) -> DepartmentView:
        name = _validate_name(name)
        logger.info("Updating department with ID: %s", department_id)
        with self._uow() as uow:
            department = self._require(uow, department_id)
            if name != department.name:
                if uow.departments.name_exists(name):
                    logger.warning("Update failed: Department name already exists: %s", name)
                    raise DuplicateError(f"Department name already exists: {name}")
                uow.departments.rename(department_id=department.department_id, name=name)
            logger.info("Department updated: %s (ID: %s)", name, department_id)
            return self._to_view(uow, Department(department_id=department.department_id, name=name))

    def delete_department(self, department_id: int) -> None:
        logger.info("Deleting department with ID: %s", department_id)
        with self._uow() as uow:
            department = self._require(uow, department_id)
            staff_count = uow.staff.count_by_department(department.department_id)
            if staff_count:
                logger.warning("Deletion failed: Department %s has %s staff members", department_id, staff_count)
                raise DepartmentNotEmptyError(department.department_id, staff_count)
            uow.reports.delete_for_department(department.department_id)
            uow.departments.delete(department.department_id)
        logger.info("Department deleted: %s (ID: %s)", department.name, department_id)

    def force_delete_department(self, department_id: int) -> int:
        """Delete the department with all its staff, their children and its reports.

        Returns the number of staff members removed.
        """

        logger.warning("Force deleting department with ID: %s", department_id)
        with self._uow() as uow:
            department = self._require(uow, department_id)
            staff = uow.staff.list_by_department(department.department_id)
            for member in staff:
                delete_staff_cascade(uow, member.user_id)
            reports = uow.reports.delete_for_department(department.department_id)
            uow.departments.delete(department.department_id)
        logger.warning(
            "Department force deleted with %s staff members and %s reports: %s (ID: %s)",
            len(staff),
            reports,
            department.name,
            department_id,
        )
        return len(staff)

    @staticmethod
    def _require(uow: UnitOfWork, department_id: int) -> Department:
        department = uow.departments.get_by_id(department_id)
        if not department:
            logger.warning("Department not found with ID: %s", department_id)
            raise NotFoundError(f"Department not found with ID: {department_id}")
        return department

    @staticmethod
    def _to_view(uow: UnitOfWork, department: Department) -> DepartmentView:
        staff = uow.staff.list_by_department(department.department_id)
        return DepartmentView(
            department_id=department.department_id,
            name=department.name,
            total_staff=len(staff),
            active_staff=sum(1 for s in staff if s.active),
            total_reports=uow.reports.count_by_department(department.department_id),
        )
