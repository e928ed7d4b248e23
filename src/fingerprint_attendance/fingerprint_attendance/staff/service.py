from __future__ import annotations

import logging
from typing import List, Optional

from ..common.datetime_utils import today_local
from ..common.validators import (
    require_email,
    require_int_between,
    require_non_empty,
    require_non_negative,
    require_ordered,
    require_present,
)
from ..core.constants import CONTRACT_ACTIVE, CONTRACT_MISSING, MAX_DAYS_PER_WEEK, MIN_DAYS_PER_WEEK
from ..core.enums import Role
from ..core.exceptions import DuplicateError, NotFoundError, ValidationError
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from ..fingerprints.model import Fingerprint
from ..users.model import Person
from .cascade import delete_staff_cascade
from .model import ContractTerms, StaffUpdate, StaffView

logger = logging.getLogger(__name__)


class StaffService:
    """Use case: manage staff members, each bound to one department and one contract."""

    def __init__(self, uow: UnitOfWorkFactory):
        self._uow = uow

    def create_staff(
        self,
        *,
        name: str,
        surname: str,
        email: str,
        department_id: int,
        contract: ContractTerms,
        role: Role = Role.STAFF,
        active: bool = True,
        absence_count: int = 0,
    ) -> StaffView:
        name = require_non_empty(name, "Name")
        surname = require_non_empty(surname, "Surname")
        email = require_email(email)
        require_present(department_id, "Department ID")
        absence_count = require_non_negative(absence_count, "Absence count")
        if role != Role.STAFF:
            raise ValidationError("Admin accounts cannot be created as staff")
        require_present(contract, "Contract")
        days_per_week = require_int_between(
            contract.days_per_week, "Contract days per week", MIN_DAYS_PER_WEEK, MAX_DAYS_PER_WEEK
        )
        require_present(contract.start_time, "Contract start time")
        require_present(contract.end_time, "Contract end time")
        require_ordered(
            contract.start_time, contract.end_time, start_name="Contract start time", end_name="Contract end time"
        )

        logger.info("Creating new staff with email: %s", email)
        with self._uow() as uow:
            if uow.users.email_exists(email):
                logger.warning("Staff creation failed: Email already exists: %s", email)
                raise DuplicateError(f"Email already registered: {email}")

            if not uow.departments.get_by_id(department_id):
                logger.warning("Staff creation failed: Department not found: %s", department_id)
                raise NotFoundError(f"Department not found with ID: {department_id}")

            staff_id = uow.staff.create(
                name=name,
                surname=surname,
                email=email,
                role=role,
                active=bool(active),
                absence_count=absence_count,
                department_id=int(department_id),
            )
            contract_id = uow.contracts.create(
                staff_id=staff_id,
                days_per_week=days_per_week,
                start_time=contract.start_time,
                end_time=contract.end_time,
                contract_date=today_local(),
            )
            logger.info("Staff created: %s (ID: %s) with contract ID: %s", email, staff_id, contract_id)
            return self._to_view(uow, self._require(uow, staff_id))

    def get_staff(self, staff_id: int) -> StaffView:
        logger.debug("Fetching staff with ID: %s", staff_id)
        with self._uow() as uow:
            return self._to_view(uow, self._require(uow, staff_id))

    def get_staff_by_email(self, email: str) -> Optional[StaffView]:
        with self._uow() as uow:
            staff = uow.staff.get_by_email(email)
            return self._to_view(uow, staff) if staff else None

    def list_staff(self) -> List[StaffView]:
        with self._uow() as uow:
            return [self._to_view(uow, s) for s in uow.staff.list_all()]

    def list_active_staff(self) -> List[StaffView]:
        with self._uow() as uow:
            return [self._to_view(uow, s) for s in uow.staff.list_all(active_only=True)]

    def list_by_department(self, department_id: int) -> List[StaffView]:
        with self._uow() as uow:
            self._require_department(uow, department_id)
            return [self._to_view(uow, s) for s in uow.staff.list_by_department(department_id)]

    def list_active_by_department(self, department_id: int) -> List[StaffView]:
        with self._uow() as uow:
            self._require_department(uow, department_id)
            return [self._to_view(uow, s) for s in uow.staff.list_by_department(department_id, active_only=True)]

    def count_by_department(self, department_id: int) -> int:
        with self._uow() as uow:
            return uow.staff.count_by_department(department_id)

    def email_exists(self, email: str) -> bool:
        with self._uow() as uow:
            return uow.users.email_exists(email)

    def update_staff(self, staff_id: int, update: StaffUpdate) -> StaffView:
        logger.info("Updating staff with ID: %s", staff_id)
        with self._uow() as uow:
            staff = self._require(uow, staff_id, for_update=True)
            details = staff.details

            name = require_non_empty(update.name, "Name") if update.name is not None else staff.name
            surname = require_non_empty(update.surname, "Surname") if update.surname is not None else staff.surname

            email = staff.email
            if update.email is not None:
                email = require_email(update.email)
                if email != staff.email and uow.users.email_exists(email, exclude_user_id=staff.user_id):
                    logger.warning("Update failed: Email already in use: %s", email)
                    raise DuplicateError(f"Email already in use by another user: {email}")

            department_id = details.department_id
            if update.department_id is not None:
                self._require_department(uow, update.department_id)
                department_id = int(update.department_id)

            absence_count = details.absence_count
            if update.absence_count is not None:
                absence_count = require_non_negative(update.absence_count, "Absence count")

            active = staff.active if update.active is None else bool(update.active)

            uow.staff.update(
                staff_id=staff.user_id,
                name=name,
                surname=surname,
                email=email,
                active=active,
                absence_count=absence_count,
                department_id=department_id,
            )
            logger.info("Staff updated: %s (ID: %s)", email, staff_id)
            return self._to_view(uow, self._require(uow, staff_id))

    def increment_absence(self, staff_id: int) -> StaffView:
        with self._uow() as uow:
            staff = self._require(uow, staff_id, for_update=True)
            new_count = staff.details.absence_count + 1
            uow.staff.set_absence_count(staff.user_id, new_count)
            logger.info("Absence incremented for staff ID: %s. New count: %s", staff_id, new_count)
            return self._to_view(uow, self._require(uow, staff_id))

    def reset_absence(self, staff_id: int) -> StaffView:
        with self._uow() as uow:
            staff = self._require(uow, staff_id, for_update=True)
            uow.staff.set_absence_count(staff.user_id, 0)
            logger.info("Absence reset for staff ID: %s", staff_id)
            return self._to_view(uow, self._require(uow, staff_id))

    def deactivate(self, staff_id: int) -> StaffView:
        return self._set_active(staff_id, active=False)

    def reactivate(self, staff_id: int) -> StaffView:
        return self._set_active(staff_id, active=True)

    def _set_active(self, staff_id: int, *, active: bool) -> StaffView:
        with self._uow() as uow:
            staff = self._require(uow, staff_id, for_update=True)
            uow.staff.set_active(staff.user_id, active=active)
            logger.info("Staff %s: %s (ID: %s)", "reactivated" if active else "deactivated", staff.email, staff_id)
            return self._to_view(uow, self._require(uow, staff_id))

    def delete_staff(self, staff_id: int) -> None:
        logger.info("Deleting staff with ID: %s", staff_id)
        with self._uow() as uow:
            self._require(uow, staff_id, for_update=True)
            removed = delete_staff_cascade(uow, staff_id)
        logger.info("Staff deleted with ID: %s (cascaded: %s)", staff_id, removed)

    def assign_fingerprint(self, staff_id: int, finger_code: str) -> Fingerprint:
        code = require_non_empty(finger_code, "Fingerprint code")
        with self._uow() as uow:
            staff = self._require(uow, staff_id, for_update=True)
            owner = uow.fingerprints.get_by_code(code)
            if owner and owner.user_id != staff.user_id:
                raise DuplicateError("Fingerprint code already registered to another user")

            current = uow.fingerprints.get_for_user(staff.user_id)
            if current:
                uow.fingerprints.update_code(finger_id=current.finger_id, finger_code=code)
                finger_id = current.finger_id
            else:
                finger_id = uow.fingerprints.create(user_id=staff.user_id, finger_code=code)
            logger.info("Fingerprint %s registered for staff ID: %s", finger_id, staff_id)
            return Fingerprint(finger_id=finger_id, finger_code=code, user_id=staff.user_id)

    def remove_fingerprint(self, staff_id: int) -> None:
        with self._uow() as uow:
            staff = self._require(uow, staff_id, for_update=True)
            if not uow.fingerprints.delete_for_user(staff.user_id):
                raise NotFoundError(f"No fingerprint registered for staff ID: {staff_id}")
        logger.info("Fingerprint removed for staff ID: %s", staff_id)

    @staticmethod
    def _require(uow: UnitOfWork, staff_id: int, *, for_update: bool = False) -> Person:
        staff = uow.staff.get_by_id(staff_id, for_update=for_update)
        if not staff:
            logger.warning("Staff not found with ID: %s", staff_id)
            raise NotFoundError(f"Staff not found with ID: {staff_id}")
        return staff

    @staticmethod
    def _require_department(uow: UnitOfWork, department_id: int) -> None:
        if not uow.departments.get_by_id(department_id):
            raise NotFoundError(f"Department not found with ID: {department_id}")

    @staticmethod
    def _to_view(uow: UnitOfWork, staff: Person) -> StaffView:
        details = staff.details
        department = uow.departments.get_by_id(details.department_id)
        contract = uow.contracts.get_for_staff(staff.user_id)
        return StaffView(
            user_id=staff.user_id,
            name=staff.name,
            surname=staff.surname,
            full_name=staff.full_name,
            email=staff.email,
            role=staff.role,
            active=staff.active,
            absence_count=details.absence_count,
            department_id=department.department_id if department else None,
            department_name=department.name if department else None,
            contract_id=contract.contract_id if contract else None,
            contract_status=CONTRACT_ACTIVE if contract else CONTRACT_MISSING,
            total_attendances=uow.attendance.count_for_staff(staff.user_id),
            fingerprint_registered=uow.fingerprints.get_for_user(staff.user_id) is not None,
        )
