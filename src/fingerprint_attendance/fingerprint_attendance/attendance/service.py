from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Dict, List, Optional, Sequence

from ..common.validators import require_non_empty, require_present
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError, TransientError
from ..database.unit_of_work import UnitOfWork, UnitOfWorkFactory
from ..departments.model import Department
from ..users.model import Person
from .model import AttendanceRecord, AttendanceView

logger = logging.getLogger(__name__)


class AttendanceService:
    """Turns raw "staff X touched the sensor at T on D" events into attendance rows.

    Per (staff, date) the record moves NO_RECORD -> ARRIVED -> COMPLETE; a
    further event on a COMPLETE pair is rejected with ConflictError.
    """

    def __init__(self, uow: UnitOfWorkFactory):
        self._uow = uow

    def record_event(self, staff_id: int, attendance_date: date, timestamp: datetime) -> AttendanceView:
        require_present(staff_id, "Staff ID")
        require_present(attendance_date, "Attendance date")
        require_present(timestamp, "Attendance time")

        logger.info("Recording attendance for staff ID: %s on date: %s", staff_id, attendance_date)
        with self._uow() as uow:
            return self._record(uow, int(staff_id), attendance_date, timestamp)

    def record_fingerprint_event(self, finger_code: str, attendance_date: date, timestamp: datetime) -> AttendanceView:
        code = require_non_empty(finger_code, "Fingerprint code")
        require_present(attendance_date, "Attendance date")
        require_present(timestamp, "Attendance time")

        with self._uow() as uow:
            fingerprint = uow.fingerprints.get_by_code(code)
            if not fingerprint:
                logger.warning("Unknown fingerprint code presented on %s", attendance_date)
                raise NotFoundError(f"No staff registered for fingerprint code: {code}")
            return self._record(uow, fingerprint.user_id, attendance_date, timestamp)

    def _record(self, uow: UnitOfWork, staff_id: int, attendance_date: date, timestamp: datetime) -> AttendanceView:
        # Locking the staff row serializes concurrent events for the same staff member.
        staff = uow.staff.get_by_id(staff_id, for_update=True)
        if not staff:
            raise NotFoundError(f"Staff not found with ID: {staff_id}")

        existing = uow.attendance.get_for_staff_and_date(staff_id, attendance_date, for_update=True)

        if existing is None:
            attendance_id = uow.attendance.create_arrival(
                staff_id=staff_id,
                attendance_date=attendance_date,
                arrival_time=timestamp,
            )
            status = AttendanceStatus.ARRIVAL_RECORDED
            logger.info("Created attendance %s with arrival for staff ID: %s", attendance_id, staff_id)
        elif existing.arrival_time is None and existing.departure_time is not None:
            logger.warning(
                "Attendance anomaly: record %s for staff ID %s on %s has a departure but no arrival; rejecting event",
                existing.attendance_id,
                staff_id,
                attendance_date,
            )
            raise ConflictError(
                f"Attendance record {existing.attendance_id} has a departure without an arrival; fix it before recording"
            )
        elif existing.arrival_time is None:
            logger.warning(
                "Attendance anomaly: record %s for staff ID %s on %s has no arrival time; recording arrival",
                existing.attendance_id,
                staff_id,
                attendance_date,
            )
            attendance_id = existing.attendance_id
            if not uow.attendance.set_arrival(attendance_id=attendance_id, arrival_time=timestamp):
                raise TransientError(f"Attendance {attendance_id} changed concurrently, retry the event")
            status = AttendanceStatus.ARRIVAL_RECORDED
        elif existing.departure_time is None:
            attendance_id = existing.attendance_id
            if not uow.attendance.set_departure(attendance_id=attendance_id, departure_time=timestamp):
                raise TransientError(f"Attendance {attendance_id} changed concurrently, retry the event")
            status = AttendanceStatus.DEPARTURE_RECORDED
            logger.info("Recorded departure on attendance %s for staff ID: %s", attendance_id, staff_id)
        else:
            logger.warning(
                "Rejected attendance event: record %s already complete for staff ID %s on %s",
                existing.attendance_id,
                staff_id,
                attendance_date,
            )
            raise ConflictError(f"Attendance already complete for staff ID: {staff_id} on date: {attendance_date}")

        record = uow.attendance.get_by_id(attendance_id)
        if record is None:
            raise TransientError(f"Attendance {attendance_id} disappeared before it could be read back")
        department = uow.departments.get_by_id(staff.details.department_id)
        return self._to_view(record, staff, department, status=status)

    def get_attendance(self, attendance_id: int) -> AttendanceView:
        with self._uow() as uow:
            record = uow.attendance.get_by_id(attendance_id)
            if not record:
                raise NotFoundError(f"Attendance not found with ID: {attendance_id}")
            return self._views(uow, [record])[0]

    def list_all(self) -> List[AttendanceView]:
        with self._uow() as uow:
            return self._views(uow, uow.attendance.list_all())

    def list_by_date(self, attendance_date: date) -> List[AttendanceView]:
        logger.debug("Fetching attendance for date: %s", attendance_date)
        with self._uow() as uow:
            return self._views(uow, uow.attendance.list_by_date(attendance_date))

    def list_by_staff(self, staff_id: int) -> List[AttendanceView]:
        with self._uow() as uow:
            if not uow.staff.get_by_id(staff_id):
                raise NotFoundError(f"Staff not found with ID: {staff_id}")
            return self._views(uow, uow.attendance.list_by_staff(staff_id))

    def list_by_department(self, department_id: int) -> List[AttendanceView]:
        with self._uow() as uow:
            if not uow.departments.get_by_id(department_id):
                raise NotFoundError(f"Department not found with ID: {department_id}")
            return self._views(uow, uow.attendance.list_by_department(department_id))

    def list_for_staff_and_date(self, staff_id: int, attendance_date: date) -> List[AttendanceView]:
        with self._uow() as uow:
            record = uow.attendance.get_for_staff_and_date(staff_id, attendance_date)
            return self._views(uow, [record] if record else [])

    def list_by_date_and_arrival(self, attendance_date: date, arrival_time: datetime) -> List[AttendanceView]:
        with self._uow() as uow:
            return self._views(uow, uow.attendance.list_by_date_and_arrival(attendance_date, arrival_time))

    def list_by_date_and_departure(self, attendance_date: date, departure_time: datetime) -> List[AttendanceView]:
        with self._uow() as uow:
            return self._views(uow, uow.attendance.list_by_date_and_departure(attendance_date, departure_time))

    def _views(self, uow: UnitOfWork, records: Sequence[AttendanceRecord]) -> List[AttendanceView]:
        staff_by_id: Dict[int, Optional[Person]] = {}
        departments: Dict[int, Optional[Department]] = {}
        out: List[AttendanceView] = []
        for record in records:
            if record.staff_id not in staff_by_id:
                staff_by_id[record.staff_id] = uow.staff.get_by_id(record.staff_id)
            staff = staff_by_id[record.staff_id]
            if staff is None:
                raise NotFoundError(f"Staff not found with ID: {record.staff_id}")

            dept_id = staff.details.department_id
            if dept_id not in departments:
                departments[dept_id] = uow.departments.get_by_id(dept_id)
            out.append(self._to_view(record, staff, departments[dept_id]))
        return out

    @staticmethod
    def _to_view(
        record: AttendanceRecord,
        staff: Person,
        department: Optional[Department],
        *,
        status: Optional[AttendanceStatus] = None,
    ) -> AttendanceView:
        return AttendanceView(
            attendance_id=record.attendance_id,
            attendance_date=record.attendance_date,
            arrival_time=record.arrival_time,
            departure_time=record.departure_time,
            staff_id=staff.user_id,
            staff_name=staff.name,
            staff_surname=staff.surname,
            staff_email=staff.email,
            department_id=department.department_id if department else None,
            department_name=department.name if department else None,
            status=status or record.status,
        )
