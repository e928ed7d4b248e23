from __future__ import annotations

import copy
import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Dict, List, Optional

import pytest

from fingerprint_attendance.attendance.model import AttendanceRecord
from fingerprint_attendance.contracts.model import Contract
from fingerprint_attendance.core.enums import Role
from fingerprint_attendance.departments.model import Department
from fingerprint_attendance.fingerprints.model import Fingerprint
from fingerprint_attendance.reports.model import Notification, Report
from fingerprint_attendance.users.model import AdminDetails, Person, StaffDetails


@dataclass
class InMemoryStore:
    people: Dict[int, Person] = field(default_factory=dict)
    departments: Dict[int, Department] = field(default_factory=dict)
    contracts: Dict[int, Contract] = field(default_factory=dict)
    fingerprints: Dict[int, Fingerprint] = field(default_factory=dict)
    attendances: Dict[int, AttendanceRecord] = field(default_factory=dict)
    reports: Dict[int, Report] = field(default_factory=dict)
    notifications: Dict[int, Notification] = field(default_factory=dict)
    next_id: int = 0
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def new_id(self) -> int:
        self.next_id += 1
        return self.next_id

    def snapshot(self) -> dict:
        return {k: copy.copy(v) for k, v in vars(self).items() if k != "lock"}

    def restore(self, state: dict) -> None:
        for k, v in state.items():
            setattr(self, k, v)


class InMemoryUsers:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, user_id: int) -> Optional[Person]:
        return self._s.people.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[Person]:
        return next((p for p in self._s.people.values() if p.email == email), None)

    def email_exists(self, email: str, *, exclude_user_id: Optional[int] = None) -> bool:
        return any(p.email == email and p.user_id != exclude_user_id for p in self._s.people.values())

    def list_admins(self) -> List[Person]:
        return [p for p in self._s.people.values() if p.is_admin]

    def create_admin(self, *, name: str, surname: str, email: str, password_hash: str, active: bool) -> int:
        user_id = self._s.new_id()
        self._s.people[user_id] = Person(
            user_id=user_id,
            name=name,
            surname=surname,
            email=email,
            role=Role.ADMIN,
            active=active,
            details=AdminDetails(password_hash=password_hash),
        )
        return user_id

    def update_identity(self, *, user_id: int, name: str, surname: str, email: str, active: bool) -> bool:
        person = self._s.people.get(user_id)
        if not person:
            return False
        self._s.people[user_id] = replace(person, name=name, surname=surname, email=email, active=active)
        return True

    def set_active(self, user_id: int, *, active: bool) -> bool:
        person = self._s.people.get(user_id)
        if not person:
            return False
        self._s.people[user_id] = replace(person, active=active)
        return True

    def set_password_hash(self, user_id: int, password_hash: str) -> bool:
        person = self._s.people.get(user_id)
        if not person or not person.is_admin:
            return False
        self._s.people[user_id] = replace(person, details=AdminDetails(password_hash=password_hash))
        return True

    def delete_admin(self, user_id: int) -> bool:
        person = self._s.people.get(user_id)
        if not person or not person.is_admin:
            return False
        del self._s.people[user_id]
        return True


class InMemoryStaff:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, staff_id: int, *, for_update: bool = False) -> Optional[Person]:
        person = self._s.people.get(int(staff_id))
        return person if person and person.is_staff else None

    def get_by_email(self, email: str) -> Optional[Person]:
        return next((p for p in self._all() if p.email == email), None)

    def _all(self) -> List[Person]:
        return [p for p in self._s.people.values() if p.is_staff]

    def list_all(self, *, active_only: bool = False) -> List[Person]:
        return [p for p in self._all() if p.active or not active_only]

    def list_by_department(self, department_id: int, *, active_only: bool = False) -> List[Person]:
        return [
            p for p in self.list_all(active_only=active_only) if p.details.department_id == int(department_id)
        ]

    def count_by_department(self, department_id: int) -> int:
        return len(self.list_by_department(department_id))

    def create(self, *, name, surname, email, role, active, absence_count, department_id) -> int:
        staff_id = self._s.new_id()
        self._s.people[staff_id] = Person(
            user_id=staff_id,
            name=name,
            surname=surname,
            email=email,
            role=role,
            active=active,
            details=StaffDetails(absence_count=absence_count, department_id=department_id),
        )
        return staff_id

    def update(self, *, staff_id, name, surname, email, active, absence_count, department_id) -> bool:
        person = self.get_by_id(staff_id)
        if not person:
            return False
        self._s.people[staff_id] = replace(
            person,
            name=name,
            surname=surname,
            email=email,
            active=active,
            details=StaffDetails(absence_count=absence_count, department_id=department_id),
        )
        return True

    def set_absence_count(self, staff_id: int, absence_count: int) -> bool:
        person = self.get_by_id(staff_id)
        if not person:
            return False
        self._s.people[staff_id] = replace(person, details=replace(person.details, absence_count=absence_count))
        return True

    def set_active(self, staff_id: int, *, active: bool) -> bool:
        person = self.get_by_id(staff_id)
        if not person:
            return False
        self._s.people[staff_id] = replace(person, active=active)
        return True

    def delete(self, staff_id: int) -> bool:
        if not self.get_by_id(staff_id):
            return False
        del self._s.people[staff_id]
        return True


class InMemoryDepartments:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, department_id: int) -> Optional[Department]:
        return self._s.departments.get(int(department_id))

    def get_by_name(self, name: str) -> Optional[Department]:
        return next((d for d in self._s.departments.values() if d.name == name), None)

    def name_exists(self, name: str) -> bool:
        return self.get_by_name(name) is not None

    def search_by_name(self, name_part: str) -> List[Department]:
        needle = name_part.lower()
        return sorted((d for d in self._s.departments.values() if needle in d.name.lower()), key=lambda d: d.name)

    def list_all(self) -> List[Department]:
        return sorted(self._s.departments.values(), key=lambda d: d.name)

    def _staffed(self) -> set:
        return {p.details.department_id for p in self._s.people.values() if p.is_staff}

    def list_with_staff(self) -> List[Department]:
        return [d for d in self.list_all() if d.department_id in self._staffed()]

    def list_empty(self) -> List[Department]:
        return [d for d in self.list_all() if d.department_id not in self._staffed()]

    def create(self, *, name: str) -> int:
        department_id = self._s.new_id()
        self._s.departments[department_id] = Department(department_id=department_id, name=name)
        return department_id

    def rename(self, *, department_id: int, name: str) -> bool:
        if department_id not in self._s.departments:
            return False
        self._s.departments[department_id] = Department(department_id=department_id, name=name)
        return True

    def delete(self, department_id: int) -> bool:
        return self._s.departments.pop(int(department_id), None) is not None


class InMemoryContracts:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, contract_id: int) -> Optional[Contract]:
        return self._s.contracts.get(int(contract_id))

    def get_for_staff(self, staff_id: int) -> Optional[Contract]:
        return next((c for c in self._s.contracts.values() if c.staff_id == int(staff_id)), None)

    def list_all(self) -> List[Contract]:
        return sorted(self._s.contracts.values(), key=lambda c: (c.contract_date, c.contract_id))

    def list_by_days_per_week(self, days_per_week: int) -> List[Contract]:
        return [c for c in self._s.contracts.values() if c.days_per_week == days_per_week]

    def list_by_department(self, department_id: int) -> List[Contract]:
        members = {p.user_id for p in self._s.people.values() if p.is_staff and p.details.department_id == department_id}
        return [c for c in self._s.contracts.values() if c.staff_id in members]

    def create(self, *, staff_id, days_per_week, start_time, end_time, contract_date) -> int:
        contract_id = self._s.new_id()
        self._s.contracts[contract_id] = Contract(
            contract_id=contract_id,
            staff_id=staff_id,
            days_per_week=days_per_week,
            start_time=start_time,
            end_time=end_time,
            contract_date=contract_date,
        )
        return contract_id

    def delete_for_staff(self, staff_id: int) -> int:
        doomed = [k for k, c in self._s.contracts.items() if c.staff_id == staff_id]
        for k in doomed:
            del self._s.contracts[k]
        return len(doomed)


class InMemoryFingerprints:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_for_user(self, user_id: int) -> Optional[Fingerprint]:
        return next((f for f in self._s.fingerprints.values() if f.user_id == int(user_id)), None)

    def get_by_code(self, finger_code: str) -> Optional[Fingerprint]:
        return next((f for f in self._s.fingerprints.values() if f.finger_code == finger_code), None)

    def create(self, *, user_id: int, finger_code: str) -> int:
        finger_id = self._s.new_id()
        self._s.fingerprints[finger_id] = Fingerprint(finger_id=finger_id, finger_code=finger_code, user_id=user_id)
        return finger_id

    def update_code(self, *, finger_id: int, finger_code: str) -> bool:
        current = self._s.fingerprints.get(finger_id)
        if not current:
            return False
        self._s.fingerprints[finger_id] = replace(current, finger_code=finger_code)
        return True

    def delete_for_user(self, user_id: int) -> int:
        doomed = [k for k, f in self._s.fingerprints.items() if f.user_id == user_id]
        for k in doomed:
            del self._s.fingerprints[k]
        return len(doomed)


class InMemoryAttendance:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        return self._s.attendances.get(int(attendance_id))

    def get_for_staff_and_date(self, staff_id: int, attendance_date: date, *, for_update: bool = False):
        return next(
            (
                r
                for r in self._s.attendances.values()
                if r.staff_id == int(staff_id) and r.attendance_date == attendance_date
            ),
            None,
        )

    def list_all(self) -> List[AttendanceRecord]:
        return sorted(self._s.attendances.values(), key=lambda r: (r.attendance_date, r.attendance_id), reverse=True)

    def list_by_date(self, attendance_date: date) -> List[AttendanceRecord]:
        return [r for r in self._s.attendances.values() if r.attendance_date == attendance_date]

    def list_by_staff(self, staff_id: int) -> List[AttendanceRecord]:
        return [r for r in self.list_all() if r.staff_id == staff_id]

    def list_by_department(self, department_id: int) -> List[AttendanceRecord]:
        members = {p.user_id for p in self._s.people.values() if p.is_staff and p.details.department_id == department_id}
        return [r for r in self.list_all() if r.staff_id in members]

    def list_by_date_and_arrival(self, attendance_date: date, arrival_time: datetime) -> List[AttendanceRecord]:
        return [r for r in self.list_by_date(attendance_date) if r.arrival_time == arrival_time]

    def list_by_date_and_departure(self, attendance_date: date, departure_time: datetime) -> List[AttendanceRecord]:
        return [r for r in self.list_by_date(attendance_date) if r.departure_time == departure_time]

    def count_for_staff(self, staff_id: int) -> int:
        return len(self.list_by_staff(staff_id))

    def create_arrival(self, *, staff_id: int, attendance_date: date, arrival_time: datetime) -> int:
        if self.get_for_staff_and_date(staff_id, attendance_date):
            raise AssertionError("unique (staff_id, attendance_date) violated")
        attendance_id = self._s.new_id()
        self._s.attendances[attendance_id] = AttendanceRecord(
            attendance_id=attendance_id,
            staff_id=staff_id,
            attendance_date=attendance_date,
            arrival_time=arrival_time,
            departure_time=None,
        )
        return attendance_id

    def insert_raw(self, record: AttendanceRecord) -> None:
        self._s.attendances[record.attendance_id] = record

    def set_arrival(self, *, attendance_id: int, arrival_time: datetime) -> bool:
        current = self._s.attendances.get(attendance_id)
        if not current or current.arrival_time is not None or current.departure_time is not None:
            return False
        self._s.attendances[attendance_id] = replace(current, arrival_time=arrival_time)
        return True

    def set_departure(self, *, attendance_id: int, departure_time: datetime) -> bool:
        current = self._s.attendances.get(attendance_id)
        if not current or current.arrival_time is None or current.departure_time is not None:
            return False
        self._s.attendances[attendance_id] = replace(current, departure_time=departure_time)
        return True

    def delete_for_staff(self, staff_id: int) -> int:
        doomed = [k for k, r in self._s.attendances.items() if r.staff_id == staff_id]
        for k in doomed:
            del self._s.attendances[k]
        return len(doomed)


class InMemoryReports:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, report_id: int) -> Optional[Report]:
        return self._s.reports.get(int(report_id))

    def list_by_department(self, department_id: int) -> List[Report]:
        return [r for r in self._s.reports.values() if r.department_id == department_id]

    def count_by_department(self, department_id: int) -> int:
        return len(self.list_by_department(department_id))

    def create(self, *, department_id: int, content: str) -> int:
        report_id = self._s.new_id()
        self._s.reports[report_id] = Report(report_id=report_id, department_id=department_id, content=content)
        return report_id

    def delete(self, report_id: int) -> bool:
        return self._s.reports.pop(int(report_id), None) is not None

    def delete_for_department(self, department_id: int) -> int:
        doomed = [k for k, r in self._s.reports.items() if r.department_id == department_id]
        for k in doomed:
            del self._s.reports[k]
        return len(doomed)


class InMemoryNotifications:
    def __init__(self, store: InMemoryStore):
        self._s = store

    def get_by_id(self, notif_id: int) -> Optional[Notification]:
        return self._s.notifications.get(int(notif_id))

    def list_for_user(self, user_id: int) -> List[Notification]:
        return [n for n in self._s.notifications.values() if n.user_id == user_id]

    def create(self, *, user_id: int, content: str, date_sent: datetime) -> int:
        notif_id = self._s.new_id()
        self._s.notifications[notif_id] = Notification(
            notif_id=notif_id, user_id=user_id, content=content, date_sent=date_sent
        )
        return notif_id

    def delete(self, notif_id: int) -> bool:
        return self._s.notifications.pop(int(notif_id), None) is not None

    def delete_for_user(self, user_id: int) -> int:
        doomed = [k for k, n in self._s.notifications.items() if n.user_id == user_id]
        for k in doomed:
            del self._s.notifications[k]
        return len(doomed)


class InMemoryUnitOfWork:
    """Serializes units of work on one lock and rolls the store back on error."""

    def __init__(self, store: InMemoryStore):
        self._store = store
        self._snapshot: Optional[dict] = None
        self.users = InMemoryUsers(store)
        self.staff = InMemoryStaff(store)
        self.departments = InMemoryDepartments(store)
        self.contracts = InMemoryContracts(store)
        self.fingerprints = InMemoryFingerprints(store)
        self.attendance = InMemoryAttendance(store)
        self.reports = InMemoryReports(store)
        self.notifications = InMemoryNotifications(store)

    def __enter__(self) -> "InMemoryUnitOfWork":
        self._store.lock.acquire()
        self._snapshot = self._store.snapshot()
        return self

    def __exit__(self, exc_type, exc, tb):
        try:
            if exc_type is not None:
                self._store.restore(self._snapshot)
        finally:
            self._snapshot = None
            self._store.lock.release()
        return None


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def uow_factory(store):
    return lambda: InMemoryUnitOfWork(store)


@pytest.fixture
def container(uow_factory):
    from fingerprint_attendance.container import build_container

    return build_container(secret_key="test-secret", uow_factory=uow_factory)


@pytest.fixture
def hire(container):
    """Create a staff member (with contract) in a department, creating the department on first use."""

    from fingerprint_attendance.staff.model import ContractTerms

    departments: Dict[str, int] = {}

    def _hire(email: str, *, department: str = "Engineering", name: str = "Ada", surname: str = "Lovelace"):
        if department not in departments:
            departments[department] = container.department_service.create_department(department).department_id
        return container.staff_service.create_staff(
            name=name,
            surname=surname,
            email=email,
            department_id=departments[department],
            contract=ContractTerms(
                days_per_week=5,
                start_time=datetime(2024, 1, 1, 9, 0),
                end_time=datetime(2024, 12, 31, 17, 0),
            ),
        )

    return _hire
