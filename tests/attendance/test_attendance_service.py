from __future__ import annotations

import threading
from datetime import date, datetime

import pytest

from fingerprint_attendance.attendance.model import AttendanceRecord
from fingerprint_attendance.core.enums import AttendanceStatus
from fingerprint_attendance.core.exceptions import ConflictError, NotFoundError, ValidationError

DAY = date(2024, 3, 1)


def at(hour: int, minute: int) -> datetime:
    return datetime(2024, 3, 1, hour, minute)


def test_arrival_then_departure_then_conflict(container, hire, store):
    staff = hire("ada@example.com")
    svc = container.attendance_service

    first = svc.record_event(staff.user_id, DAY, at(8, 55))
    assert first.status == AttendanceStatus.ARRIVAL_RECORDED
    assert first.arrival_time == at(8, 55)
    assert first.departure_time is None

    second = svc.record_event(staff.user_id, DAY, at(17, 10))
    assert second.status == AttendanceStatus.DEPARTURE_RECORDED
    assert second.attendance_id == first.attendance_id
    assert (second.arrival_time, second.departure_time) == (at(8, 55), at(17, 10))

    with pytest.raises(ConflictError, match="already complete"):
        svc.record_event(staff.user_id, DAY, at(17, 30))

    record = store.attendances[first.attendance_id]
    assert record.arrival_time == at(8, 55)
    assert record.departure_time == at(17, 10)
    assert record.status == AttendanceStatus.COMPLETE
    assert len(store.attendances) == 1


def test_view_carries_staff_and_department_context(container, hire):
    staff = hire("ada@example.com", department="Engineering")

    view = container.attendance_service.record_event(staff.user_id, DAY, at(9, 0))

    assert view.staff_id == staff.user_id
    assert view.staff_email == "ada@example.com"
    assert view.department_name == "Engineering"


def test_unknown_staff_is_not_found_and_writes_nothing(container, store):
    with pytest.raises(NotFoundError):
        container.attendance_service.record_event(999, DAY, at(9, 0))
    assert store.attendances == {}


def test_missing_arguments_are_rejected(container, hire):
    staff = hire("ada@example.com")
    with pytest.raises(ValidationError):
        container.attendance_service.record_event(staff.user_id, None, at(9, 0))
    with pytest.raises(ValidationError):
        container.attendance_service.record_event(staff.user_id, DAY, None)


def test_each_date_is_tracked_separately(container, hire):
    staff = hire("ada@example.com")
    svc = container.attendance_service

    svc.record_event(staff.user_id, DAY, at(9, 0))
    next_day = svc.record_event(staff.user_id, date(2024, 3, 2), datetime(2024, 3, 2, 9, 0))

    assert next_day.status == AttendanceStatus.ARRIVAL_RECORDED
    assert len(svc.list_by_staff(staff.user_id)) == 2


def test_row_without_arrival_gets_the_event_as_arrival(container, hire, store, caplog):
    staff = hire("ada@example.com")
    store.attendances[500] = AttendanceRecord(
        attendance_id=500,
        staff_id=staff.user_id,
        attendance_date=DAY,
        arrival_time=None,
        departure_time=None,
    )

    with caplog.at_level("WARNING"):
        view = container.attendance_service.record_event(staff.user_id, DAY, at(10, 0))

    assert view.attendance_id == 500
    assert view.status == AttendanceStatus.ARRIVAL_RECORDED
    assert store.attendances[500].arrival_time == at(10, 0)
    assert store.attendances[500].departure_time is None
    assert "anomaly" in caplog.text


def test_inactive_staff_can_still_record(container, hire):
    staff = hire("ada@example.com")
    container.staff_service.deactivate(staff.user_id)

    view = container.attendance_service.record_event(staff.user_id, DAY, at(9, 0))

    assert view.status == AttendanceStatus.ARRIVAL_RECORDED


def test_fingerprint_event_resolves_staff(container, hire):
    staff = hire("ada@example.com")
    container.staff_service.assign_fingerprint(staff.user_id, "FP-001")

    view = container.attendance_service.record_fingerprint_event("FP-001", DAY, at(8, 30))

    assert view.staff_id == staff.user_id
    assert view.status == AttendanceStatus.ARRIVAL_RECORDED


def test_unknown_fingerprint_is_not_found(container, store):
    with pytest.raises(NotFoundError):
        container.attendance_service.record_fingerprint_event("nope", DAY, at(8, 30))
    with pytest.raises(ValidationError):
        container.attendance_service.record_fingerprint_event("  ", DAY, at(8, 30))


def test_concurrent_events_never_duplicate_or_skip_arrival(container, hire, store):
    """Threads race through the service; the in-memory store serializes units of work on one lock.

    This checks the state machine under contention only. Row locking in MySQL is
    covered by the FOR UPDATE query tests in tests/database.
    """

    staff = hire("ada@example.com")
    svc = container.attendance_service
    results = []
    errors = []

    def fire(minute: int) -> None:
        try:
            results.append(svc.record_event(staff.user_id, DAY, at(9, minute)).status)
        except ConflictError as e:
            errors.append(e)

    threads = [threading.Thread(target=fire, args=(m,)) for m in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(s.value for s in results) == ["ARRIVAL_RECORDED", "DEPARTURE_RECORDED"]
    assert len(errors) == 4
    assert len(store.attendances) == 1
    (record,) = store.attendances.values()
    assert record.arrival_time is not None and record.departure_time is not None


def test_departure_implies_arrival_for_every_sequence(container, hire, store):
    ada = hire("ada@example.com")
    bob = hire("bob@example.com")
    svc = container.attendance_service

    for staff_id, minute in [(ada.user_id, 1), (bob.user_id, 2), (ada.user_id, 3), (ada.user_id, 4), (bob.user_id, 5)]:
        try:
            svc.record_event(staff_id, DAY, at(9, minute))
        except ConflictError:
            pass

    for record in store.attendances.values():
        if record.departure_time is not None:
            assert record.arrival_time is not None


def test_read_operations(container, hire):
    ada = hire("ada@example.com", department="Engineering")
    bob = hire("bob@example.com", department="Sales")
    svc = container.attendance_service

    svc.record_event(ada.user_id, DAY, at(9, 0))
    svc.record_event(bob.user_id, DAY, at(9, 5))
    svc.record_event(bob.user_id, DAY, at(17, 0))

    assert len(svc.list_all()) == 2
    assert len(svc.list_by_date(DAY)) == 2
    assert [v.staff_id for v in svc.list_by_department(bob.department_id)] == [bob.user_id]
    assert [v.staff_id for v in svc.list_by_date_and_arrival(DAY, at(9, 0))] == [ada.user_id]
    assert [v.staff_id for v in svc.list_by_date_and_departure(DAY, at(17, 0))] == [bob.user_id]
    assert len(svc.list_for_staff_and_date(ada.user_id, DAY)) == 1
    assert svc.list_for_staff_and_date(ada.user_id, date(2024, 3, 2)) == []

    with pytest.raises(NotFoundError):
        svc.list_by_staff(12345)
    with pytest.raises(NotFoundError):
        svc.list_by_department(12345)
    with pytest.raises(NotFoundError):
        svc.get_attendance(12345)


def test_row_with_departure_but_no_arrival_is_rejected(container, hire, store):
    staff = hire("ada@example.com")
    corrupt = AttendanceRecord(
        attendance_id=501,
        staff_id=staff.user_id,
        attendance_date=DAY,
        arrival_time=None,
        departure_time=at(17, 0),
    )
    store.attendances[501] = corrupt

    with pytest.raises(ConflictError, match="departure without an arrival"):
        container.attendance_service.record_event(staff.user_id, DAY, at(9, 0))

    assert store.attendances[501] == corrupt
