from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date, parse_iso_datetime
from ..common.web import bearer_required, body_date, body_datetime, body_int, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = bearer_required(container.auth_service.verify_token)
    attendance = container.attendance_service

    @app.route("/api/attendances/record", methods=["POST"], endpoint="record_attendance")
    @admin_required
    def record_attendance():
        data = json_body()
        view = attendance.record_event(
            body_int(data, "staffId", required=True),
            body_date(data, "attendanceDate"),
            body_datetime(data, "attendanceTime"),
        )
        return ok(view, 201)

    @app.route("/api/attendances/fingerprint", methods=["POST"], endpoint="record_fingerprint_attendance")
    @admin_required
    def record_fingerprint_attendance():
        data = json_body()
        view = attendance.record_fingerprint_event(
            str(data.get("fingerCode", "")),
            body_date(data, "attendanceDate"),
            body_datetime(data, "attendanceTime"),
        )
        return ok(view, 201)

    @app.route("/api/attendances", methods=["GET"], endpoint="list_attendances")
    @admin_required
    def list_attendances():
        date_s = request.args.get("date")
        staff_id = request.args.get("staffId", type=int)
        department_id = request.args.get("departmentId", type=int)
        arrival_s = request.args.get("arrivalTime")
        departure_s = request.args.get("departureTime")

        if staff_id is not None and date_s:
            return ok(attendance.list_for_staff_and_date(staff_id, parse_iso_date(date_s)))
        if staff_id is not None:
            return ok(attendance.list_by_staff(staff_id))
        if department_id is not None:
            return ok(attendance.list_by_department(department_id))
        if date_s and arrival_s:
            return ok(attendance.list_by_date_and_arrival(parse_iso_date(date_s), parse_iso_datetime(arrival_s)))
        if date_s and departure_s:
            return ok(attendance.list_by_date_and_departure(parse_iso_date(date_s), parse_iso_datetime(departure_s)))
        if date_s:
            return ok(attendance.list_by_date(parse_iso_date(date_s)))
        return ok(attendance.list_all())

    @app.route("/api/attendances/<int:attendance_id>", methods=["GET"], endpoint="get_attendance")
    @admin_required
    def get_attendance(attendance_id: int):
        return ok(attendance.get_attendance(attendance_id))
