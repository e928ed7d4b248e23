from __future__ import annotations

from flask import Flask, request

from ..common.web import bearer_required, body_bool, body_datetime, body_int, json_body, ok
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..container import Container
from .model import ContractTerms, StaffUpdate


def _parse_role(value) -> Role:
    try:
        return Role(str(value or Role.STAFF.value).upper())
    except ValueError:
        raise ValidationError(f"Invalid role: {value!r}")


def register(app: Flask, container: Container) -> None:
    admin_required = bearer_required(container.auth_service.verify_token)
    staff = container.staff_service

    @app.route("/api/staff", methods=["GET"], endpoint="list_staff")
    @admin_required
    def list_staff():
        department_id = request.args.get("departmentId", type=int)
        active_only = request.args.get("active") in {"1", "true", "True"}
        if department_id is not None:
            if active_only:
                return ok(staff.list_active_by_department(department_id))
            return ok(staff.list_by_department(department_id))
        if active_only:
            return ok(staff.list_active_staff())
        return ok(staff.list_staff())

    @app.route("/api/staff/check-email", methods=["GET"], endpoint="staff_check_email")
    @admin_required
    def staff_check_email():
        return ok({"exists": staff.email_exists(request.args.get("email", ""))})

    @app.route("/api/staff", methods=["POST"], endpoint="create_staff")
    @admin_required
    def create_staff():
        data = json_body()
        department_id = body_int(data, "departmentId", required=True)
        days_per_week = body_int(data, "noDaysPerWeek", required=True)

        view = staff.create_staff(
            name=data.get("name", ""),
            surname=data.get("surname", ""),
            email=data.get("email", ""),
            department_id=department_id,
            role=_parse_role(data.get("role")),
            active=body_bool(data, "active", True),
            absence_count=body_int(data, "noAbsence") or 0,
            contract=ContractTerms(
                days_per_week=days_per_week,
                start_time=body_datetime(data, "contractStart"),
                end_time=body_datetime(data, "contractEnd"),
            ),
        )
        return ok(view, 201)

    @app.route("/api/staff/<int:staff_id>", methods=["GET"], endpoint="get_staff")
    @admin_required
    def get_staff(staff_id: int):
        return ok(staff.get_staff(staff_id))

    @app.route("/api/staff/<int:staff_id>", methods=["PUT", "PATCH"], endpoint="update_staff")
    @admin_required
    def update_staff(staff_id: int):
        data = json_body()
        update = StaffUpdate(
            name=data.get("name"),
            surname=data.get("surname"),
            email=data.get("email"),
            department_id=body_int(data, "departmentId"),
            absence_count=body_int(data, "noAbsence"),
            active=body_bool(data, "active"),
        )
        return ok(staff.update_staff(staff_id, update))

    @app.route("/api/staff/<int:staff_id>/absence/increment", methods=["POST"], endpoint="increment_absence")
    @admin_required
    def increment_absence(staff_id: int):
        return ok(staff.increment_absence(staff_id))

    @app.route("/api/staff/<int:staff_id>/absence/reset", methods=["POST"], endpoint="reset_absence")
    @admin_required
    def reset_absence(staff_id: int):
        return ok(staff.reset_absence(staff_id))

    @app.route("/api/staff/<int:staff_id>/deactivate", methods=["POST"], endpoint="deactivate_staff")
    @admin_required
    def deactivate_staff(staff_id: int):
        return ok(staff.deactivate(staff_id))

    @app.route("/api/staff/<int:staff_id>/reactivate", methods=["POST"], endpoint="reactivate_staff")
    @admin_required
    def reactivate_staff(staff_id: int):
        return ok(staff.reactivate(staff_id))

    @app.route("/api/staff/<int:staff_id>", methods=["DELETE"], endpoint="delete_staff")
    @admin_required
    def delete_staff(staff_id: int):
        staff.delete_staff(staff_id)
        return ok({"message": "Staff deleted successfully"})

    @app.route("/api/staff/<int:staff_id>/fingerprint", methods=["PUT"], endpoint="assign_fingerprint")
    @admin_required
    def assign_fingerprint(staff_id: int):
        data = json_body()
        return ok(staff.assign_fingerprint(staff_id, data.get("fingerCode", "")))

    @app.route("/api/staff/<int:staff_id>/fingerprint", methods=["DELETE"], endpoint="remove_fingerprint")
    @admin_required
    def remove_fingerprint(staff_id: int):
        staff.remove_fingerprint(staff_id)
        return ok({"message": "Fingerprint removed"})
