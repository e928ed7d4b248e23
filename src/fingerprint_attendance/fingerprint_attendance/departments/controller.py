from __future__ import annotations

from flask import Flask, request

from ..common.web import bearer_required, json_body, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = bearer_required(container.auth_service.verify_token)
    departments = container.department_service

    @app.route("/api/departments", methods=["GET"], endpoint="list_departments")
    @admin_required
    def list_departments():
        name = request.args.get("search")
        if name:
            return ok(departments.search_departments(name))
        return ok(departments.list_departments())

    @app.route("/api/departments/with-staff", methods=["GET"], endpoint="departments_with_staff")
    @admin_required
    def departments_with_staff():
        return ok(departments.list_departments_with_staff())

    @app.route("/api/departments/empty", methods=["GET"], endpoint="empty_departments")
    @admin_required
    def empty_departments():
        return ok(departments.list_empty_departments())

    @app.route("/api/departments/by-name/<path:name>", methods=["GET"], endpoint="department_by_name")
    @admin_required
    def department_by_name(name: str):
        return ok(departments.get_department_by_name(name))

    @app.route("/api/departments/check-name", methods=["GET"], endpoint="department_check_name")
    @admin_required
    def department_check_name():
        return ok({"exists": departments.name_exists(request.args.get("name", ""))})

    @app.route("/api/departments", methods=["POST"], endpoint="create_department")
    @admin_required
    def create_department():
        data = json_body()
        return ok(departments.create_department(data.get("name", "")), 201)

    @app.route("/api/departments/<int:department_id>", methods=["GET"], endpoint="get_department")
    @admin_required
    def get_department(department_id: int):
        return ok(departments.get_department(department_id))

    @app.route("/api/departments/<int:department_id>/details", methods=["GET"], endpoint="department_details")
    @admin_required
    def department_details(department_id: int):
        return ok(departments.get_department_details(department_id))

    @app.route("/api/departments/<int:department_id>/statistics", methods=["GET"], endpoint="department_statistics")
    @admin_required
    def department_statistics(department_id: int):
        return ok(departments.get_statistics(department_id))

    @app.route("/api/departments/<int:department_id>", methods=["PUT"], endpoint="update_department")
    @admin_required
    def update_department(department_id: int):
        data = json_body()
        return ok(departments.update_department(department_id, data.get("name", "")))

    @app.route("/api/departments/<int:department_id>", methods=["DELETE"], endpoint="delete_department")
    @admin_required
    def delete_department(department_id: int):
        departments.delete_department(department_id)
        return ok({"message": "Department deleted successfully"})

    @app.route("/api/departments/<int:department_id>/force", methods=["DELETE"], endpoint="force_delete_department")
    @admin_required
    def force_delete_department(department_id: int):
        removed = departments.force_delete_department(department_id)
        return ok({"message": "Department force deleted", "removed_staff": removed})

    @app.route("/api/departments/<int:department_id>/reports", methods=["GET"], endpoint="list_reports")
    @admin_required
    def list_reports(department_id: int):
        return ok(container.report_service.list_for_department(department_id))

    @app.route("/api/departments/<int:department_id>/reports", methods=["POST"], endpoint="create_report")
    @admin_required
    def create_report(department_id: int):
        data = json_body()
        return ok(container.report_service.create_report(department_id, data.get("content", "")), 201)

    @app.route("/api/reports/<int:report_id>", methods=["GET"], endpoint="get_report")
    @admin_required
    def get_report(report_id: int):
        return ok(container.report_service.get_report(report_id))

    @app.route("/api/reports/<int:report_id>", methods=["DELETE"], endpoint="delete_report")
    @admin_required
    def delete_report(report_id: int):
        container.report_service.delete_report(report_id)
        return ok({"message": "Report deleted successfully"})
