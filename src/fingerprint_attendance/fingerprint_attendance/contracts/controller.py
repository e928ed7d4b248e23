from __future__ import annotations

from flask import Flask, request

from ..common.web import bearer_required, ok
from ..container import Container


def register(app: Flask, container: Container) -> None:
    admin_required = bearer_required(container.auth_service.verify_token)
    contracts = container.contract_service

    @app.route("/api/contracts", methods=["GET"], endpoint="list_contracts")
    @admin_required
    def list_contracts():
        days = request.args.get("daysPerWeek", type=int)
        department_id = request.args.get("departmentId", type=int)
        if days is not None:
            return ok(contracts.list_by_days_per_week(days))
        if department_id is not None:
            return ok(contracts.list_by_department(department_id))
        return ok(contracts.list_contracts())

    @app.route("/api/contracts/<int:contract_id>", methods=["GET"], endpoint="get_contract")
    @admin_required
    def get_contract(contract_id: int):
        return ok(contracts.get_contract(contract_id))

    @app.route("/api/staff/<int:staff_id>/contract", methods=["GET"], endpoint="get_staff_contract")
    @admin_required
    def get_staff_contract(staff_id: int):
        return ok(contracts.get_staff_contract(staff_id))
