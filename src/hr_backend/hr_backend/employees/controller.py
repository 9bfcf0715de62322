from __future__ import annotations

from flask import Flask, request

from ..auth.controller import token_required
from ..common.http import envelope, json_body
from ..common.pagination import PageRequest
from ..container import Container
from .model import EmployeeFilter


def _filters_from_args() -> EmployeeFilter:
    def arg(name: str):
        value = (request.args.get(name) or "").strip()
        return value or None

    return EmployeeFilter(
        search=arg("search"),
        department=arg("department"),
        team=arg("team"),
        employee_status=arg("employee_status"),
    )


def register(app: Flask, container: Container) -> None:
    auth = token_required(container)

    @app.route("/api/employees", methods=["GET"], endpoint="employees_list")
    @auth
    def employees_list():
        page = PageRequest.parse(
            request.args.get("page"),
            request.args.get("perPage") or request.args.get("per_page"),
        )
        result = container.employee_service.list_employees(page, _filters_from_args())
        return envelope(
            body={
                "data": [e.summary() for e in result.items],
                "meta": result.meta(base_url=request.path),
            }
        )

    @app.route("/api/employees/<int:employee_id>", methods=["GET"], endpoint="employees_get")
    @auth
    def employees_get(employee_id: int):
        return envelope(body=container.employee_service.get_employee(employee_id).to_dict())

    @app.route("/api/employees", methods=["POST"], endpoint="employees_create")
    @auth
    def employees_create():
        service = container.employee_service
        new_id, code = service.create_employee(service.parse_new_employee(json_body()))
        return envelope(
            message="Employee created successfully",
            body={"id": new_id, "employee_id": code},
            status=201,
        )

    @app.route("/api/employees/<int:employee_id>", methods=["PUT"], endpoint="employees_update")
    @auth
    def employees_update(employee_id: int):
        container.employee_service.update_employee(employee_id, json_body())
        return envelope(message="Employee updated successfully")

    @app.route("/api/get-employee-filters", methods=["GET"], endpoint="employees_filters")
    @auth
    def employees_filters():
        return envelope(body=container.employee_service.filters())
