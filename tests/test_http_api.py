from __future__ import annotations

from types import SimpleNamespace

import pytest

from src.hr_backend.hr_backend.auth.service import AuthService
from src.hr_backend.hr_backend.auth.tokens import issue_token
from src.hr_backend.hr_backend.checkins.service import CheckinService
from src.hr_backend.hr_backend.core.exceptions import InfrastructureError
from src.hr_backend.hr_backend.employees.service import EmployeeService
from src.hr_backend.hr_backend.main import create_app

SECRET = "http-test-secret"


@pytest.fixture
def app(employees_repo, checkins_repo):
    employees_repo.add(1, "admin@kistr.com", password="s3cret", department="Engineering")
    employees_repo.add(2, "bob@kistr.com", department="Sales")
    container = SimpleNamespace(
        auth_service=AuthService(employees_repo, secret=SECRET),
        employee_service=EmployeeService(employees_repo),
        checkin_service=CheckinService(checkins_repo),
    )
    return create_app("config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def headers():
    return {"Authorization": f"Bearer {issue_token(1, secret=SECRET)}"}


def test_missing_token_is_401(client):
    resp = client.get("/api/get-employee-checkin")

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Access token required"}


def test_invalid_token_is_403(client):
    resp = client.get("/api/me", headers={"Authorization": "Bearer not-a-jwt"})

    assert resp.status_code == 403
    assert resp.get_json()["message"] == "Invalid token"


def test_login_then_me(client):
    resp = client.post("/api/login", json={"email": "admin@kistr.com", "password": "s3cret"})
    assert resp.status_code == 200
    token = resp.get_json()["body"]["token"]

    me = client.get("/api/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.get_json()["body"]["email"] == "admin@kistr.com"


def test_login_failure_is_401(client):
    resp = client.post("/api/login", json={"email": "admin@kistr.com", "password": "nope"})
    assert resp.status_code == 401


def test_checkin_flow_over_http(client, headers, checkins_repo):
    opened = client.post("/api/employee-checkins", headers=headers)
    assert opened.status_code == 201
    body = opened.get_json()["body"]
    assert set(body) == {"id", "checkin_date", "checkin_time"}

    again = client.post("/api/employee-checkins", headers=headers)
    assert again.status_code == 400
    assert again.get_json()["message"] == "You have already checked in today"

    bad = client.put(f"/api/employee-checkins/{body['id']}", json={"type": "lunch"}, headers=headers)
    assert bad.status_code == 400
    assert bad.get_json()["message"] == "Invalid status type"

    brk = client.put(f"/api/employee-checkins/{body['id']}", json={"type": "break"}, headers=headers)
    assert brk.status_code == 200
    assert brk.get_json()["message"] == "Break started"
    assert brk.get_json()["body"]["on_break"] is True

    history = client.get("/api/get-employee-checkin", headers=headers)
    assert [r["id"] for r in history.get_json()["body"]["data"]] == [body["id"]]


def test_transition_on_missing_record_is_404(client, headers):
    resp = client.put("/api/employee-checkins/77", json={"type": "checkout"}, headers=headers)
    assert resp.status_code == 404


def test_store_failure_is_opaque_500(client, headers, checkins_repo):
    def broken(**kwargs):
        raise InfrastructureError("Record store failure: connection refused")

    checkins_repo.count = broken

    resp = client.get("/api/employee-checkins", headers=headers)

    assert resp.status_code == 500
    assert resp.get_json() == {"message": "Internal server error"}


def test_request_id_is_echoed(client, headers):
    resp = client.get("/api/me", headers={**headers, "X-Request-Id": "req-123"})
    assert resp.headers["X-Request-Id"] == "req-123"
    assert client.get("/api/me", headers=headers).headers["X-Request-Id"]


def test_employee_list_has_links(client, headers):
    resp = client.get("/api/employees?perPage=1&department=Sales", headers=headers)

    body = resp.get_json()["body"]
    assert [e["email"] for e in body["data"]] == ["bob@kistr.com"]
    assert body["meta"]["total"] == 1
    assert body["meta"]["links"][1] == {"url": "/api/employees?page=1", "label": "1", "active": True}


def test_create_employee_validation_errors(client, headers):
    resp = client.post("/api/employees", json={"first_name": "Ada"}, headers=headers)

    assert resp.status_code == 400
    data = resp.get_json()
    assert data["message"] == "Validation failed"
    assert any(e["field"] == "email" for e in data["errors"])


def test_update_rejects_mass_assignment(client, headers):
    resp = client.put("/api/employees/2", json={"password": "x"}, headers=headers)
    assert resp.status_code == 400


def test_unknown_employee_is_404(client, headers):
    resp = client.get("/api/employees/999", headers=headers)
    assert resp.status_code == 404
    assert resp.get_json()["message"] == "Employee not found"
