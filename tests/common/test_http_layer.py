from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.company_ops.company_ops.common.http import status_for
from src.company_ops.company_ops.core.enums import EmployeeRole
from src.company_ops.company_ops.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.company_ops.company_ops.employees.controller import register as register_employees
from src.company_ops.company_ops.employees.model import Employee
from src.company_ops.company_ops.projects.membership import ProjectMembership


class StubEmployeeService:
    def __init__(self):
        self.employee = Employee(1, "Asha Rao", "asha@gmail.com", "asharao@adrs.com", EmployeeRole.DEVELOPER)

    def list_employees(self, *, active_only=False):
        return [self.employee]

    def get_employee(self, employee_id):
        if employee_id == 99:
            raise RuntimeError("connection reset")
        if employee_id != 1:
            raise NotFoundError("Employee not found")
        return self.employee

    def assign_projects(self, employee_id, *, project=None, projects=None):
        membership = ProjectMembership.from_request(project=project, projects=projects)
        if membership.primary == "Boom":
            raise RuntimeError("database went away")
        return Employee(1, "Asha Rao", "asha@gmail.com", None, EmployeeRole.TEAM_LEAD, membership)


@pytest.fixture
def client():
    app = Flask(__name__)
    app.secret_key = "test-secret"
    register_employees(app, SimpleNamespace(employee_service=StubEmployeeService(), auth_service=None))
    return app.test_client()


def _login(client, role):
    with client.session_transaction() as sess:
        sess["user_id"] = 10
        sess["role"] = role
        sess["employee_id"] = 1


@pytest.mark.parametrize(
    "exc, status",
    [
        (ValidationError("x"), 400),
        (NotFoundError("x"), 404),
        (ConflictError("x"), 409),
        (AuthenticationError("x"), 401),
        (AuthorizationError("x"), 403),
        (DomainError("x"), 400),
    ],
)
def test_status_for_domain_errors(exc, status):
    assert status_for(exc) == status


def test_requires_login(client):
    resp = client.get("/api/employees")
    assert resp.status_code == 401
    assert resp.get_json() == {"error": "Authentication required"}


def test_list_and_detail(client):
    _login(client, "employee")
    assert client.get("/api/employees").get_json()[0]["loginEmail"] == "asharao@adrs.com"
    assert client.get("/api/employees/me").get_json()["id"] == 1
    assert client.get("/api/employees/2").status_code == 404


def test_assign_requires_admin(client):
    _login(client, "employee")
    resp = client.post("/api/employees/1/assign-project", json={"project": "Phoenix"})
    assert resp.status_code == 403


def test_assign_validation_error_is_400(client):
    _login(client, "admin")
    resp = client.post("/api/employees/1/assign-project", json={})
    assert resp.status_code == 400
    assert resp.get_json() == {"error": "Project name or projects array is required"}


def test_assign_success(client):
    _login(client, "admin")
    resp = client.post("/api/employees/1/assign-project", json={"projects": ["Phoenix", "Odyssey"]})
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["project"] == "Phoenix"
    assert body["projects"] == ["Phoenix", "Odyssey"]
    assert body["role"] == "TeamLead"


def test_unexpected_error_is_logged_and_500(client, caplog):
    _login(client, "admin")
    resp = client.post("/api/employees/1/assign-project", json={"project": "Boom"})
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to assign project"}
    assert "Error assigning project" in caplog.text


def test_employee_lookup_failure_is_logged_and_500(client, caplog):
    _login(client, "employee")
    resp = client.get("/api/employees/99")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to fetch employee"}
    assert "Error fetching employee" in caplog.text


def test_own_profile_failure_is_logged_and_500(client, caplog):
    _login(client, "employee")
    with client.session_transaction() as sess:
        sess["employee_id"] = 99
    resp = client.get("/api/employees/me")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to fetch employee"}
    assert "Error fetching employee profile" in caplog.text
