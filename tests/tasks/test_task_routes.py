from __future__ import annotations

from types import SimpleNamespace

import pytest
from flask import Flask

from src.company_ops.company_ops.core.enums import PersonKind, RequestStatus, TaskStatus
from src.company_ops.company_ops.core.exceptions import NotFoundError
from src.company_ops.company_ops.tasks.controller import register as register_tasks
from src.company_ops.company_ops.tasks.model import Task


class StubTaskService:
    def __init__(self):
        self.created = None
        self.task = Task(3, "Checkout page", PersonKind.EMPLOYEE, 2, 1, project_name="Phoenix")

    def create_task(self, **kwargs):
        self.created = kwargs
        return Task(9, kwargs["title"], PersonKind.EMPLOYEE, 2, 1, approval_status=RequestStatus(kwargs["approval_status"]))

    def get_task(self, task_id):
        if task_id != 3:
            raise NotFoundError("Task not found")
        return self.task

    def update_status(self, task_id, status):
        return Task(3, "Checkout page", PersonKind.EMPLOYEE, 2, 1, status=TaskStatus(status))

    def rate(self, task_id, **kwargs):
        raise RuntimeError("database went away")


@pytest.fixture
def stub():
    return StubTaskService()


@pytest.fixture
def client(stub):
    app = Flask(__name__)
    app.secret_key = "test-secret"
    register_tasks(app, SimpleNamespace(task_service=stub))
    return app.test_client()


def _login(client, role, employee_id=None):
    with client.session_transaction() as sess:
        sess["user_id"] = 10
        sess["role"] = role
        if employee_id:
            sess["employee_id"] = employee_id


def test_employee_created_task_waits_for_approval(client, stub):
    _login(client, "employee", employee_id=1)
    resp = client.post(
        "/api/tasks",
        json={"title": "Reports", "assigneeId": 2, "project": "Phoenix", "approvalStatus": "Approved"},
    )

    assert resp.status_code == 201
    assert resp.get_json()["approvalStatus"] == "Pending"
    assert stub.created["requested_by"] == 1


def test_admin_keeps_requested_approval(client, stub):
    _login(client, "admin")
    resp = client.post("/api/tasks", json={"title": "Reports", "assigneeId": 2, "project": "Phoenix",
                                           "approvalStatus": "Approved"})
    assert resp.get_json()["approvalStatus"] == "Approved"


def test_only_assignee_updates_status(client):
    _login(client, "employee", employee_id=1)
    assert client.patch("/api/tasks/3", json={"status": "Done"}).status_code == 403

    _login(client, "employee", employee_id=2)
    resp = client.patch("/api/tasks/3", json={"status": "Done"})
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "Done"


def test_rating_is_admin_only_and_failures_are_500(client, caplog):
    _login(client, "employee", employee_id=2)
    assert client.patch("/api/tasks/3/rate", json={"rating": 4}).status_code == 403

    _login(client, "admin")
    resp = client.patch("/api/tasks/3/rate", json={"rating": 4})
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to rate task"}
    assert "Error rating task" in caplog.text
