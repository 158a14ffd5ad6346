from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

from src.company_ops.company_ops.core.enums import (
    EmployeeRole,
    InternshipStatus,
    LogCategory,
    PersonKind,
    ProjectStatus,
)
from src.company_ops.company_ops.core.exceptions import NotFoundError, ValidationError
from src.company_ops.company_ops.daily_logs.model import DailyLog
from src.company_ops.company_ops.daily_logs.service import DailyLogService
from src.company_ops.company_ops.employees.model import Employee
from src.company_ops.company_ops.interns.model import Intern
from src.company_ops.company_ops.projects.model import Project


class InMemoryProjects:
    def __init__(self, *names):
        self.by_name = {n: Project(i + 1, n, None, ProjectStatus.ACTIVE) for i, n in enumerate(names)}

    def get_by_name(self, name):
        return self.by_name.get(name)


class ById:
    def __init__(self, items, key):
        self.by_id = {getattr(i, key): i for i in items}

    def get_by_id(self, item_id):
        return self.by_id.get(item_id)


class InMemoryDailyLogs:
    def __init__(self):
        self.by_id: dict[int, DailyLog] = {}

    def create(self, *, project_id, person_kind, person_id, log_date, summary, category, hours_worked):
        log_id = len(self.by_id) + 1
        self.by_id[log_id] = DailyLog(log_id, project_id, person_kind, person_id, log_date, summary, category, hours_worked)
        return log_id

    def get(self, log_id):
        return self.by_id.get(log_id)

    def list_logs(self, *, project_id=None, person_kind=None, person_id=None, start_date=None, end_date=None, limit=500):
        out = []
        for log in self.by_id.values():
            if project_id is not None and log.project_id != project_id:
                continue
            if person_kind is not None and log.person_kind != person_kind:
                continue
            if person_id is not None and log.person_id != person_id:
                continue
            if start_date and log.log_date < start_date:
                continue
            if end_date and log.log_date > end_date:
                continue
            out.append(log)
        out.sort(key=lambda log: (log.log_date, log.log_id), reverse=True)
        return out[:limit]

    def update(self, log_id, *, summary=None, category=None, hours_worked=None):
        log = self.by_id[log_id]
        self.by_id[log_id] = replace(
            log,
            summary=summary if summary is not None else log.summary,
            category=category if category is not None else log.category,
            hours_worked=hours_worked if hours_worked is not None else log.hours_worked,
        )
        return True

    def delete(self, log_id):
        return self.by_id.pop(log_id, None) is not None


@pytest.fixture
def repo():
    return InMemoryDailyLogs()


@pytest.fixture
def service(repo):
    employees = ById([Employee(1, "Vikram Shah", "vikram@gmail.com", None, EmployeeRole.DEVELOPER)], "employee_id")
    interns = ById([Intern(5, "Neha Gupta", "neha@uni.edu", date(2026, 1, 1), None, InternshipStatus.ACTIVE)], "intern_id")
    return DailyLogService(repo, InMemoryProjects("Phoenix", "Odyssey"), employees, interns)


def _log(service, now, project="Phoenix", **overrides):
    data = {"person_kind": "Employee", "person_id": 1, "summary": "Set up staging", "hours_worked": "6.5"}
    data.update(overrides)
    return service.add_log(project, now=now, **data)


def test_add_log_defaults_to_today_and_general(service, fixed_now):
    log = _log(service, fixed_now)

    assert log.log_date == fixed_now.date()
    assert log.category == LogCategory.GENERAL
    assert log.hours_worked == 6.5
    assert log.person_key == (PersonKind.EMPLOYEE, 1)


def test_unknown_category_is_filed_as_general(service, fixed_now):
    assert _log(service, fixed_now, category="Party").category == LogCategory.GENERAL
    assert _log(service, fixed_now, category="BugFix").category == LogCategory.BUG_FIX


def test_intern_can_log_work(service, fixed_now):
    log = _log(service, fixed_now, person_kind="intern", person_id="5", log_date="2026-03-14", hours_worked=None)
    assert log.person_kind == PersonKind.INTERN
    assert log.log_date == date(2026, 3, 14)
    assert log.hours_worked is None


@pytest.mark.parametrize(
    "overrides",
    [{"summary": " "}, {"hours_worked": "lots"}, {"hours_worked": -1}, {"hours_worked": 25},
     {"person_kind": "Robot"}, {"person_kind": None}, {"person_id": "x"}, {"log_date": "16-03-2026"}],
)
def test_add_log_rejects_bad_input(service, fixed_now, overrides):
    with pytest.raises(ValidationError):
        _log(service, fixed_now, **overrides)


def test_add_log_unknown_references(service, fixed_now):
    with pytest.raises(NotFoundError, match="Project not found"):
        _log(service, fixed_now, project="Mars")
    with pytest.raises(NotFoundError, match="Employee not found"):
        _log(service, fixed_now, person_id=9)


def test_project_logs_by_person_and_day(service, fixed_now):
    _log(service, fixed_now, log_date="2026-03-15")
    _log(service, fixed_now, summary="Fixed login bug")
    _log(service, fixed_now, person_kind="Intern", person_id=5, summary="Wrote docs")
    _log(service, fixed_now, project="Odyssey", summary="Other project")

    assert [log.summary for log in service.project_logs("Phoenix", day="2026-03-16")] == [
        "Wrote docs",
        "Fixed login bug",
    ]
    assert len(service.project_logs("Phoenix", person_kind="Employee", person_id=1)) == 2
    with pytest.raises(NotFoundError):
        service.project_logs("Mars")


def test_list_logs_across_projects(service, fixed_now):
    _log(service, fixed_now, log_date="2026-03-01")
    _log(service, fixed_now, log_date="2026-03-10", project="Odyssey")
    _log(service, fixed_now, log_date="2026-03-16", person_kind="Intern", person_id=5)

    assert len(service.list_logs()) == 3
    assert len(service.list_logs(project="all", date_from="2026-03-05")) == 2
    assert len(service.list_logs(date_from="2026-03-05", date_to="2026-03-12")) == 1
    # A single day wins over the range.
    assert len(service.list_logs(day="2026-03-01", date_from="2026-03-05")) == 1
    assert [log.person_kind for log in service.list_logs(person_type="intern")] == [PersonKind.INTERN]
    assert len(service.list_logs(person_type="employee", project="Odyssey")) == 1

    with pytest.raises(ValidationError):
        service.list_logs(date_from="2026-03-12", date_to="2026-03-05")


def test_update_only_changes_given_fields(service, fixed_now):
    log = _log(service, fixed_now, category="Feature")
    updated = service.update_log(log.log_id, hours_worked="7")

    assert updated.hours_worked == 7.0
    assert updated.summary == "Set up staging"
    assert updated.category == LogCategory.FEATURE

    updated = service.update_log(log.log_id, summary="Deployed staging", category="Deployment")
    assert updated.summary == "Deployed staging"
    assert updated.category == LogCategory.DEPLOYMENT

    with pytest.raises(ValidationError):
        service.update_log(log.log_id, category="Party")


def test_delete_log(service, repo, fixed_now):
    log = _log(service, fixed_now)
    service.delete_log(log.log_id)
    assert repo.by_id == {}
    with pytest.raises(NotFoundError, match="Daily log not found"):
        service.delete_log(log.log_id)
