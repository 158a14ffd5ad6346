from __future__ import annotations

import json

import pytest

from src.company_ops.company_ops.core.exceptions import ValidationError
from src.company_ops.company_ops.projects.membership import ProjectMembership


def test_first_project_is_primary():
    m = ProjectMembership.from_request(projects=["Phoenix", "Odyssey"])
    assert m.primary == "Phoenix"
    assert m.secondary == ("Odyssey",)
    assert json.loads(m.to_json()) == ["Phoenix", "Odyssey"]


def test_empty_membership_is_unassigned():
    m = ProjectMembership()
    assert m.primary == "Unassigned"
    assert not m.is_assigned
    assert m.to_json() == "[]"
    assert not m.is_primary("Unassigned")


def test_names_are_trimmed_and_deduplicated():
    m = ProjectMembership.of(" Phoenix ", "Odyssey", "Phoenix", "", "Unassigned")
    assert m.as_list() == ["Phoenix", "Odyssey"]


def test_projects_list_wins_over_single_project():
    m = ProjectMembership.from_request(project="Atlas", projects=["Phoenix"])
    assert m.as_list() == ["Phoenix"]


def test_single_project_field_is_accepted():
    m = ProjectMembership.from_request(project="Atlas")
    assert m.as_list() == ["Atlas"]
    assert ProjectMembership.from_request(projects="Atlas").as_list() == ["Atlas"]


@pytest.mark.parametrize("kwargs", [{}, {"project": "  "}, {"projects": []}, {"projects": ["", " "]}])
def test_request_without_projects_is_rejected(kwargs):
    with pytest.raises(ValidationError):
        ProjectMembership.from_request(**kwargs)


@pytest.mark.parametrize("projects", [5, {"name": "Phoenix"}, True])
def test_projects_that_are_not_a_list_are_rejected(projects):
    with pytest.raises(ValidationError, match="list of project names"):
        ProjectMembership.from_request(projects=projects, project="Phoenix")


def test_unassigned_request_clears_membership():
    assert not ProjectMembership.from_request(project="Unassigned").is_assigned
    assert not ProjectMembership.from_request(projects=["Unassigned"]).is_assigned


def test_from_json_tolerates_legacy_values():
    assert ProjectMembership.from_json('["Phoenix", "Odyssey"]').as_list() == ["Phoenix", "Odyssey"]
    assert ProjectMembership.from_json("Phoenix").as_list() == ["Phoenix"]
    assert ProjectMembership.from_json('"Phoenix"').as_list() == ["Phoenix"]
    assert ProjectMembership.from_json(None).as_list() == []
    assert ProjectMembership.from_json("").as_list() == []
    assert ProjectMembership.from_json('{"a": 1}').as_list() == []


def test_includes_and_is_primary():
    m = ProjectMembership.of("Phoenix", "Odyssey")
    assert m.includes("Odyssey")
    assert m.is_primary("Phoenix")
    assert not m.is_primary("Odyssey")
    assert not m.includes("Atlas")
