from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..common.auth import admin_required, login_required
from ..common.http import error_response, read_json
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/api/projects", methods=["GET"], endpoint="list_projects")
    @login_required
    def list_projects():
        try:
            return jsonify([p.to_dict() for p in container.project_service.list_projects()])
        except Exception:
            logger.exception("Error fetching projects")
            return jsonify({"error": "Failed to fetch projects"}), 500

    @app.route("/api/projects", methods=["POST"], endpoint="create_project")
    @admin_required
    def create_project():
        body = read_json()
        try:
            project = container.project_service.create_project(
                name=body.get("name", ""),
                description=body.get("description"),
                status=body.get("status") or "Active",
            )
            return jsonify(project.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating project")
            return jsonify({"error": "Failed to create project"}), 500

    @app.route("/api/projects/<path:name>/team-members", methods=["GET"], endpoint="project_team_members")
    @login_required
    def project_team_members(name: str):
        try:
            return jsonify(container.project_service.team_members(name))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching team members")
            return jsonify({"error": "Failed to fetch team members"}), 500
