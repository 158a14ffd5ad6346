from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.auth import admin_required, login_required
from ..common.http import error_response, query_int, read_json
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    service = container.intern_service

    @app.route("/api/interns", methods=["GET"], endpoint="list_interns")
    @login_required
    def list_interns():
        try:
            interns = service.list_interns(
                status=request.args.get("status"),
                mentor_id=query_int("mentorId"),
                project=request.args.get("project"),
                search=request.args.get("search"),
            )
            return jsonify([service.describe(i) for i in interns])
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching interns")
            return jsonify({"error": "Failed to fetch interns"}), 500

    @app.route("/api/interns", methods=["POST"], endpoint="create_intern")
    @admin_required
    def create_intern():
        body = read_json()
        try:
            intern = service.create_intern(
                name=body.get("name", ""),
                email=body.get("email", ""),
                start_date=body.get("startDate", ""),
                end_date=body.get("endDate"),
                university=body.get("university"),
                degree=body.get("degree"),
                mentor_id=body.get("mentorId"),
                project=body.get("project"),
            )
            return jsonify(service.describe(intern)), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating intern")
            return jsonify({"error": "Failed to create intern"}), 500

    @app.route("/api/interns/<int:intern_id>", methods=["GET"], endpoint="get_intern")
    @login_required
    def get_intern(intern_id: int):
        try:
            return jsonify(service.describe(service.get_intern(intern_id)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching intern")
            return jsonify({"error": "Failed to fetch intern"}), 500

    @app.route("/api/interns/<int:intern_id>/terminate", methods=["POST"], endpoint="terminate_intern")
    @admin_required
    def terminate_intern(intern_id: int):
        body = read_json()
        try:
            intern = service.terminate(intern_id, reason=body.get("reason"))
            return jsonify({"message": "Internship terminated successfully", "intern": service.describe(intern)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error terminating internship")
            return jsonify({"error": "Failed to terminate internship"}), 500

    @app.route("/api/interns/<int:intern_id>/assign-project", methods=["POST"], endpoint="assign_intern_projects")
    @admin_required
    def assign_intern_projects(intern_id: int):
        body = read_json()
        try:
            intern = service.assign_projects(intern_id, project=body.get("project"), projects=body.get("projects"))
            return jsonify(service.describe(intern))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error assigning intern project")
            return jsonify({"error": "Failed to assign project"}), 500

    @app.route("/api/interns/<int:intern_id>/assign-mentor", methods=["POST"], endpoint="assign_intern_mentor")
    @admin_required
    def assign_intern_mentor(intern_id: int):
        body = read_json()
        try:
            intern, mentor = service.assign_mentor(intern_id, body.get("mentorId"))
            return jsonify(
                {
                    "message": "Mentor assigned successfully",
                    "intern": service.describe(intern),
                    "mentor": {"id": mentor.employee_id, "name": mentor.name, "email": mentor.email},
                }
            )
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error assigning mentor")
            return jsonify({"error": "Failed to assign mentor"}), 500
