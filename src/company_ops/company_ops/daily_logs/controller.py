from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.auth import admin_required, current_person, is_admin, login_required
from ..common.http import error_response, query_int, read_json
from ..core.exceptions import AuthorizationError, DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def _acting_person(body: dict):
    """Admins may log for anyone; everyone else logs for themselves."""
    if is_admin() and body.get("personType") and body.get("personId"):
        return body["personType"], body["personId"]
    person = current_person()
    if not person:
        raise AuthorizationError("No employee or intern profile linked to this account")
    return person


def register(app: Flask, container: Container) -> None:
    service = container.daily_log_service

    def _owned_log(log_id: int):
        log = service.get_log(log_id)
        if not is_admin() and current_person() != log.person_key:
            raise AuthorizationError("You can only change your own daily logs")
        return log

    @app.route("/api/daily-logs", methods=["GET"], endpoint="list_daily_logs")
    @admin_required
    def list_daily_logs():
        try:
            logs = service.list_logs(
                project=request.args.get("project"),
                day=request.args.get("date"),
                date_from=request.args.get("from"),
                date_to=request.args.get("to"),
                person_type=request.args.get("type"),
            )
            return jsonify([log.to_dict() for log in logs])
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching daily logs")
            return jsonify({"error": "Failed to fetch daily logs"}), 500

    @app.route("/api/projects/<path:name>/daily-logs", methods=["GET"], endpoint="project_daily_logs")
    @login_required
    def project_daily_logs(name: str):
        try:
            logs = service.project_logs(
                name,
                person_kind=request.args.get("personType"),
                person_id=query_int("personId"),
                day=request.args.get("date"),
            )
            return jsonify([log.to_dict() for log in logs])
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching daily logs")
            return jsonify({"error": "Failed to fetch daily logs"}), 500

    @app.route("/api/projects/<path:name>/daily-logs", methods=["POST"], endpoint="add_daily_log")
    @login_required
    def add_daily_log(name: str):
        body = read_json()
        try:
            kind, person_id = _acting_person(body)
            log = service.add_log(
                name,
                person_kind=kind,
                person_id=person_id,
                summary=body.get("summary", ""),
                hours_worked=body.get("hoursWorked"),
                category=body.get("category"),
                log_date=body.get("date"),
            )
            return jsonify(log.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating daily log")
            return jsonify({"error": "Failed to create daily log"}), 500

    @app.route("/api/projects/<path:name>/daily-logs/<int:log_id>", methods=["PATCH"], endpoint="update_daily_log")
    @login_required
    def update_daily_log(name: str, log_id: int):
        body = read_json()
        try:
            _owned_log(log_id)
            log = service.update_log(
                log_id,
                summary=body.get("summary"),
                hours_worked=body.get("hoursWorked"),
                category=body.get("category"),
            )
            return jsonify(log.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating daily log")
            return jsonify({"error": "Failed to update daily log"}), 500

    @app.route("/api/projects/<path:name>/daily-logs/<int:log_id>", methods=["DELETE"], endpoint="delete_daily_log")
    @login_required
    def delete_daily_log(name: str, log_id: int):
        try:
            _owned_log(log_id)
            service.delete_log(log_id)
            return jsonify({"message": "Daily log deleted successfully"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error deleting daily log")
            return jsonify({"error": "Failed to delete daily log"}), 500
