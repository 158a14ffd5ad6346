from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.auth import admin_required, is_admin, login_required
from ..common.http import error_response, query_int, read_json
from ..core.exceptions import AuthorizationError, DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def _own_employee_id() -> int:
    employee_id = session.get("employee_id")
    if not employee_id:
        raise AuthorizationError("Only employees can manage leave requests")
    return int(employee_id)


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leave-requests", methods=["GET"], endpoint="list_leave_requests")
    @login_required
    def list_leave_requests():
        try:
            employee_id = query_int("employeeId") if is_admin() else _own_employee_id()
            reqs = service.list_requests(status=request.args.get("status"), employee_id=employee_id)
            return jsonify([r.to_dict() for r in reqs])
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching leave requests")
            return jsonify({"error": "Failed to fetch leave requests"}), 500

    @app.route("/api/leave-requests", methods=["POST"], endpoint="create_leave_request")
    @login_required
    def create_leave_request():
        body = read_json()
        try:
            employee_id = body.get("employeeId") if is_admin() and body.get("employeeId") else _own_employee_id()
            req = service.create(
                employee_id=employee_id,
                start_date=body.get("startDate", ""),
                end_date=body.get("endDate", ""),
                reason=body.get("reason", ""),
            )
            return jsonify(req.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating leave request")
            return jsonify({"error": "Failed to create leave request"}), 500

    @app.route("/api/leave-requests/<int:request_id>", methods=["PATCH"], endpoint="decide_leave_request")
    @admin_required
    def decide_leave_request(request_id: int):
        body = read_json()
        try:
            req = service.decide(request_id, status=body.get("status", ""), admin_comment=body.get("adminComment"))
            return jsonify(req.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating leave request")
            return jsonify({"error": "Failed to update leave request"}), 500

    @app.route("/api/leave-requests/<int:request_id>", methods=["DELETE"], endpoint="delete_leave_request")
    @admin_required
    def delete_leave_request(request_id: int):
        try:
            service.delete(request_id)
            return jsonify({"message": "Leave request deleted"})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error deleting leave request")
            return jsonify({"error": "Failed to delete leave request"}), 500
