from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..common.auth import admin_required, current_person, is_admin, login_required
from ..common.http import error_response, query_int, read_json
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)


def _acting_person(body: dict):
    """Admins may act for anyone; everyone else acts for themselves."""
    if is_admin() and body.get("personType") and body.get("personId"):
        return body["personType"], body["personId"]
    person = current_person()
    if not person:
        raise AuthorizationError("No employee or intern profile linked to this account")
    return person


def _list_filters():
    filters = {
        "day": request.args.get("date"),
        "month": query_int("month"),
        "year": query_int("year"),
        "person_kind": request.args.get("personType"),
        "person_id": query_int("personId"),
    }
    if not is_admin():
        person = current_person()
        if not person:
            raise AuthorizationError("No employee or intern profile linked to this account")
        filters["person_kind"], filters["person_id"] = person
    return filters


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance", methods=["GET"], endpoint="list_attendance")
    @login_required
    def list_attendance():
        try:
            records = service.list_records(**_list_filters())
            return jsonify([service.to_view(r) for r in records])
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching attendance")
            return jsonify({"error": "Failed to fetch attendance"}), 500

    @app.route("/api/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    @login_required
    def attendance_summary():
        try:
            return jsonify(service.summarize(service.list_records(**_list_filters())))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error building attendance summary")
            return jsonify({"error": "Failed to build attendance summary"}), 500

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def attendance_today():
        try:
            kind, person_id = _acting_person(request.args.to_dict())
            record = service.today(kind, person_id)
            return jsonify(service.to_view(record) if record else None)
        except DomainError as e:
            return error_response(e)

    @app.route("/api/attendance", methods=["POST"], endpoint="record_attendance")
    @admin_required
    def record_attendance():
        body = read_json()
        try:
            if not body.get("personType") or not body.get("personId"):
                raise ValidationError("Missing required fields")
            record = service.record(
                person_kind=body["personType"],
                person_id=body["personId"],
                work_date=body.get("date", ""),
                status=body.get("status", ""),
                check_in=body.get("checkIn"),
                check_out=body.get("checkOut"),
            )
            return jsonify(service.to_view(record)), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error recording attendance")
            return jsonify({"error": "Failed to record attendance"}), 500

    @app.route("/api/attendance/<int:attendance_id>", methods=["PUT"], endpoint="update_attendance")
    @admin_required
    def update_attendance(attendance_id: int):
        body = read_json()
        try:
            record = service.update(
                attendance_id,
                status=body.get("status"),
                check_in=body.get("checkIn"),
                check_out=body.get("checkOut"),
            )
            return jsonify(service.to_view(record))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating attendance")
            return jsonify({"error": "Failed to update attendance"}), 500

    @app.route("/api/attendance/punch-in", methods=["POST"], endpoint="punch_in")
    @login_required
    def punch_in():
        try:
            kind, person_id = _acting_person(read_json())
            record = service.punch_in(kind, person_id)
            return jsonify({"message": "Punched in successfully", "attendance": service.to_view(record)}), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error punching in")
            return jsonify({"error": "Failed to punch in"}), 500

    @app.route("/api/attendance/punch-out", methods=["POST"], endpoint="punch_out")
    @login_required
    def punch_out():
        try:
            kind, person_id = _acting_person(read_json())
            record = service.punch_out(kind, person_id)
            return jsonify({"message": "Punched out successfully", "attendance": service.to_view(record)})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error punching out")
            return jsonify({"error": "Failed to punch out"}), 500
