from __future__ import annotations

import logging

from flask import Flask, jsonify, request, session

from ..common.auth import admin_required, current_person, is_admin, login_required
from ..common.http import error_response, query_int, read_json
from ..core.enums import PersonKind, RequestStatus
from ..core.exceptions import AuthorizationError, DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def _require_profile():
    person = current_person()
    if not person:
        raise AuthorizationError("No employee or intern profile linked to this account")
    return person


def register(app: Flask, container: Container) -> None:
    service = container.task_service

    @app.route("/api/tasks", methods=["GET"], endpoint="list_tasks")
    @login_required
    def list_tasks():
        try:
            filters = {
                "assignee_type": request.args.get("assigneeType"),
                "assignee_id": query_int("assigneeId"),
                "project": request.args.get("project"),
                "approval_status": request.args.get("approvalStatus"),
            }
            # Without a project filter non-admins only see their own tasks.
            if not is_admin() and not filters["project"]:
                filters["assignee_type"], filters["assignee_id"] = _require_profile()
            return jsonify([t.to_dict() for t in service.list_tasks(**filters)])
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching tasks")
            return jsonify({"error": "Failed to fetch tasks"}), 500

    @app.route("/api/tasks", methods=["POST"], endpoint="create_task")
    @login_required
    def create_task():
        body = read_json()
        try:
            approval_status = body.get("approvalStatus")
            requested_by = body.get("requestedBy")
            if not is_admin():
                # Tasks created outside the admin console wait for approval.
                kind, person_id = _require_profile()
                approval_status = RequestStatus.PENDING
                requested_by = person_id if kind == PersonKind.EMPLOYEE else None
            task = service.create_task(
                title=body.get("title", ""),
                assignee_type=body.get("assigneeType"),
                assignee_id=body.get("assigneeId"),
                project=body.get("project", ""),
                description=body.get("description"),
                status=body.get("status"),
                priority=body.get("priority"),
                due_date=body.get("dueDate"),
                approval_status=approval_status,
                requested_by=requested_by,
            )
            return jsonify(task.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating task")
            return jsonify({"error": "Failed to create task"}), 500

    @app.route("/api/tasks/<int:task_id>", methods=["GET"], endpoint="get_task")
    @login_required
    def get_task(task_id: int):
        try:
            data = service.get_task(task_id).to_dict()
            data["comments"] = [c.to_dict() for c in service.comments(task_id)]
            return jsonify(data)
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching task")
            return jsonify({"error": "Failed to fetch task"}), 500

    @app.route("/api/tasks/<int:task_id>", methods=["PATCH"], endpoint="update_task_status")
    @login_required
    def update_task_status(task_id: int):
        body = read_json()
        try:
            if not is_admin():
                task = service.get_task(task_id)
                if _require_profile() != (task.assignee_kind, task.assignee_id):
                    raise AuthorizationError("Only the assignee can update this task")
            task = service.update_status(task_id, body.get("status"))
            return jsonify(task.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating task")
            return jsonify({"error": "Failed to update task"}), 500

    @app.route("/api/tasks/<int:task_id>/approve", methods=["PATCH"], endpoint="approve_task")
    @admin_required
    def approve_task(task_id: int):
        body = read_json()
        try:
            task = service.decide(task_id, body.get("approvalStatus"))
            return jsonify(task.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating task approval")
            return jsonify({"error": "Failed to update task approval"}), 500

    @app.route("/api/tasks/<int:task_id>/comments", methods=["GET"], endpoint="list_task_comments")
    @login_required
    def list_task_comments(task_id: int):
        try:
            return jsonify([c.to_dict() for c in service.comments(task_id)])
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error fetching comments")
            return jsonify({"error": "Failed to fetch comments"}), 500

    @app.route("/api/tasks/<int:task_id>/comments", methods=["POST"], endpoint="add_task_comment")
    @login_required
    def add_task_comment(task_id: int):
        body = read_json()
        try:
            comment = service.add_comment(
                task_id,
                content=body.get("content", ""),
                comment_type=body.get("type"),
                author_user_id=session.get("user_id"),
            )
            return jsonify(comment.to_dict()), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating comment")
            return jsonify({"error": "Failed to create comment"}), 500

    @app.route("/api/tasks/<int:task_id>/rate", methods=["PATCH"], endpoint="rate_task")
    @admin_required
    def rate_task(task_id: int):
        body = read_json()
        try:
            task = service.rate(
                task_id,
                rating=body.get("rating"),
                feedback=body.get("feedback"),
                rated_by=session.get("user_id"),
            )
            return jsonify(task.to_dict())
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error rating task")
            return jsonify({"error": "Failed to rate task"}), 500
