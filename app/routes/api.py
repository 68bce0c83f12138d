"""
REST API endpoints for Task management.

Tasks are grouped per user (identified by email) into three lists:
daily, completed and regular. All endpoints return JSON responses.

Endpoints:
    GET    /api/tasks?email=&category=  - List one of a user's task lists
    GET    /api/tasks/<id>?email=       - Get a single task by ID
    POST   /api/tasks                   - Create a task (and the user if new)
    PUT    /api/tasks/<id>              - Update an existing task
    DELETE /api/tasks/<id>              - Delete a task
"""

import logging
from typing import Any

from flask import Blueprint, Response, jsonify, request
from werkzeug.exceptions import HTTPException

from app import db
from app.errors import NotFoundError, PersistenceError, TaskApiError, ValidationError
from app.models import TaskList
from app.repository import TaskRepository
from app.request_log import log_request

logger = logging.getLogger(__name__)

api_bp = Blueprint("api", __name__)

VALID_CATEGORIES = [task_list.value for task_list in TaskList]


# -----------------------------------------------------------------------------
# Helper Functions
# -----------------------------------------------------------------------------

def _repository() -> TaskRepository:
    """Build a repository bound to the current request's session."""
    return TaskRepository(db.session)


def _json_body() -> dict[str, Any]:
    """Return the request JSON object, or an empty dict if there is none."""
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


# -----------------------------------------------------------------------------
# API Endpoints
# -----------------------------------------------------------------------------

@api_bp.route("/tasks", methods=["POST"])
def create_task() -> tuple[Response, int]:
    """
    Create a new task, creating the user on first submission.

    Request Body (JSON):
        email: Owner address (required)
        taskData: Task fields; ``title`` is required

    Returns:
        201 with ``{message, task}``, or 400 with ``{message}`` if the
        request is incomplete or the task cannot be stored.
    """
    data = _json_body()
    email = data.get("email")
    task_data = data.get("taskData")
    if not email or not isinstance(task_data, dict):
        raise ValidationError("Email and task data are required.")

    # Every failure on the create path is reported as 400
    try:
        _, task, created = _repository().create_or_append_task(email, task_data)
    except PersistenceError as exc:
        raise ValidationError(exc.message) from exc
    except Exception as exc:
        logger.exception("Unexpected error while creating task for %s", email)
        db.session.rollback()
        raise ValidationError(str(exc)) from exc

    message = "New user created and task added" if created else "Task added successfully"
    log_request(201, message)
    return jsonify({"message": message, "task": task.to_dict()}), 201


@api_bp.route("/tasks", methods=["GET"])
def get_tasks() -> tuple[Response, int]:
    """
    List the tasks of one category for a user.

    Query Parameters:
        email: Owner address (required)
        category: One of daily, completed, regular (required)

    Returns:
        200 with a JSON array of tasks, 400 if email or category is
        missing or invalid, 404 if the user does not exist.
    """
    email = request.args.get("email")
    category = request.args.get("category")

    if not email:
        raise ValidationError("Email is required to fetch tasks.")
    if category not in VALID_CATEGORIES:
        raise ValidationError(
            "Invalid category. Valid categories are daily, completed, or regular."
        )

    user = _repository().find_user_by_email(email)
    if user is None:
        raise NotFoundError("User not found")

    tasks = user.tasks_in(TaskList(category))
    log_request(200, f"{category.capitalize()} tasks fetched")
    return jsonify([task.to_dict() for task in tasks]), 200


@api_bp.route("/tasks/<task_id>", methods=["GET"])
def get_task(task_id: str) -> tuple[Response, int]:
    """
    Get a single task by ID.

    The lookup spans every user's lists; ``email`` must be present but does
    not narrow the search.

    Args:
        task_id: The unique identifier of the task.

    Returns:
        200 with the task, 400 if email is missing, 404 if not found.
    """
    if not request.args.get("email"):
        raise ValidationError("Email is required to fetch a task.")

    found = _repository().find_task_by_id(task_id)
    if found is None:
        raise NotFoundError("Task not found")

    _, task = found
    log_request(200, "Task fetched")
    return jsonify(task.to_dict()), 200


@api_bp.route("/tasks/<task_id>", methods=["PUT"])
def update_task(task_id: str) -> tuple[Response, int]:
    """
    Update an existing task.

    Only the fields present in ``taskData`` change. The task is searched for
    in the list that ``taskData``'s flags route to.

    Args:
        task_id: The unique identifier of the task.

    Request Body (JSON):
        email: Owner address
        taskData: Fields to change

    Returns:
        200 with ``{message, task}``, 400 if taskData is missing, 404 if the
        user or task is not found, 500 if the store rejects the change.
    """
    data = _json_body()
    task_data = data.get("taskData")
    if not isinstance(task_data, dict):
        raise ValidationError("Task data is required to update a task.")

    task = _repository().update_task(data.get("email"), task_id, task_data)

    log_request(200, "Task updated")
    return jsonify({"message": "Task updated successfully", "task": task.to_dict()}), 200


@api_bp.route("/tasks/<task_id>", methods=["DELETE"])
def delete_task(task_id: str) -> tuple[Response, int]:
    """
    Delete a task.

    Args:
        task_id: The unique identifier of the task.

    Request Body (JSON):
        email: Owner address (required)

    Returns:
        200 with a success message, 400 if email is missing, 404 if the
        user or task is not found.
    """
    email = _json_body().get("email")
    if not email:
        raise ValidationError("Email is required to delete a task.")

    _repository().delete_task(email, task_id)

    log_request(200, "Task deleted")
    return jsonify({"message": "Task deleted successfully"}), 200


# -----------------------------------------------------------------------------
# Error Handlers
# -----------------------------------------------------------------------------

@api_bp.errorhandler(TaskApiError)
def handle_task_api_error(error: TaskApiError) -> tuple[Response, int]:
    """Convert repository and validation errors to JSON responses."""
    log_request(error.status_code, error.message)
    return jsonify({"message": error.message}), error.status_code


@api_bp.errorhandler(Exception)
def handle_unexpected_error(error: Exception) -> tuple[Response, int]:
    """Report any other failure as JSON, keeping HTTP error codes."""
    if isinstance(error, HTTPException):
        log_request(error.code, error.description)
        return jsonify({"message": error.description}), error.code

    logger.exception("Unhandled error while processing request")
    db.session.rollback()
    log_request(500, str(error))
    return jsonify({"message": str(error)}), 500
