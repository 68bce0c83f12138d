"""Liveness and health-check routes."""

import os

from flask import Blueprint, Response, jsonify

from app.request_log import log_request

status_bp = Blueprint("status", __name__)


@status_bp.route("/", methods=["GET"])
def index() -> tuple[str, int]:
    """Plain-text liveness probe."""
    log_request(200, "Task Manager API is Running...")
    return "Task Manager API is Running...", 200


@status_bp.route("/api/health", methods=["GET"])
def health_check() -> tuple[Response, int]:
    """Health check endpoint for deployment verification."""
    return jsonify({
        "status": "healthy",
        "service": "tasks",
        "environment": os.getenv("ENVIRONMENT", "unknown"),
    }), 200
