"""
Transactional email relay.

``POST /api/tasks/send-email`` forwards the JSON body it receives to the
configured email provider and hands the provider's status code and body
back to the caller unchanged. The provider credential comes from
``EMAIL_API_KEY`` and is sent as the ``authkey`` header.
"""

import logging

import requests
from flask import Blueprint, Response, current_app, jsonify, request

from app.request_log import log_request

logger = logging.getLogger(__name__)

email_bp = Blueprint("email", __name__)


@email_bp.route("/send-email", methods=["POST"])
def send_email() -> tuple[Response, int]:
    """
    Relay an email request to the provider.

    Returns:
        The provider's response and status code, or 500 if the relay is not
        configured or the provider cannot be reached.
    """
    api_key = current_app.config.get("EMAIL_API_KEY")
    if not api_key:
        log_request(500, "EMAIL_API_KEY is not set")
        return jsonify({"error": "Email service is not configured"}), 500

    try:
        provider_response = requests.post(
            current_app.config["EMAIL_API_URL"],
            data=request.get_data(),
            headers={
                "authkey": api_key,
                "Content-Type": "application/json",
            },
            timeout=current_app.config["EMAIL_TIMEOUT"],
        )
    except requests.RequestException as exc:
        logger.error("Email provider request failed: %s", exc)
        log_request(500, str(exc))
        return jsonify({"error": "Internal Server Error"}), 500

    response = Response(
        provider_response.content,
        status=provider_response.status_code,
        content_type=provider_response.headers.get("Content-Type", "application/json"),
    )
    log_request(provider_response.status_code, "Email request relayed")
    return response, provider_response.status_code
