"""Per-request outcome logging."""

import logging

from flask import request

logger = logging.getLogger("app.requests")


def log_request(status_code: int, message: str) -> None:
    """
    Log how the current request was processed.

    Successful (2xx) outcomes are logged at INFO, everything else at WARNING.

    Args:
        status_code: HTTP status returned to the client.
        message: Human-readable outcome.
    """
    ok = 200 <= status_code < 300
    logger.log(
        logging.INFO if ok else logging.WARNING,
        "%s %s Processed: %s %s - %s",
        request.method,
        request.full_path.rstrip("?"),
        status_code,
        "OK" if ok else "ERROR",
        message,
    )
