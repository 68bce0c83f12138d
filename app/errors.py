"""
Exceptions raised by the task repository and request handlers.

Each exception carries the HTTP status it maps to; the API blueprint's
error handlers turn them into ``{"message": ...}`` responses.
"""


class TaskApiError(Exception):
    """Base class for errors reported to API clients."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(TaskApiError):
    """A required request field is missing or unusable."""

    status_code = 400


class NotFoundError(TaskApiError):
    """The user or task addressed by the request does not exist."""

    status_code = 404


class PersistenceError(TaskApiError):
    """The store rejected an operation or could not be reached."""

    status_code = 500
