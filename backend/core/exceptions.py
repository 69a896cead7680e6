"""
Error types raised by the adoption API.

Routes and services raise these; the handlers registered in ``backend.main``
turn them into the ``{status, message}`` response envelope.
"""

from typing import Any


class AdoptionError(Exception):
    """Base class for errors that map onto a client-facing response."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status_code, "message": self.message}


class InvalidCredentials(AdoptionError):
    """Unknown email or wrong password. Both cases share one message."""

    status_code = 400
    default_message = "Email or password not correct"


class InvalidExternalToken(AdoptionError):
    status_code = 401
    default_message = "Google token not valid or not provided"


class Unauthenticated(AdoptionError):
    """Bearer token missing, malformed, expired or revoked."""

    status_code = 401
    default_message = "Unauthorized"


class Unauthorized(AdoptionError):
    """Authenticated, but not allowed to act on this resource."""

    status_code = 401
    default_message = "You are not allowed to perform this operation"


class NotFound(AdoptionError):
    status_code = 404
    default_message = "Resource not found."

    @classmethod
    def for_model(cls, model: str, resource_id: Any) -> "NotFound":
        return cls(f"{model} with id {resource_id} not found.")


class AdminProfileRejected(AdoptionError):
    status_code = 418
    default_message = "Why are you trying to retrieve your profile admin?"


class Conflict(AdoptionError):
    status_code = 400
    default_message = "Resource already exists"
