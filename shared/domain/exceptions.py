"""
Domain Exceptions

Every failure a service can report to its caller. Each error carries a
``kind`` (stable, machine readable) and the HTTP status the API layer
renders it with. Services raise these; ``shared.api.exception_handler``
turns them into responses.
"""

from typing import Any


class DomainError(Exception):
    """Base class for all domain failures"""

    kind = "internal"
    status_code = 500
    default_message = "Internal error"

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"kind": self.kind, "message": self.message}
        if self.details:
            payload["details"] = self.details
        return payload


class ValidationError(DomainError):
    """Missing or malformed input; ``details`` maps field names to messages"""

    kind = "validation"
    status_code = 400
    default_message = "Invalid input"

    @classmethod
    def for_field(cls, field: str, message: str) -> "ValidationError":
        return cls(message, details={field: [message]})


class NotFoundError(DomainError):
    kind = "not_found"
    status_code = 404
    default_message = "Not found"


class ForbiddenError(DomainError):
    kind = "forbidden"
    status_code = 403
    default_message = "You do not have access to this resource"


class ConflictError(DomainError):
    """The request collides with current state (overlapping dates, duplicates)"""

    kind = "conflict"
    status_code = 409
    default_message = "Conflict with current state"


class InternalError(DomainError):
    """Unexpected persistence failure"""

    default_message = "Internal server error"
