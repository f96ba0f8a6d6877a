"""
Domain error taxonomy.

Services and repositories raise these; the API boundary maps each one to an
HTTP status and the response envelope (see backend.app.error_handlers).
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """One failing input field."""

    field: str
    message: str

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class SkillShareError(Exception):
    """Base class for all expected domain failures."""

    status_code: int = 500
    code: str = "error"
    default_message: str = "Request failed"
    retryable: bool = False

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(SkillShareError):
    """Malformed or missing input. Carries every failing field, not just the first."""

    status_code = 400
    code = "validation_error"
    default_message = "Validation failed"

    def __init__(self, errors: list[FieldError], message: str | None = None):
        self.errors = list(errors)
        super().__init__(message)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        return cls([FieldError(field, message)])


class UnauthenticatedError(SkillShareError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Access token required"


class ForbiddenError(SkillShareError):
    status_code = 403
    code = "forbidden"
    default_message = "Not authorized to modify this resource"


class NotFoundError(SkillShareError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class ConflictError(SkillShareError):
    status_code = 409
    code = "conflict"
    default_message = "Resource already exists"


class UnavailableError(SkillShareError):
    """Storage or infrastructure failure. Safe for the caller to retry."""

    status_code = 500
    code = "unavailable"
    default_message = "Service temporarily unavailable"
    retryable = True


__all__ = [
    "FieldError",
    "SkillShareError",
    "ValidationError",
    "UnauthenticatedError",
    "ForbiddenError",
    "NotFoundError",
    "ConflictError",
    "UnavailableError",
]
