"""
Custom exception handlers for FastAPI.

Every failure leaves as the standard envelope:
    {"success": false, "error": "...", "data": [...]?, "errorCode": "..."?}

Security:
- Request IDs are logged server-side for tracing but NOT exposed in bodies
- Generic error messages for 500 errors to prevent information disclosure
"""

import uuid

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from core.errors import SkillShareError, UnavailableError, ValidationError
from core.logging import get_logger

logger = get_logger("backend.errors")

INTERNAL_ERROR_MESSAGE = "Internal server error"


def _get_request_id() -> str:
    """
    Get the current request ID from context.

    Used for server-side logging only - NOT exposed to clients.
    """
    return structlog.contextvars.get_contextvars().get("request_id", "-")


def _error_code() -> str:
    """Short opaque code the client can quote and operators can grep for."""
    return f"ERR_{uuid.uuid4().hex[:10].upper()}"


def _camel(segment: str) -> str:
    head, *rest = segment.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in rest)


def _field_path(loc: tuple) -> str:
    """("body", "contactInfo", "email") -> "contactInfo.email"; ("query", "page") -> "page"."""
    parts = [str(part) for part in loc]
    if parts and parts[0] in ("body", "query", "path", "header"):
        parts = parts[1:]
    return ".".join(_camel(part) for part in parts) or "body"


def _validation_payload(fields: list[dict], message: str = "Validation failed") -> dict:
    return {"success": False, "error": message, "data": fields}


def _internal_error_response(exc: Exception, event: str) -> JSONResponse:
    error_code = _error_code()
    # Log full details server-side
    logger.exception(
        event,
        error=str(exc),
        error_type=type(exc).__name__,
        error_code=error_code,
        request_id=_get_request_id(),
    )
    content = {"success": False, "error": INTERNAL_ERROR_MESSAGE, "errorCode": error_code}
    if isinstance(exc, SkillShareError) and exc.retryable:
        content["retryable"] = True
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def domain_validation_handler(request: Request, exc: ValidationError):
        fields = [error.to_dict() for error in exc.errors]
        logger.info("validation_failed", fields=[f["field"] for f in fields], path=request.url.path)
        return JSONResponse(status_code=400, content=_validation_payload(fields, exc.message))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        fields = [
            {"field": _field_path(tuple(error.get("loc", ()))), "message": error.get("msg", "Invalid value")}
            for error in exc.errors()
        ]
        logger.info("validation_failed", fields=[f["field"] for f in fields], path=request.url.path)
        return JSONResponse(status_code=400, content=_validation_payload(fields))

    @app.exception_handler(UnavailableError)
    async def unavailable_handler(request: Request, exc: UnavailableError):
        return _internal_error_response(exc, "store_unavailable")

    @app.exception_handler(SkillShareError)
    async def domain_error_handler(request: Request, exc: SkillShareError):
        if exc.status_code >= 500:
            return _internal_error_response(exc, "domain_error")
        logger.info(
            "request_rejected",
            code=exc.code,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(status_code=exc.status_code, content={"success": False, "error": exc.message})

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        logger.warning(
            "http_exception",
            detail=exc.detail,
            status_code=exc.status_code,
            request_id=_get_request_id(),
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return _internal_error_response(exc, "unhandled_exception")
