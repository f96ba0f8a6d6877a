"""
Structured logging for SkillShare.

Console output in development, JSON lines everywhere else. Contact details
and credentials never reach the log stream: the redaction processor masks
them wherever they appear in an event.
"""

import logging
import sys
import time
from collections.abc import Callable, MutableMapping
from functools import lru_cache, wraps
from typing import Any, TypeVar

import structlog
from structlog.types import Processor

F = TypeVar("F", bound=Callable[..., Any])

REDACTED = "[redacted]"

# Keys whose values are private to the profile owner or grant access
SENSITIVE_KEYS = frozenset(
    {
        "authorization",
        "token",
        "access_token",
        "id_token",
        "password",
        "jwt_secret_key",
        "email",
        "contact_email",
        "contact_phone",
        "phone",
    }
)


def _renders_for_console() -> bool:
    from .config import get_settings

    settings = get_settings()
    return settings.debug or settings.env.lower() in ("development", "dev", "local")


def redact_sensitive(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Mask sensitive values, including inside nested dicts."""

    def scrub(value: Any) -> Any:
        if isinstance(value, dict):
            return {
                k: REDACTED if str(k).lower() in SENSITIVE_KEYS and v else scrub(v)
                for k, v in value.items()
            }
        return value

    for key in list(event_dict):
        if key.lower() in SENSITIVE_KEYS and event_dict[key]:
            event_dict[key] = REDACTED
        else:
            event_dict[key] = scrub(event_dict[key])
    return event_dict


def _add_service(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict.setdefault("service", "skillshare")
    return event_dict


def get_processors(console: bool | None = None) -> list[Processor]:
    """Processor chain; the renderer depends on the environment."""
    if console is None:
        console = _renders_for_console()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        _add_service,
        redact_sensitive,
    ]
    if console:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    else:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return processors


@lru_cache(maxsize=1)
def configure_logging(level: str = "INFO") -> None:
    """Configure stdlib logging and structlog once per process."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level.upper(), logging.INFO),
    )
    # SQL echo goes through settings.debug, not the root level
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    structlog.configure(
        processors=get_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    if not structlog.is_configured():
        configure_logging()
    return structlog.get_logger(name)  # type: ignore[no-any-return]


def bind_context(**kwargs: Any) -> None:
    """Attach request-scoped fields (request_id, uid) to later entries."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_timing(
    operation: str, logger: structlog.stdlib.BoundLogger | None = None
) -> Callable[[F], F]:
    """
    Log how long the wrapped call took.

    Successful calls log at debug; failures log at warning with the
    exception type and re-raise.
    """

    def decorator(func: F) -> F:
        _logger = logger or get_logger(func.__module__)

        @wraps(func)
        def wrapper(*args, **kwargs):
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _logger.warning(
                    "operation_failed",
                    operation=operation,
                    duration_ms=round((time.perf_counter() - start) * 1000, 1),
                    error_type=type(e).__name__,
                )
                raise
            _logger.debug(
                "operation_complete",
                operation=operation,
                duration_ms=round((time.perf_counter() - start) * 1000, 1),
            )
            return result

        return wrapper  # type: ignore

    return decorator


class RequestLoggingMiddleware:
    """
    ASGI middleware that logs one line per API request.

    Runs inside RequestIDMiddleware, so the request_id is already bound.
    Health check paths are skipped.
    """

    quiet_paths = ("/health", "/health/ready")

    def __init__(self, app):
        self.app = app
        self._logger: structlog.stdlib.BoundLogger | None = None

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        if self._logger is None:
            self._logger = get_logger("http")
        return self._logger

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http" or scope.get("path") in self.quiet_paths:
            await self.app(scope, receive, send)
            return

        start_time = time.perf_counter()
        status_code = 500

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 500)
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            if status_code >= 500:
                log_method = self.logger.error
            elif status_code >= 400:
                log_method = self.logger.warning
            else:
                log_method = self.logger.info
            log_method(
                "request_complete",
                method=scope.get("method", ""),
                path=scope.get("path", ""),
                status_code=status_code,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 1),
            )


__all__ = [
    "REDACTED",
    "SENSITIVE_KEYS",
    "bind_context",
    "clear_context",
    "configure_logging",
    "get_logger",
    "get_processors",
    "log_timing",
    "redact_sensitive",
    "RequestLoggingMiddleware",
]
