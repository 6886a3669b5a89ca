"""Structured Logging — JSON formatter, request ids, and access logging.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Every record emitted while serving a request carries that request's id
    - Every response carries the x-request-id header (echoed or generated),
      including 500s built here for exceptions that escape the routes
    - JSON format in production, human-readable in development

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - ContextVar for request_id: async-safe, no handler/adapter plumbing in call sites
    - setup_logging called once on startup via lifespan
"""

import json
import logging
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse

from walletreg.core.errors import ErrorContext, InternalFailureError

REQUEST_ID_HEADER = "x-request-id"
MAX_REQUEST_ID_LENGTH = 128

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)

logger = logging.getLogger("walletreg.access")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in (
            "request_id", "error_code", "user_id", "wallet",
            "path", "method", "status_code", "duration_ms",
        ):
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False)


class RequestIdFilter(logging.Filter):
    """Stamp the current request id onto every record."""

    def filter(self, record: logging.LogRecord) -> bool:
        if getattr(record, "request_id", None) is None:
            record.request_id = request_id_var.get()
        return True


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    handler = logging.StreamHandler()
    handler.addFilter(RequestIdFilter())
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s [%(request_id)s] %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


def _incoming_request_id(request: Request) -> str:
    supplied = request.headers.get(REQUEST_ID_HEADER, "").strip()
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH:
        return supplied
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Assign a request id, expose it to logging, echo it on the response."""

    async def dispatch(self, request: Request, call_next):
        request_id = _incoming_request_id(request)
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    f"Unhandled exception on {request.url.path}: {e}",
                    extra={"error_code": "INTERNAL_ERROR", "path": request.url.path},
                    exc_info=True,
                )
                error = InternalFailureError(
                    "unhandled", ErrorContext(request_id=request_id),
                )
                response = JSONResponse(
                    status_code=error.http_status, content=error.to_response(),
                )
            response.headers[REQUEST_ID_HEADER] = request_id
            logger.info(
                f"{request.method} {request.url.path} {response.status_code}",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": round(
                        (time.perf_counter() - started) * 1000, 2,
                    ),
                },
            )
            return response
        finally:
            request_id_var.reset(token)


def current_request_id() -> str | None:
    return request_id_var.get()
