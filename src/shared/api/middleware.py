"""
Shared API Middleware
======================

Middleware and exception handlers installed on the FastAPI application:

- OriginGateMiddleware: rejects browser requests from untrusted origins
- CorrelationIDMiddleware / LoggingMiddleware: request tracing
- Exception handlers rendering every error as ``{"error": message}``
"""

import re
import time
import uuid
from typing import Callable, Iterable, Optional
from urllib.parse import urlsplit

from fastapi import Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.core import ApplicationException
from src.shared.infrastructure.logging import get_logger

logger = get_logger(__name__)

CORS_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_HEADERS = ["Content-Type", "Authorization"]


def is_origin_allowed(
    origin: Optional[str],
    allowed_origins: Iterable[str],
    trusted_suffix: Optional[str] = None
) -> bool:
    """
    Decide whether a request's Origin header may reach the API.

    Requests without an Origin (same-origin, mobile apps, curl) are always
    allowed. Otherwise the origin must be listed exactly, or its hostname
    must end with the trusted suffix.
    """
    if not origin:
        return True
    if origin in allowed_origins:
        return True
    if trusted_suffix:
        try:
            hostname = urlsplit(origin).hostname or ""
        except ValueError:
            return False
        if hostname.endswith(trusted_suffix.lower()):
            return True
    return False


def origin_regex_for_suffix(trusted_suffix: Optional[str]) -> Optional[str]:
    """
    Regex for Starlette's CORSMiddleware matching the trusted suffix.

    Case-insensitive, like the hostname comparison in is_origin_allowed.
    """
    if not trusted_suffix:
        return None
    escaped = re.escape(trusted_suffix)
    return rf"(?i)https?://[^/]*{escaped}(:\d+)?"


class OriginGateMiddleware(BaseHTTPMiddleware):
    """
    Rejects cross-origin requests before they reach any route.

    Must wrap CORSMiddleware so preflight requests are gated too; allowed
    requests get their CORS headers from CORSMiddleware.
    """

    def __init__(
        self,
        app: ASGIApp,
        allowed_origins: Iterable[str],
        trusted_suffix: Optional[str] = None
    ):
        super().__init__(app)
        self.allowed_origins = list(allowed_origins)
        self.trusted_suffix = trusted_suffix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        origin = request.headers.get("origin")
        if not is_origin_allowed(origin, self.allowed_origins, self.trusted_suffix):
            logger.warning("CORS blocked for origin", extra={"origin": origin})
            return JSONResponse(status_code=403, content={"error": "CORS no permitido"})
        return await call_next(request)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    Adds a correlation ID to every request and echoes it in the response.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID", str(uuid.uuid4()))
        request.state.correlation_id = correlation_id

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its status code and latency.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        correlation_id = getattr(request.state, "correlation_id", "unknown")
        start_time = time.perf_counter()

        logger.debug(
            "Request started",
            extra={"correlation_id": correlation_id, "method": request.method, "path": request.url.path}
        )

        response = await call_next(request)

        logger.info(
            "Request completed",
            extra={
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "response_time_ms": int((time.perf_counter() - start_time) * 1000)
            }
        )
        return response


async def application_exception_handler(request: Request, exc: ApplicationException) -> JSONResponse:
    """Render domain and application errors with their own status code."""
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed JSON or wrongly typed fields are a plain 400 for the mobile client."""
    logger.info(
        "Rejected malformed request",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "unknown"),
            "path": request.url.path,
            "errors": str(exc.errors())[:500]
        }
    )
    return JSONResponse(status_code=400, content={"error": "Datos de entrada inválidos"})


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Last-resort handler: log the detail, never send it to the client.
    """
    logger.error(
        "Unhandled exception",
        extra={
            "correlation_id": getattr(request.state, "correlation_id", "unknown"),
            "path": request.url.path,
            "method": request.method,
            "error_type": type(exc).__name__,
            "error_message": str(exc)
        }
    )
    return JSONResponse(status_code=500, content={"error": "Error en el servidor"})
