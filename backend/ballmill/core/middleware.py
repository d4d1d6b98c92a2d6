"""
Request logging middleware.

Every request gets a short id (or keeps the caller's ``X-Request-ID``) bound to
the structlog context, so engine and router logs of one request share it.
"""

import time
import uuid
from typing import Callable

import structlog
from ballmill.core.logging import get_logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = get_logger(__name__)

NDJSON_MEDIA_TYPE = "application/x-ndjson"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs each request with timing; client and server errors at warning level."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "request_failed",
                error=str(e),
                error_type=type(e).__name__,
                duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            )
            raise

        # For NDJSON streams this is time to first byte, not the whole generation
        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            stream=response.headers.get("content-type", "").startswith(NDJSON_MEDIA_TYPE),
        )

        response.headers["X-Request-ID"] = request_id
        return response
