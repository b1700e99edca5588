"""
FastAPI middleware for observability.

Correlation ID propagation and per-request access logging.

Dependencies: fastapi, starlette, jobtrack.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from jobtrack.observability.correlation import clear_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 2)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per completed request, or the exception that aborted it."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        route = f"{request.method} {request.url.path}"
        try:
            response = await call_next(request)
        except Exception as e:
            logger.exception(
                "%s failed",
                route,
                extra={"elapsed_ms": _elapsed_ms(started), "error_type": type(e).__name__},
            )
            raise

        logger.info(
            "%s -> %s",
            route,
            response.status_code,
            extra={
                "status_code": response.status_code,
                "elapsed_ms": _elapsed_ms(started),
                "query": request.url.query or None,
            },
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Bind a correlation ID to the request context.

    The caller's X-Correlation-ID is reused when present; otherwise a new
    one is generated. The ID is echoed on the response.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
