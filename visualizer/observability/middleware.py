"""
FastAPI middleware for observability.

Correlation ID and request logging middleware. WebSocket traffic passes
through untouched; editor sessions log their own lifecycle.

Dependencies: fastapi, visualizer.observability
System role: Request/response observability injection
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from visualizer.observability.correlation import clear_correlation_id, set_correlation_id
from visualizer.observability.log_utils import log_exception_with_context, log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"
PROCESS_TIME_HEADER = "X-Process-Time-Ms"

# Polled by load balancers; logged at DEBUG only
QUIET_PATH_PREFIXES = ("/api/v1/health",)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each HTTP request once, after the response is produced."""

    async def dispatch(self, request: Request, call_next):
        """
        Log method, path, status, duration and payload size.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response with the processing time header
        """
        start = time.perf_counter()
        method = request.method
        path = request.url.path
        level = logging.DEBUG if path.startswith(QUIET_PATH_PREFIXES) else logging.INFO

        try:
            response: Response = await call_next(request)
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{method} {path} - Exception",
                e,
                method=method,
                path=path,
                process_time_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            raise

        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)
        response.headers[PROCESS_TIME_HEADER] = str(elapsed_ms)
        log_with_context(
            logger,
            level,
            f"{method} {path} - {response.status_code}",
            method=method,
            path=path,
            status_code=response.status_code,
            process_time_ms=elapsed_ms,
            content_type=response.headers.get("content-type"),
            content_length=response.headers.get("content-length"),
            client_host=request.client.host if request.client else None,
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Middleware for correlation ID injection."""

    async def dispatch(self, request: Request, call_next):
        """
        Inject correlation ID into request context.

        Args:
            request: FastAPI request
            call_next: Next middleware in chain

        Returns:
            Response: Response with correlation ID header
        """
        correlation_id = set_correlation_id(request.headers.get(CORRELATION_HEADER))
        try:
            response: Response = await call_next(request)
        finally:
            clear_correlation_id()
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
