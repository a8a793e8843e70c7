"""Request ID + access log middleware.

Learn: Every request gets an id, either from the incoming X-Request-ID
header or freshly generated. It is bound to structlog's contextvars so
every service log line of that request carries it, echoed back in the
response header, and logged with method, path, status, and duration
once the response is ready.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Bind a request id and log one access line per request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID", str(uuid.uuid4()))

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        started = time.perf_counter()
        response: Response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "http.request",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
            remote_addr=request.client.host if request.client else None,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response
