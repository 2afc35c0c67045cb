"""Middleware: request context, access logging and security headers."""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "strict-origin-when-cross-origin",
}

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

access_logger = logging.getLogger("echo_api.access")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request ID for the duration of a request and log its outcome.

    The ID comes from the ``X-Request-ID`` header or a fresh UUID4. Log
    records emitted while the request runs carry it (see
    ``RequestIDLogFilter``) and it is echoed on the response. Every request
    produces one access log line with method, path, status and duration;
    unhandled errors are logged with status 500 and re-raised.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = request_id_var.set(rid)
        start = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        finally:
            access_logger.info(
                "%s %s -> %d (%.1fms)",
                request.method,
                request.url.path,
                status_code,
                (time.perf_counter() - start) * 1000,
            )
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Apply ``SECURITY_HEADERS`` to every response, CORS preflights included."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)
        response.headers.update(SECURITY_HEADERS)
        return response


class RequestIDLogFilter(logging.Filter):
    """Stamp ``record.request_id`` with the current request ID ("-" outside requests)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get() or "-"
        return True
