"""
Request Context Middleware.

Every request gets a request_id, taken from the X-Request-ID header when an
upstream proxy sets one and generated otherwise. The id is bound into the
structlog context together with method, path and query string, echoed in
the response, and stamped on error bodies by the exception handlers.
"""

import time
import uuid

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = structlog.get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Binds request context for logging and reports the request timing.

    Paths in quiet_paths (liveness probes) are served without the
    request_completed log line.
    """

    def __init__(self, app, quiet_paths: tuple[str, ...] = ("/health",)):
        super().__init__(app)
        self.quiet_paths = quiet_paths

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            query=request.url.query or None,
        )

        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = round((time.perf_counter() - start) * 1000, 2)

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{elapsed_ms}ms"

        if request.url.path not in self.quiet_paths:
            log = logger.warning if response.status_code >= 500 else logger.info
            log("request_completed", status=response.status_code, elapsed_ms=elapsed_ms)
        return response
