"""
Global Error Handler Middleware.

Last line of defence for exceptions no exception handler claimed. The
client gets the standard error body with a generic message and an error_id;
the exception itself only goes to the server log under that error_id.
"""

import uuid

import structlog
from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from safetynet.errors import ErrorCode, ErrorDetail, ErrorResponse

logger = structlog.get_logger(__name__)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Converts unhandled exceptions into a 500 ErrorResponse:

    {
      "error": {"code": "E1000", "message": "...", "details": {"error_id": "..."}},
      "request_id": "..."
    }

    With debug on, details also carry the exception class name.
    """

    def __init__(self, app, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            error_id = str(uuid.uuid4())
            logger.exception(
                "unhandled_exception",
                error_id=error_id,
                path=request.url.path,
                method=request.method,
            )

            details = {"error_id": error_id}
            if self.debug:
                details["exception"] = type(exc).__name__

            body = ErrorResponse(
                error=ErrorDetail(
                    code=ErrorCode.INTERNAL_ERROR.value,
                    message="An internal error occurred. Please try again later.",
                    details=details,
                ),
                request_id=getattr(request.state, "request_id", None),
            )
            return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
