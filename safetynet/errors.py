"""
Application Exceptions Module.

Centralized exception definitions with:
- HTTP status code mapping
- Error codes for client handling
- FastAPI exception handlers producing a unified error body
"""

from enum import Enum
from typing import Any, Dict, Optional

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = structlog.get_logger(__name__)


# ============================================================================
# ERROR CODES
# ============================================================================


class ErrorCode(str, Enum):
    """Application error codes."""

    INTERNAL_ERROR = "E1000"
    VALIDATION_ERROR = "E1001"
    NOT_FOUND = "E1002"
    CONFLICT = "E1003"
    INVALID_DATE = "E1004"
    DATA_LOAD_ERROR = "E1005"


# ============================================================================
# ERROR RESPONSE MODEL
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str
    message: str
    details: Optional[Dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Standard error response returned by every handled failure."""

    error: ErrorDetail
    request_id: Optional[str] = None


# ============================================================================
# BASE EXCEPTION
# ============================================================================


class SafetyNetError(Exception):
    """Base exception for the SafetyNet application."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            error=ErrorDetail(
                code=self.code.value,
                message=self.message,
                details=self.details or None,
            ),
            request_id=request_id,
        )


# ============================================================================
# SPECIFIC EXCEPTIONS
# ============================================================================


class NotFoundError(SafetyNetError):
    """Lookup target absent."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} not found: {identifier}",
            code=ErrorCode.NOT_FOUND,
            status_code=404,
            details={"resource": resource, "identifier": str(identifier)},
        )


class AlreadyExistsError(SafetyNetError):
    """Uniqueness violation on create."""

    def __init__(self, resource: str, identifier: Any):
        super().__init__(
            message=f"{resource} already exists: {identifier}",
            code=ErrorCode.CONFLICT,
            status_code=409,
            details={"resource": resource, "identifier": str(identifier)},
        )


class InvalidDateError(SafetyNetError):
    """Birthdate not before the reference date (future date in a record or request)."""

    def __init__(self, birthdate: Any, reference_date: Any):
        super().__init__(
            message=f"Birthdate {birthdate} is not before reference date {reference_date}",
            code=ErrorCode.INVALID_DATE,
            status_code=422,
            details={"birthdate": str(birthdate), "reference_date": str(reference_date)},
        )


class InternalFaultError(SafetyNetError):
    """Unreachable state reached. Indicates a defect, never bad input."""

    def __init__(self, message: str):
        super().__init__(message=message, code=ErrorCode.INTERNAL_ERROR, status_code=500)


class DataLoadError(SafetyNetError):
    """Data source missing or malformed at startup."""

    def __init__(self, source: str, reason: str):
        super().__init__(
            message=f"Unable to load {source}: {reason}",
            code=ErrorCode.DATA_LOAD_ERROR,
            status_code=500,
            details={"source": source},
        )


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


async def safetynet_exception_handler(
    request: Request,
    exc: SafetyNetError,
) -> JSONResponse:
    """Handle SafetyNetError exceptions."""
    request_id = getattr(request.state, "request_id", None)

    if isinstance(exc, InternalFaultError):
        logger.error(
            "internal_fault",
            error_code=exc.code.value,
            message=exc.message,
            request_id=request_id,
        )
        # Never expose the fault description to the client
        exc = SafetyNetError("An internal error occurred")
    else:
        logger.info(
            "request_failed",
            error_code=exc.code.value,
            message=exc.message,
            status_code=exc.status_code,
            request_id=request_id,
        )

    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_response(request_id).model_dump(exclude_none=True),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Handle request validation errors.

    Invalid query/path parameters → 400, invalid request bodies → 422.
    """
    errors = exc.errors()
    in_params = all(err.get("loc", ("",))[0] in ("query", "path") for err in errors)
    status_code = 400 if in_params else 422
    messages = [
        {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg", "")}
        for err in errors
    ]
    logger.info("request_invalid", status_code=status_code, errors=messages)

    error = SafetyNetError(
        message="Invalid request parameters" if in_params else "Invalid request body",
        code=ErrorCode.VALIDATION_ERROR,
        status_code=status_code,
        details={"errors": messages},
    )
    return JSONResponse(
        status_code=status_code,
        content=error.to_response(getattr(request.state, "request_id", None)).model_dump(
            exclude_none=True
        ),
    )


def register_exception_handlers(app) -> None:
    """Register exception handlers with FastAPI app."""
    app.add_exception_handler(SafetyNetError, safetynet_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
