"""
Service Errors

Error taxonomy shared by every module. Services raise these; the
exception handlers registered in main.py turn them into the JSON
envelope ``{"message": ..., "error": ...}``.
"""

import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from admissions.core.config import settings

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base exception for all service-layer errors."""

    def __init__(self, message: str, error_code: str, status_code: int = 400):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"message": self.message, "error": self.error_code}


class ValidationError(ServiceError):
    """Raised when input is missing or malformed."""

    def __init__(self, message: str, fields: list[str] | None = None):
        self.fields = fields or []
        super().__init__(message=message, error_code="VALIDATION_ERROR", status_code=400)

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.fields:
            body["fields"] = self.fields
        return body


class NotFoundError(ServiceError):
    """Raised when a referenced entity does not exist."""

    def __init__(self, entity: str, identifier: object | None = None, message: str | None = None):
        if message is None:
            message = f"{entity} {identifier} not found" if identifier else f"{entity} not found"
        super().__init__(message=message, error_code="NOT_FOUND", status_code=404)


class AuthError(ServiceError):
    """Raised when the caller cannot be authenticated."""

    def __init__(self, message: str = "Invalid or expired authentication token."):
        super().__init__(message=message, error_code="AUTHENTICATION_FAILED", status_code=401)


class ForbiddenError(ServiceError):
    """Raised when an authenticated caller may not perform an operation."""

    def __init__(self, message: str = "Access denied: insufficient permissions."):
        super().__init__(message=message, error_code="FORBIDDEN", status_code=403)


class ConflictError(ServiceError):
    """Raised on duplicate applications, payments or accounts."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="CONFLICT", status_code=400)


class PaymentRequiredError(ServiceError):
    """Raised when verification is attempted without a completed payment."""

    def __init__(self):
        super().__init__(
            message="Cannot verify application: No completed payment found",
            error_code="PAYMENT_REQUIRED",
            status_code=400,
        )


class UploadError(ServiceError):
    """Raised when an uploaded file is rejected (type, size or count)."""

    def __init__(self, message: str):
        super().__init__(message=message, error_code="UPLOAD_REJECTED", status_code=400)


class InvalidStatusTransitionError(ServiceError):
    """Raised when an application status change is not allowed."""

    def __init__(self, current_status: str, new_status: str, valid: list[str]):
        self.current_status = current_status
        self.new_status = new_status
        super().__init__(
            message=(
                f"Invalid status transition: {current_status} -> {new_status}. "
                f"Valid transitions: {valid}"
            ),
            error_code="INVALID_STATUS_TRANSITION",
            status_code=400,
        )


class RateLimitExceededError(ServiceError):
    """Raised when a caller exceeds a rate limit."""

    def __init__(self, limit: int, window_seconds: int):
        self.retry_after_seconds = window_seconds
        super().__init__(
            message=f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds.",
            error_code="RATE_LIMIT_EXCEEDED",
            status_code=429,
        )


# ============================================
# Exception handlers
# ============================================


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    headers = None
    if isinstance(exc, RateLimitExceededError):
        headers = {"Retry-After": str(exc.retry_after_seconds)}
    elif isinstance(exc, AuthError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    if isinstance(exc.detail, dict):
        content = {
            "message": exc.detail.get("message", "Request failed"),
            "error": exc.detail.get("error"),
        }
    else:
        content = {"message": str(exc.detail)}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    fields = [".".join(str(part) for part in err["loc"] if part != "body") for err in exc.errors()]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "message": "Validation error",
            "error": "VALIDATION_ERROR",
            "fields": fields,
        },
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    content = {
        "message": "An unexpected error occurred. Please try again later.",
        "error": "INTERNAL_ERROR",
    }
    if not settings.is_production:
        content["trace"] = "".join(traceback.format_exception(exc))
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error envelope handlers to the application."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
