"""
Custom exception classes and FastAPI exception handlers.

Every domain failure carries an ``ErrorCode`` so the HTTP layer and clients
branch on the kind, never on the message text.
"""

import enum
import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

log = logging.getLogger(__name__)


class ErrorCode(str, enum.Enum):
    VALIDATION_ERROR = "validation_error"
    DUPLICATE_EMAIL = "duplicate_email"
    DUPLICATE_USERNAME = "duplicate_username"
    INVALID_CREDENTIALS = "invalid_credentials"
    NOT_VERIFIED = "not_verified"
    UNAUTHENTICATED = "unauthenticated"
    INVALID_SESSION = "invalid_session"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    USER_NOT_FOUND = "user_not_found"
    ALREADY_VERIFIED = "already_verified"
    INVALID_OR_EXPIRED_CODE = "invalid_or_expired_code"
    INVALID_TOKEN = "invalid_token"
    TOKEN_EXPIRED = "token_expired"
    EMAIL_MISMATCH = "email_mismatch"
    VERIFICATION_METHOD_DISABLED = "verification_method_disabled"
    CONFLICT = "conflict"
    DEPENDENCY_FAILURE = "dependency_failure"


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        code: ErrorCode,
        extra: Optional[dict[str, Any]] = None,
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.code = code
        self.extra = extra or {}


class ValidationException(AppException):
    def __init__(self, detail: str, code: ErrorCode = ErrorCode.VALIDATION_ERROR):
        super().__init__(status_code=400, detail=detail, code=code)


class AuthenticationException(AppException):
    def __init__(self, detail: str = "Unauthorized", code: ErrorCode = ErrorCode.UNAUTHENTICATED):
        super().__init__(status_code=401, detail=detail, code=code)


class ForbiddenException(AppException):
    def __init__(
        self,
        detail: str = "Forbidden",
        required_roles: Optional[list[str]] = None,
        your_role: Optional[str] = None,
    ):
        extra = {}
        if required_roles is not None:
            extra["required_roles"] = required_roles
            extra["your_role"] = your_role
        super().__init__(status_code=403, detail=detail, code=ErrorCode.FORBIDDEN, extra=extra)


class NotFoundException(AppException):
    def __init__(self, resource: str = "Resource", code: ErrorCode = ErrorCode.NOT_FOUND):
        super().__init__(status_code=404, detail=f"{resource} not found", code=code)


class ConflictException(AppException):
    def __init__(self, detail: str = "Resource already exists", code: ErrorCode = ErrorCode.CONFLICT):
        super().__init__(status_code=409, detail=detail, code=code)


class DependencyException(AppException):
    """Hashing, signing or email transport failure. Detail is shown to callers."""

    def __init__(self, detail: str):
        super().__init__(status_code=500, detail=detail, code=ErrorCode.DEPENDENCY_FAILURE)


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException):
        if exc.status_code >= 500:
            log.error("%s %s failed: %s", request.method, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail, "code": exc.code.value, **exc.extra},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
        message = first.get("msg", "Invalid request")
        return JSONResponse(
            status_code=400,
            content={
                "detail": f"{field}: {message}" if field else message,
                "code": ErrorCode.VALIDATION_ERROR.value,
            },
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )
