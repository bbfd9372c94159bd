"""
Application error hierarchy and FastAPI exception handlers.

AppError is the base for all typed errors. Each subclass maps to one error
kind of the callable protocol (``unauthenticated``, ``invalid_argument``,
``not_found``, ``deadline_exceeded``, ``internal``). The global exception
handler converts AppError subclasses to consistent JSON responses.

Non-AppError exceptions are reported as a generic ``internal`` 500 so no
implementation detail leaks to the caller (Sentry captures them when enabled).
"""

from __future__ import annotations

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.logging import get_logger

log = get_logger(__name__)


class AppError(Exception):
    """Base application error. All typed errors inherit from this."""

    status_code: int = 500
    error_code: str = "internal"

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        details: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.details = details

    def to_dict(self) -> dict:
        payload: dict = {"error": self.message, "code": self.error_code}
        if self.field is not None:
            payload["field"] = self.field
        if self.details is not None:
            payload["details"] = self.details
        return payload


class ValidationError(AppError):
    status_code = 400
    error_code = "invalid_argument"


class AuthenticationError(AppError):
    status_code = 401
    error_code = "unauthenticated"


class NotFoundError(AppError):
    status_code = 404
    error_code = "not_found"


class DeadlineExceededError(AppError):
    status_code = 504
    error_code = "deadline_exceeded"


class InternalError(AppError):
    status_code = 500
    error_code = "internal"


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        err = ValidationError("Malformed request body.")
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        log.error(
            "unhandled_exception",
            path=request.url.path,
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return JSONResponse(
            status_code=500,
            content={"error": "An internal server error occurred.", "code": "internal"},
        )
