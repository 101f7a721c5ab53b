# quotedesk/core/errors.py
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from quotedesk.core.logging_config import logger


class AppError(Exception):
    """Base for errors that map directly onto an HTTP response."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    status_code = 400


class Unauthorized(AppError):
    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class Forbidden(AppError):
    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)


class NotFound(AppError):
    status_code = 404


class Conflict(AppError):
    status_code = 409


class UpstreamFailure(AppError):
    """Datastore failure."""

    status_code = 500


class NotificationFailed(UpstreamFailure):
    """Chat notification could not be delivered."""

    status_code = 502


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        if exc.status_code >= 500:
            logger.bind(
                endpoint=str(request.url.path),
                error_type=type(exc).__name__,
                status_code=exc.status_code,
            ).error("request_failed", error=exc.message)
        return _error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        first = errors[0] if errors else {}
        loc = tuple(first.get("loc", ()))
        if not errors or first.get("type") == "json_invalid" or loc == ("body",):
            message = "Invalid JSON payload"
        else:
            field = ".".join(str(p) for p in loc if p != "body")
            message = f"{field}: {first.get('msg')}" if field else str(first.get("msg"))
        return _error_response(400, message)

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.bind(
            endpoint=str(request.url.path),
            error_type=type(exc).__name__,
            status_code=UpstreamFailure.status_code,
        ).error("request_failed", error=str(exc))
        return _error_response(UpstreamFailure.status_code, "Database error")
