from __future__ import annotations

from fastapi import status
from fastapi.responses import JSONResponse


class AppError(Exception):
    """Base class for errors rendered to clients as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None) -> None:
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Authentication required"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Resource already exists"


class RateLimitError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too many requests, please try again later."


class InternalError(AppError):
    pass


def error_response(exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
