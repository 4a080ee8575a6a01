"""
API error taxonomy and the single place it is mapped to HTTP responses.

Handlers and dependencies raise one of the ApiError subclasses; nothing else
builds an error response. Framework errors (unknown route, wrong method,
malformed path parameters) are folded into the same envelope, and anything
unexpected becomes a generic 500 with the traceback logged.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from postboard.core.messages import format_errors
from postboard.core.responses import error

logger = logging.getLogger(__name__)

SERVER_ERROR_MESSAGE = "Server error"


class ApiError(Exception):
    """Base class for errors that map to a failure envelope."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = SERVER_ERROR_MESSAGE

    def __init__(
        self,
        message: str | None = None,
        errors: dict[str, list[str]] | None = None,
    ) -> None:
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class Unauthenticated(ApiError):
    """No token, an unknown token, or bad login credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthenticated"


class Forbidden(ApiError):
    """Authenticated, but missing the required ability or not the owner."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class ValidationFailed(ApiError):
    """Payload failed validation; errors maps field name to messages."""

    status_code = 422
    default_message = "Validation failed"

    def __init__(self, errors: dict[str, list[str]], message: str | None = None) -> None:
        super().__init__(message, errors=errors)


_HTTP_STATUS_MESSAGES: dict[int, str] = {
    status.HTTP_401_UNAUTHORIZED: Unauthenticated.default_message,
    status.HTTP_403_FORBIDDEN: Forbidden.default_message,
    status.HTTP_404_NOT_FOUND: NotFound.default_message,
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    return error(exc.message, exc.status_code, errors=exc.errors, headers=headers)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    message = _HTTP_STATUS_MESSAGES.get(exc.status_code)
    if message is None:
        message = exc.detail if isinstance(exc.detail, str) else SERVER_ERROR_MESSAGE
    return error(message, exc.status_code, headers=getattr(exc, "headers", None))


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # A path id that is not an integer cannot name an existing resource.
    if any((err.get("loc") or ("",))[0] == "path" for err in exc.errors()):
        return error(NotFound.default_message, NotFound.status_code)

    return error(
        ValidationFailed.default_message,
        ValidationFailed.status_code,
        errors=format_errors(exc.errors(), skip_location=True),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error on %s %s",
        request.method,
        request.url.path,
    )
    return error(SERVER_ERROR_MESSAGE, status.HTTP_500_INTERNAL_SERVER_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error taxonomy to the app."""
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
