# File: app/core/errors.py

"""
Error taxonomy for the blog API.

Every failure that reaches a client is rendered as ``{"error": "<message>"}``
with the status carried by the exception. Unexpected exceptions become a
generic 500 and are only logged server-side.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class BlogError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationFailed(BlogError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class DuplicateResource(BlogError):
    status_code = status.HTTP_400_BAD_REQUEST
    message = "Resource already exists"


class AuthenticationFailed(BlogError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class PermissionDenied(BlogError):
    status_code = status.HTTP_403_FORBIDDEN
    message = "Forbidden"


class ResourceNotFound(BlogError):
    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


class StorageError(BlogError):
    message = "Storage operation failed"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def first_validation_message(errors) -> str:
    """
    Message for the first failing field of a request payload.

    Accepts the error list of either a RequestValidationError or a pydantic
    ValidationError.
    """
    if not errors:
        return "Invalid request"

    err = errors[0]
    if err.get("type") == "json_invalid":
        return "Invalid request body"
    if err.get("type") == "missing":
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        field = loc[-1] if loc else "body"
        if field == "body":
            return "Request body is required"
        return f"{field} is required"

    # Messages raised by our own validators come through the ctx untouched
    cause = (err.get("ctx") or {}).get("error")
    if isinstance(cause, Exception):
        return str(cause)
    return err.get("msg", "Invalid request")


async def blog_error_handler(request: Request, exc: BlogError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, first_validation_message(exc.errors()))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
