"""
Error taxonomy shared by the stores and the HTTP layer.

Every error carries a single human readable message which is rendered to
clients as ``{"error": message}`` with the matching status code.
"""
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class ServiceError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ServiceError):
    """Malformed or missing input."""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(ServiceError):
    """Referenced entity does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    """Uniqueness violation."""

    status_code = status.HTTP_409_CONFLICT


class StorageError(ServiceError):
    """Unexpected failure of the storage backend."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message)


def storage_errors(func: F) -> F:
    """Re-raises SQLAlchemy failures of a repo function as StorageError."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.exception(f"Storage failure in {func.__name__}: {e}")
            raise StorageError() from e

    return wrapper  # type: ignore[return-value]


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.debug(f"Rejected request body on {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "Invalid request body"})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
