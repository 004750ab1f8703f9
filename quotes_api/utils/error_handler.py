"""
Error handling for HTTP endpoints.

AppException instances are rendered as `{error, message, code}` JSON
bodies with the status the exception class carries, so endpoints contain
no try/except blocks of their own.
"""

import asyncio
from functools import wraps
from http import HTTPStatus
from typing import Any, Callable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from quotes_api.exceptions import (
    AppException,
    DependencyFailure,
    ValidationError,
)
from quotes_api.logging import logger
from quotes_api.schemas.response import ErrorResponse
from quotes_api.settings import app_settings


def error_response(ex: AppException, operation: str | None = None) -> JSONResponse:
    """
    Render an AppException as a JSON error response.

    Args:
        ex: The exception to render.
        operation: Operation code used to derive a code when the
            exception has none, e.g. "CREATE_QUOTE" -> "CREATE_QUOTE_ERROR".

    Returns:
        JSONResponse with the exception's HTTP status.
    """
    code = ex.code or (f"{operation}_ERROR" if operation else "INTERNAL_ERROR")
    log = logger.warning if ex.http_status < 500 else logger.error
    log(
        f"{type(ex).__name__} in {operation or 'request'}: {ex.message}",
        extra={"exception_type": type(ex).__name__, "error_code": code},
    )
    body = ErrorResponse(
        error=HTTPStatus(ex.http_status).phrase,
        message=ex.message,
        code=code,
    )
    return JSONResponse(status_code=ex.http_status, content=body.model_dump())


def handle_http_errors(operation: str) -> Callable:
    """
    Decorator factory for HTTP endpoints.

    Applies the request deadline and converts AppException, deadline
    expiry and stray database errors into error responses.

    Args:
        operation: Upper-case operation code, e.g. "CREATE_AUTHOR".

    Returns:
        Decorator wrapping an async endpoint.

    Example:
        ```python
        @router.post("", status_code=201)
        @handle_http_errors("CREATE_AUTHOR")
        async def create_author(data: CreateAuthorInput, service: CatalogServiceDep) -> Author:
            return await service.create_author(data)
        ```
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                async with asyncio.timeout(app_settings.REQUEST_TIMEOUT_SECONDS):
                    return await func(*args, **kwargs)
            except AppException as ex:
                return error_response(ex, operation)
            except TimeoutError:
                return error_response(
                    DependencyFailure(
                        "request deadline exceeded",
                        code=f"{operation}_TIMEOUT",
                    ),
                    operation,
                )
            except SQLAlchemyError as ex:
                logger.error(
                    f"Database error in {func.__name__}: {ex}",
                    exc_info=True,
                )
                return error_response(
                    DependencyFailure("database error occurred"), operation
                )

        return wrapper

    return decorator


async def app_exception_handler(request: Request, ex: Exception) -> JSONResponse:
    """Render AppException raised outside decorated endpoints."""
    assert isinstance(ex, AppException)
    return error_response(ex)


async def validation_exception_handler(
    request: Request, ex: Exception
) -> JSONResponse:
    """Render request validation failures as 400 VALIDATION_ERROR."""
    assert isinstance(ex, RequestValidationError)
    details = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in ex.errors()
    )
    return error_response(ValidationError(details or "invalid request"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(AppException, app_exception_handler)
