"""Module: errors.

API error taxonomy. Every failure leaves the service as ``{"error": message}``;
``register_exception_handlers`` wires the renderers onto the app.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(ApiError):
    status_code = 400


class DuplicateError(ApiError):
    status_code = 400


class NotFoundError(ApiError):
    status_code = 404


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def api_error_handler(request: Request, exc: ApiError):
    return _error(exc.status_code, exc.message)


async def http_exception_handler(request: Request, exc: HTTPException):
    return _error(exc.status_code, str(exc.detail))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Report only the first problem, named by its field.
    errors = exc.errors()
    first_error = errors[0] if errors else {}
    field = (first_error.get("loc") or ["request"])[-1]
    if not isinstance(field, str):
        # Malformed JSON reports a character offset here.
        field = "body"
    msg = first_error.get("msg", "Invalid request")
    return _error(400, f"Invalid {field}: {msg}")


async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error("Store error on %s %s", request.method, request.url.path, exc_info=exc)
    orig = getattr(exc, "orig", None)
    return _error(500, str(orig) if orig is not None else str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
