"""Last-resort error handling hooked into the FastAPI application."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.responses import INTERNAL_ERROR_MESSAGE, error_response, problem
from models.results import ErrorItem

logger = logging.getLogger(__name__)


async def guard_unhandled_errors(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    try:
        return await call_next(request)
    except Exception:
        logger.exception(
            "Unhandled error while serving request",
            extra={"method": request.method, "path": request.url.path},
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)


async def request_validation_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = error.get("loc") or ()
        name = str(location[-1]) if location else "request"
        errors.append(ErrorItem.validation(code=name, description=error.get("msg", "Invalid value.")))
    return problem(errors)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.middleware("http")(guard_unhandled_errors)
