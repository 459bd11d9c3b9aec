"""Error Handlers — the single translation point from errors to HTTP responses.

Invariants:
    - translate_error is the only place a status code is chosen for an error,
      and it chooses by error.kind, never by exception class
    - RequestValidationError → InvalidInputError (422, errors[] with field paths)
    - Exception (catch-all) → UnknownError (500, UNKNOWN_ERROR); api.middleware
      translates these first so CORS headers apply, the handler is the backstop
    - Body is always {code, message, name} (+ errors for validation failures)

Design Decisions:
    - Three registrations, one translator: domain (PerspectiveError), validation
      (FastAPI/Pydantic), catch-all (Exception)
    - Extracted from main.py to keep the app factory short
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from perspective.core.errors import (
    ErrorKind, HTTP_STATUS_BY_KIND, InvalidInputError, PerspectiveError, UnknownError,
)


def translate_error(
    error: PerspectiveError, request: Request, logger: logging.Logger,
) -> JSONResponse:
    """Map a tagged error to its HTTP status and JSON body."""
    status_code = HTTP_STATUS_BY_KIND[error.kind]
    extra = {
        "error_code": error.code,
        "path": request.url.path,
        "method": request.method,
        "status_code": status_code,
    }
    if error.kind is ErrorKind.VALIDATION:
        logger.warning(f"Invalid input on {request.url.path}: {error.message}", extra=extra)
    elif error.kind is ErrorKind.NOT_FOUND:
        logger.info(f"{error.name}: {error.message}", extra=extra)
    else:
        logger.error(
            f"{error.name}: {error.message}", extra=extra,
            exc_info=error.__cause__ is not None,
        )
    return JSONResponse(status_code=status_code, content=error.to_response())


def register_error_handlers(app: FastAPI, logger: logging.Logger) -> None:
    """Register all global error handlers on the FastAPI app."""
    errors_logger = logger.getChild("presentation.errors")
    _register_perspective_error_handler(app, errors_logger)
    _register_validation_error_handler(app, errors_logger)
    _register_generic_error_handler(app, errors_logger)


def _register_perspective_error_handler(app: FastAPI, logger: logging.Logger) -> None:

    @app.exception_handler(PerspectiveError)
    async def perspective_error_handler(request: Request, exc: PerspectiveError):
        """Handle all domain/storage errors raised below the router."""
        return translate_error(exc, request, logger)


def _register_validation_error_handler(app: FastAPI, logger: logging.Logger) -> None:

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors for body, path and query."""
        return translate_error(
            InvalidInputError.from_pydantic(exc.errors()), request, logger,
        )


def _register_generic_error_handler(app: FastAPI, logger: logging.Logger) -> None:

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — anything unanticipated becomes UNKNOWN_ERROR."""
        return translate_error(UnknownError.from_exception(exc), request, logger)
