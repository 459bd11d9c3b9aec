"""HTTP Middleware — security headers and the unhandled-error boundary.

Invariants:
    - Headers are set with setdefault: a route may still override them
    - Unexpected exceptions become UNKNOWN_ERROR responses inside the middleware
      stack, so CORS and security headers still apply to them
"""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from perspective.api.error_handlers import translate_error
from perspective.core.errors import UnknownError


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        response.headers.setdefault("Cross-Origin-Resource-Policy", "same-origin")
        return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Translate exceptions that escaped every exception handler."""

    def __init__(self, app, logger: logging.Logger):
        super().__init__(app)
        self._logger = logger.getChild("presentation.errors")

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return translate_error(UnknownError.from_exception(exc), request, self._logger)
