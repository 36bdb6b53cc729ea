"""Error Handlers — the single place an exception becomes a wire response.

Invariants:
    - ApiError → its own kind, status and message
    - RequestValidationError → VALIDATION_ERROR with the first failing rule's message
    - Framework HTTPException (unmatched route/method) → NOT_FOUND "Route not found"
    - Anything else → INTERNAL_ERROR "Internal Server Error" (no driver text)
    - "stack" appears in the envelope only when include_trace was set at build time
    - ErrorResponder never raises; it always returns a response
    - Each failure is logged exactly once; unclassified ones with their traceback

Design Decisions:
    - One ErrorResponder shared by the FastAPI handlers (route errors) and the
      pipeline driver (stage errors, unhandled exceptions): one renderer, one log line
    - include_trace fixed when the app is built from Settings, not per request
"""

import logging
import traceback

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.validation import first_error_message
from app.core.errors import ApiError, ErrorKind, kind_for_status

logger = logging.getLogger(__name__)

ROUTE_NOT_FOUND = "Route not found"


class ErrorResponder:
    """Classify an exception and serialize it into the failure envelope."""

    def __init__(self, include_trace: bool):
        self.include_trace = include_trace

    def __call__(self, request: Request, exc: Exception) -> JSONResponse:
        error = self._classify(exc)
        summary = f"[{error.code}] {error.http_status}: {error.message}"
        # One line per failure; unclassified ones carry their traceback
        unhandled = error is not exc and error.kind is ErrorKind.INTERNAL_ERROR
        if unhandled:
            summary += f" ({type(exc).__name__}: {exc})"
        log = logger.warning if error.http_status < 500 else logger.error
        log(
            summary,
            exc_info=exc if unhandled else None,
            extra={
                "error_code": error.code,
                "path": request.url.path,
                "method": request.method,
            },
        )
        content = error.to_response()
        if self.include_trace:
            content["stack"] = "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__),
            )
        return JSONResponse(status_code=error.http_status, content=content)

    def _classify(self, exc: Exception) -> ApiError:
        if isinstance(exc, ApiError):
            return exc
        if isinstance(exc, RequestValidationError):
            return ApiError(
                ErrorKind.VALIDATION_ERROR, first_error_message(exc.errors()),
            )
        if isinstance(exc, StarletteHTTPException):
            kind = kind_for_status(exc.status_code)
            message = ROUTE_NOT_FOUND if kind is ErrorKind.NOT_FOUND else None
            return ApiError(kind, message)
        return ApiError(ErrorKind.INTERNAL_ERROR)


def register_error_handlers(app: FastAPI, responder: ErrorResponder) -> None:
    """Route the framework's exception hooks into the shared responder."""

    async def handle(request: Request, exc: Exception) -> JSONResponse:
        return responder(request, exc)

    app.add_exception_handler(ApiError, handle)
    app.add_exception_handler(RequestValidationError, handle)
    app.add_exception_handler(StarletteHTTPException, handle)
