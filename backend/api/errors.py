"""
API error types and the application-wide error handlers.

Handlers raise ``ApiError`` subclasses for outcomes the client can act on
(bad input, unknown id). Anything else ends up in ``catch_unhandled_errors``
and is reported as a generic 500.
"""
import logging
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Ungültige Eingabedaten"
BOOK_NOT_FOUND_MESSAGE = "Buch nicht gefunden"
ROUTE_NOT_FOUND_MESSAGE = "Ressource nicht gefunden"
INTERNAL_ERROR_MESSAGE = "Interner Serverfehler"


class ApiError(Exception):
    status_code: int = 500
    message: str = INTERNAL_ERROR_MESSAGE

    def __init__(self, errors: Optional[List[str]] = None):
        super().__init__(self.message)
        self.errors = errors

    def to_body(self) -> dict:
        body: dict = {"message": self.message}
        if self.errors is not None:
            body["errors"] = self.errors
        return body


class InvalidPayloadError(ApiError):
    status_code = 400
    message = INVALID_INPUT_MESSAGE

    def __init__(self, errors: List[str]):
        super().__init__(errors)


class BookNotFoundError(ApiError):
    status_code = 404
    message = BOOK_NOT_FOUND_MESSAGE


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_body())


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Unknown paths and unsupported methods on known paths both count as
    # "no such resource".
    if exc.status_code in (404, 405):
        return JSONResponse(status_code=404, content={"message": ROUTE_NOT_FOUND_MESSAGE})
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def catch_unhandled_errors(request: Request, call_next):
    """Turn any exception escaping a handler into a 500 without leaking details."""
    try:
        return await call_next(request)
    except Exception:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": INTERNAL_ERROR_MESSAGE})


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.middleware("http")(catch_unhandled_errors)
