"""JSON error envelope shared by every router.

Domain code fails by raising Protean exceptions (or the storefront
subclasses in ``shared.errors``). The handlers installed here turn them into
``{"success": false, "message": ..., "errors": {...}}`` responses with the
status code for their kind.
"""

import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.logging import get_logger

logger = get_logger(__name__)

# Map exception types to HTTP status codes
ERROR_STATUS_CODES: dict[type, int] = {
    ValidationError: 400,
    ObjectNotFoundError: 404,
    InvalidStateError: 400,
}


def _status_for(exc: Exception) -> int:
    for cls in type(exc).__mro__:
        if cls in ERROR_STATUS_CODES:
            return ERROR_STATUS_CODES[cls]
    return 500


def _messages_of(exc: Exception) -> dict:
    """The ``{field: [message, ...]}`` dict an exception was raised with."""
    messages = getattr(exc, "messages", None)
    if messages is None and exc.args:
        messages = exc.args[0]
    if isinstance(messages, dict):
        return {str(k): v if isinstance(v, list) else [str(v)] for k, v in messages.items()}
    return {"_entity": [str(exc)]} if str(exc) else {}


def _headline(errors: dict, fallback: str) -> str:
    for values in errors.values():
        if values:
            return str(values[0])
    return fallback


def error_body(message: str, errors: dict | None = None) -> dict:
    return {"success": False, "message": message, "errors": errors or {}}


async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Map Protean and storefront exceptions to their HTTP status."""
    errors = _messages_of(exc)
    status_code = _status_for(exc)
    return JSONResponse(
        status_code=status_code,
        content=error_body(_headline(errors, type(exc).__name__), errors),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body") or "_entity"
        errors.setdefault(field, []).append(error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content=error_body(_headline(errors, "Invalid request"), errors))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        path=request.url.path,
        method=request.method,
        error=str(exc),
        exc_info=exc,
    )
    message = str(exc) if os.environ.get("PROTEAN_ENV") == "development" else "Internal server error"
    return JSONResponse(status_code=500, content=error_body(message))


def register_error_handlers(app: FastAPI) -> None:
    """Install the storefront's JSON error handlers on ``app``."""
    for exc_class in (ValidationError, ObjectNotFoundError, InvalidStateError):
        app.add_exception_handler(exc_class, domain_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
