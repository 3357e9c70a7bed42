"""
Error-rendering boundary.

The only place where an exception becomes an HTTP response:

- field validation failures (FastAPI request validation, or a pydantic
  model validated inside a router) → VALIDATION_ERROR result, 400, one
  message per failing field;
- framework HTTP errors (unknown route, wrong method) → result carrying the
  framework's status code;
- anything else → INFRASTRUCTURE_ERROR result, 500, with the original
  message appended for diagnostics.  No traceback reaches the body.

Services never let business failures get this far; they return ``Err``.
"""
import logging
from collections.abc import Iterable, Mapping
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from blog_api.responses import render
from blog_api.result import ErrorKind, default_message_for, error_from_kind, error_from_messages

logger = logging.getLogger(__name__)

# Location prefixes FastAPI adds to request errors; not part of the field name.
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _field_name(loc: Iterable[Any]) -> str:
    parts = [str(part) for part in loc if part not in _LOCATION_PREFIXES]
    return ".".join(parts)


def field_messages(errors: Iterable[Mapping[str, Any]]) -> list[str]:
    """One client-facing message per field error, in the validator's order."""
    messages: list[str] = []
    for err in errors:
        if err.get("type") == "missing":
            field = _field_name(err.get("loc", ()))
            required = default_message_for(ErrorKind.REQUIRED_FIELD)
            messages.append(f"{required}: {field}" if field else required)
        else:
            messages.append(str(err.get("msg", "")))
    return messages


async def handle_validation_error(
    request: Request, exc: RequestValidationError | ValidationError
) -> JSONResponse:
    messages = field_messages(exc.errors())
    logger.warning(
        "Validation failed on %s %s: %s", request.method, request.url.path, messages
    )
    return render(error_from_kind(ErrorKind.VALIDATION_ERROR, messages))


async def handle_http_exception(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    logger.warning(
        "HTTP %s on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail
    )
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    response = render(error_from_messages(detail, exc.status_code))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Error processing request %s %s", request.method, request.url.path, exc_info=exc
    )
    internal = default_message_for(ErrorKind.INFRASTRUCTURE_ERROR)
    return render(error_from_kind(ErrorKind.INFRASTRUCTURE_ERROR, f"{internal}: {exc}"))


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(ValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(Exception, handle_unexpected_error)
