"""
Error Responses

Every error leaves the API as ``{"error": message}``. Endpoints raise
HTTPException with a plain string detail; the handlers below only change
the body shape, never the status code. Request validation failures
(missing fields, wrong types, malformed JSON) become 400 responses.
"""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


def error_message(detail: Any) -> str:
    if isinstance(detail, str) and detail.strip():
        return detail
    return "Request failed"


def validation_error_message(exc: RequestValidationError) -> str:
    """First validation error as '<field>: <reason>'."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"

    first = errors[0]
    location = [str(part) for part in first.get("loc", ()) if part != "body"]
    reason = first.get("msg", "Invalid value")
    if location:
        return f"{'.'.join(location)}: {reason}"
    return reason


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": error_message(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = validation_error_message(exc)
    logger.info(f"Rejected {request.method} {request.url.path}: {message}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": message},
    )


def add_exception_handlers(app: FastAPI) -> None:
    """Register the error body handlers on a FastAPI app."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
