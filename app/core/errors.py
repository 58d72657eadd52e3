"""App-wide exception handlers: validation errors as 400 with the first message, internal errors as generic 500."""

import logging
from collections.abc import Sequence
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

INTERNAL_ERROR_DETAIL = "Internal Server Error"
AUTH_REQUIRED_DETAIL = "Authentication required"

# pydantic error type whose message is shown to the caller verbatim.
FIELD_MESSAGE = "field_message"


class RequestDeadlineExceeded(Exception):
    """Raised instead of committing once the request has already timed out."""

    def __init__(self) -> None:
        super().__init__("request deadline passed before commit")


def first_error_message(errors: Sequence[Any]) -> str:
    """Human-readable message for the first pydantic error (no aggregation)."""
    if not errors:
        return "Invalid request"
    err = errors[0]
    loc = [part for part in err.get("loc", ()) if isinstance(part, str) and part != "body"]
    field = loc[-1] if loc else None
    if err.get("type") == "missing":
        return f"{field} is required" if field else "Request body is required"
    msg = str(err.get("msg") or "Invalid value")
    if err.get("type") == FIELD_MESSAGE:
        return msg
    # pydantic prefixes messages raised via ValueError; the caller only needs the text.
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    return f"{field}: {msg}" if field else msg


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": first_error_message(exc.errors())},
    )


async def deadline_exceeded_handler(request: Request, exc: RequestDeadlineExceeded) -> JSONResponse:
    logger.warning(
        "Discarded changes of timed-out request %s %s", request.method, request.url.path
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_DETAIL},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": INTERNAL_ERROR_DETAIL},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the handlers on the application."""
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(RequestDeadlineExceeded, deadline_exceeded_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
