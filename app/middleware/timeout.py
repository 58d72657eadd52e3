"""Bound the time spent on a single request; overruns become a generic 500."""

import asyncio
import logging
import time
from collections.abc import Callable

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.database import request_deadline
from app.core.errors import INTERNAL_ERROR_DETAIL

logger = logging.getLogger(__name__)


class RequestTimeoutMiddleware(BaseHTTPMiddleware):
    """
    Answer with a generic 500 once timeout_sec has elapsed.

    Sync handlers keep running in their worker thread after the response is
    sent; the deadline published in request_deadline makes their commits fail,
    so a timed-out request never leaves writes behind.
    """

    def __init__(self, app: ASGIApp, timeout_sec: float) -> None:
        super().__init__(app)
        self.timeout_sec = timeout_sec

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        token = request_deadline.set(time.monotonic() + self.timeout_sec)
        try:
            return await asyncio.wait_for(call_next(request), timeout=self.timeout_sec)
        except asyncio.TimeoutError:
            logger.warning(
                "Request timed out after %.1fs: %s %s",
                self.timeout_sec,
                request.method,
                request.url.path,
            )
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"detail": INTERNAL_ERROR_DETAIL},
            )
        finally:
            request_deadline.reset(token)
