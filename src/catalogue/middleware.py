"""Cross-cutting HTTP behaviour: permissive CORS/timing headers and request logs."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Iterable

from starlette.middleware.base import BaseHTTPMiddleware

from .logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable

    from fastapi import FastAPI, Request, Response
    from starlette.types import ASGIApp


logger = get_logger("catalogue.http")

RESPONSE_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Timing-Allow-Origin": "*",
}


class ResponseHeadersMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        for name, value in RESPONSE_HEADERS.items():
            response.headers[name] = value
        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one ``request_completed`` event per request outside ``ignore_paths``."""

    def __init__(self, app: ASGIApp, ignore_paths: Iterable[str] = ("/health",)) -> None:
        super().__init__(app)
        self._ignore_paths = frozenset(ignore_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        path = request.url.path
        if path in self._ignore_paths:
            return await call_next(request)

        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        logger.info(
            "request_completed",
            method=request.method,
            path=path,
            status_code=response.status_code,
            duration_ms=round(duration_ms, 2),
        )
        return response


def setup_middleware(app: FastAPI) -> None:
    # Added last runs outermost, so headers land on every logged response
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(ResponseHeadersMiddleware)


__all__ = ["RequestLoggingMiddleware", "ResponseHeadersMiddleware", "setup_middleware"]
