"""Per-request access logging with a request id."""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any

from fastapi import FastAPI
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging import env_flag

REQUEST_ID_HEADER = "X-Request-ID"

# Probes hit these every few seconds; they are not worth a log line each
QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one line per request and echo a request id back to the caller.

    An incoming X-Request-ID is reused so ids can be followed across
    services; otherwise a new one is generated.
    """

    def __init__(self, app: FastAPI) -> None:
        super().__init__(app)
        self.logger = logging.getLogger("app.request")

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            status_code = response.status_code if response else None
            self._log(request, request_id, status_code, duration_ms)

    def _log(
        self,
        request: Request,
        request_id: str,
        status_code: int | None,
        duration_ms: float,
    ) -> None:
        failed = status_code is None or status_code >= 500
        if request.url.path in QUIET_PATHS and not failed:
            return

        extra: dict[str, Any] = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query": request.url.query,
            "status_code": status_code,
            "duration_ms": round(duration_ms, 2),
            "client_ip": request.client.host if request.client else None,
            "user_agent": request.headers.get("user-agent"),
        }
        log = self.logger.error if failed else self.logger.info
        log(
            "%s %s%s -> %s (%.2fms)",
            request.method,
            request.url.path,
            f"?{request.url.query}" if request.url.query else "",
            status_code,
            duration_ms,
            extra=extra,
        )


def add_request_logging_middleware(app: FastAPI) -> None:
    """Attach the middleware unless LOG_REQUESTS is turned off."""
    if not env_flag("LOG_REQUESTS", default=True):
        return
    app.add_middleware(RequestLoggingMiddleware)
