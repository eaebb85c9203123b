"""core/middleware.py — Custom ASGI middleware for the Fight Analyzer API.

Provides:
  - RequestIDMiddleware  : stamps every request with a UUID (X-Request-ID header)
  - TimingMiddleware     : logs method, path, status, upload size and duration

Analysis requests are slow (Gemini watches both videos), so the timing log is
the main way to see where a request spent its time.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach a request ID to every request and response.

    A client-supplied X-Request-ID is reused so the browser can correlate its
    own retries; otherwise a fresh UUID4 is generated.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Log one line per request with its status and wall-clock duration.

    Reads request.state.request_id, so RequestIDMiddleware must wrap it.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 2)

        logger.info(
            "request completed",
            extra={
                "request_id": getattr(request.state, "request_id", "-"),
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "content_length": request.headers.get("content-length"),
                "duration_ms": duration_ms,
            },
        )
        return response
