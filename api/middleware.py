"""
Global middleware.

One access-log line per request (method, path, status, duration) and an
``X-Process-Time`` header.  Request bodies and the ``Authorization`` header
are never logged, so passwords and bearer tokens stay out of the logs.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)


def register_middleware(app: FastAPI) -> None:
    """Attach app-level middleware (timing / access log)."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.info(
            "%s %s %d %.3fs",
            request.method, request.url.path, response.status_code, elapsed,
        )
        return response
