from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request

logger = logging.getLogger("taskapi.http")


def install_request_tracing(app: FastAPI) -> None:
    """Log one record per HTTP request with method, path, status and duration."""

    @app.middleware("http")
    async def trace_request(request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)
        logger.debug(
            "request finished",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "elapsed_ms": elapsed_ms,
            },
        )
        return response
