"""
Metrics middleware for the financial service.

Records count and latency of every HTTP request.
"""

import time
from typing import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware


class PrometheusMiddleware(BaseHTTPMiddleware):
    """Call a tracking function with method, path, status and duration per request."""

    def __init__(self, app, track_func: Callable):
        super().__init__(app)
        self.track_func = track_func

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()
        response = await call_next(request)

        # Route template keeps document ids out of the label set
        route = request.scope.get("route")
        endpoint = getattr(route, "path", request.url.path)

        self.track_func(
            method=request.method,
            endpoint=endpoint,
            status_code=response.status_code,
            duration=time.perf_counter() - start_time,
        )

        return response
