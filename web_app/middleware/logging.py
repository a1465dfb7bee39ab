"""Logging middleware."""

import time
import logging
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable


class LoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request/response logging.

    Every request gets one line with its status and duration. Visitor
    requests, marked by the redirect route with ``request.state.link_code``,
    also get a line saying which code was visited and how it resolved.
    """

    def __init__(self, app, logger: logging.Logger = None):
        """Initialize logging middleware."""
        super().__init__(app)
        self.logger = logger or logging.getLogger("shortlinks.web")

    async def dispatch(self, request: Request, call_next: Callable):
        """Log request and response."""
        start_time = time.perf_counter()

        client_ip = request.client.host if request.client else "unknown"
        self.logger.debug(f"Request: {request.method} {request.url.path} from {client_ip}")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        code = getattr(request.state, "link_code", None)
        if code is not None:
            self._log_visit(code, response.status_code, response.headers.get("location"))

        self.logger.info(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - Duration: {duration_ms:.2f}ms"
        )

        return response

    def _log_visit(self, code: str, status_code: int, location) -> None:
        if status_code == 302:
            self.logger.info(f"Visit {code} -> {location}")
        elif status_code == 404:
            self.logger.info(f"Visit {code}: no such link")
        else:
            self.logger.warning(f"Visit {code} failed with status {status_code}, not counted")
