"""
Request logging middleware.
Assigns each request an id, logs its outcome and timing, and exposes both as headers.
"""

from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp
import logging
import time
import uuid

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs one line per request.
    Requests slower than ``slow_request_threshold`` seconds are logged as warnings.
    """

    def __init__(self, app: ASGIApp, slow_request_threshold: float = 1.0):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request through the logging middleware.

        Args:
            request: FastAPI request object
            call_next: Next middleware/handler in chain

        Returns:
            Response object with request id and timing headers
        """
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())[:8]
        request.state.request_id = request_id
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            processing_time = time.perf_counter() - start_time
            logger.error(
                f"[{request_id}] {request.method} {request.url.path} failed after {processing_time:.3f}s",
                exc_info=True
            )
            raise

        processing_time = time.perf_counter() - start_time
        message = (
            f"[{request_id}] {request.method} {request.url.path} "
            f"-> {response.status_code} in {processing_time:.3f}s"
        )
        if processing_time > self.slow_request_threshold:
            logger.warning(f"Slow request {message}")
        else:
            logger.info(message)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Processing-Time"] = f"{processing_time:.3f}"
        return response
