"""Request middleware for record-anonymizer.

Provides request logging and metrics middleware.
"""

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from record_anonymizer.logging.setup import get_logger, set_request_id
from record_anonymizer.metrics.collectors import (
    ACTIVE_REQUESTS,
    REQUEST_COUNT,
    REQUEST_LATENCY,
)

logger = get_logger(__name__)

DOWNLOAD_PREFIX = "/api/v1/anonymization/download/"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for request logging and metrics.

    Adds request_id to all requests and logs request start/completion.
    Also records Prometheus metrics for request latency and count.
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        request_id = str(uuid.uuid4())[:8]
        set_request_id(request_id)
        request.state.request_id = request_id

        endpoint = self._get_endpoint(request)
        method = request.method

        ACTIVE_REQUESTS.inc()

        start_time = time.time()
        logger.info(
            "Request started",
            extra={
                "event": "request_started",
                "method": method,
                "path": str(request.url.path),
                "client_ip": self._get_client_ip(request),
            },
        )

        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
        except Exception as e:
            logger.exception(
                "Request failed with exception",
                extra={
                    "event": "request_error",
                    "error": str(e),
                },
            )
            raise
        finally:
            duration = time.time() - start_time

            ACTIVE_REQUESTS.dec()

            status_str = str(status_code)
            REQUEST_LATENCY.labels(
                method=method,
                endpoint=endpoint,
                status=status_str,
            ).observe(duration)
            REQUEST_COUNT.labels(
                method=method,
                endpoint=endpoint,
                status=status_str,
            ).inc()

            logger.info(
                "Request completed",
                extra={
                    "event": "request_completed",
                    "method": method,
                    "path": str(request.url.path),
                    "status_code": status_code,
                    "duration_ms": round(duration * 1000, 2),
                },
            )

        response.headers["X-Request-ID"] = request_id
        return response

    def _get_endpoint(self, request: Request) -> str:
        """Normalize the path so download file names don't explode label cardinality."""
        path = request.url.path
        if path.startswith(DOWNLOAD_PREFIX):
            return DOWNLOAD_PREFIX + "{file_name}"
        return path

    def _get_client_ip(self, request: Request) -> str:
        forwarded = request.headers.get("X-Forwarded-For")
        if forwarded:
            return forwarded.split(",")[0].strip()

        real_ip = request.headers.get("X-Real-IP")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"
