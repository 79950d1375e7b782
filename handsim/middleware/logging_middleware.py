"""Request/response logging middleware for FastAPI."""

import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from handsim.core.logging_config import get_logger

REQUEST_ID_HEADER = "X-Request-ID"
DURATION_HEADER = "X-Duration-Ms"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request with a correlation id and its wall-clock duration.

    Simulation requests can take seconds, so the duration is also echoed
    back in a response header.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]
        logger = get_logger(__name__, request_id=request_id, path=request.url.path)

        logger.info(f"{request.method} {request.url.path} started")
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                f"{request.method} {request.url.path} failed",
                extra={"extra_data": {"duration_ms": _elapsed_ms(start_time)}},
                exc_info=True,
            )
            raise

        duration_ms = _elapsed_ms(start_time)
        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            f"{request.method} {request.url.path} -> {response.status_code}",
            extra={
                "extra_data": {
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                }
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers[DURATION_HEADER] = str(duration_ms)
        return response


def _elapsed_ms(start_time: float) -> float:
    return round((time.perf_counter() - start_time) * 1000, 2)
