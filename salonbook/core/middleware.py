# salonbook/core/middleware.py
"""HTTP middleware: correlation ids and request logging"""
import uuid
import time
import logging
from starlette.requests import Request

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


async def correlation_id_middleware(request: Request, call_next):
    """Reuse the caller's correlation id or mint one, and echo it back"""
    correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
    request.state.correlation_id = correlation_id

    response = await call_next(request)
    response.headers[CORRELATION_HEADER] = correlation_id
    return response


async def request_logging_middleware(request: Request, call_next):
    """One log line per request; server errors at ERROR, rejected bookings at WARNING"""
    started = time.perf_counter()
    correlation_id = getattr(request.state, "correlation_id", "unknown")

    response = await call_next(request)

    duration_ms = round((time.perf_counter() - started) * 1000, 2)
    if response.status_code >= 500:
        level = logging.ERROR
    elif response.status_code == 409:
        level = logging.WARNING
    else:
        level = logging.INFO

    logger.log(
        level,
        f"[{correlation_id}] {request.method} {request.url.path} -> {response.status_code} ({duration_ms}ms)",
        extra={
            "correlation_id": correlation_id,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }
    )

    return response
