"""
Error types raised by the booking engine.

Callers tell failures apart by class, never by message text. The HTTP layer
maps each class to a status code through the handlers registered here.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class BookingEngineError(Exception):
    """Base class for all booking engine failures"""

    status_code = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "type": self.__class__.__name__,
                "message": self.message,
                "details": self.details,
            }
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}')"


class NotFoundError(BookingEngineError):
    """Vendor, booking or service does not exist or is not addressable"""
    status_code = 404


class ValidationError(BookingEngineError):
    """Malformed input or a business rule unrelated to capacity"""
    status_code = 400


class ConflictError(BookingEngineError):
    """Capacity exhausted for a time range, or a duplicate override"""
    status_code = 409


async def booking_engine_error_handler(request: Request, exc: BookingEngineError):
    correlation_id = getattr(request.state, "correlation_id", "unknown")
    logger.info(
        f"{exc.__class__.__name__}: {exc.message}",
        extra={"correlation_id": correlation_id, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BookingEngineError, booking_engine_error_handler)
