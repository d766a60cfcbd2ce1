"""
Error taxonomy and HTTP mapping

Services raise these; the handlers registered here turn them into
``{"error": ..., "details": ...}`` JSON bodies.
"""

from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)


class ServiceTrackerError(Exception):
    """Base error carrying the HTTP status it maps to"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, error: Optional[str] = None, details: Any = None):
        self.error = error or self.default_message
        self.details = details
        super().__init__(self.error)

    def to_dict(self) -> dict:
        body = {"error": self.error}
        if self.details is not None:
            body["details"] = self.details
        return body


class Unauthenticated(ServiceTrackerError):
    """Missing, malformed, expired or rejected bearer token"""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid token"


class TenantNotFound(ServiceTrackerError):
    """Verified identity with no linked user/business; caller should onboard"""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "User not found in database"


class ValidationError(ServiceTrackerError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class Conflict(ServiceTrackerError):
    """Uniqueness or dependency rule violated"""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Conflict"


class InvalidTransition(Conflict):
    default_message = "Invalid status transition"


class NotFound(ServiceTrackerError):
    """Absent within the caller's tenant (also used for other tenants' rows)"""
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Internal(ServiceTrackerError):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def _format_validation_errors(exc: RequestValidationError) -> list[str]:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return messages


def register_exception_handlers(app: FastAPI) -> None:
    """Install JSON error handlers on the application"""

    @app.exception_handler(ServiceTrackerError)
    async def service_tracker_error_handler(request: Request, exc: ServiceTrackerError):
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.error}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        error = ValidationError("Invalid request", details=_format_validation_errors(exc))
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        error = Internal("Internal server error", details=str(exc) or exc.__class__.__name__)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())
