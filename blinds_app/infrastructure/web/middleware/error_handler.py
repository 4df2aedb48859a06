"""
Global error handler middleware for the FastAPI application.
Catches and formats all exceptions consistently.
"""

import logging
import traceback
from typing import Any, Dict
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status

from blinds_app.config import settings
from blinds_app.domain.models.base import (
    DomainException,
    ValidationError,
    BusinessRuleViolation,
    EntityNotFoundError,
    DocumentCompositionError,
)

logger = logging.getLogger(__name__)

# Most specific first
DOMAIN_STATUS_CODES = (
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND, "Not Found"),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Validation Error"),
    (DocumentCompositionError, status.HTTP_422_UNPROCESSABLE_ENTITY, "Document Composition Failed"),
    (BusinessRuleViolation, status.HTTP_409_CONFLICT, "Business Rule Violation"),
    (DomainException, status.HTTP_400_BAD_REQUEST, "Bad Request"),
)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle all uncaught exceptions and format error responses.
    """

    async def dispatch(self, request: Request, call_next):
        """
        Process the request and handle any exceptions.
        """
        try:
            response = await call_next(request)
            return response
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        """
        Handle different types of exceptions and return appropriate responses.
        """
        error_response = self.format_error_response(exc)

        if isinstance(exc, DomainException):
            logger.warning(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
            )
        else:
            logger.error(
                f"Unhandled exception: {type(exc).__name__}: {str(exc)}",
                exc_info=True,
                extra={
                    "request_path": request.url.path,
                    "request_method": request.method,
                    "client_host": request.client.host if request.client else None
                }
            )

            # In development, add more debug information
            if settings.debug:
                error_response["debug"] = {
                    "exception_type": type(exc).__name__,
                    "traceback": traceback.format_exc().split("\n")
                }

        return JSONResponse(
            status_code=error_response.get("status_code", 500),
            content=error_response
        )

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        """
        Format exception into a consistent error response structure.
        """
        # Default error response
        error_response: Dict[str, Any] = {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
        }

        if isinstance(exc, DomainException):
            for exc_type, status_code, label in DOMAIN_STATUS_CODES:
                if isinstance(exc, exc_type):
                    error_response.update({
                        "error": label,
                        "message": exc.message,
                        "code": exc.code,
                        "status_code": status_code
                    })
                    break

            field = getattr(exc, "field", None)
            if field:
                error_response["field"] = field
            job_id = getattr(exc, "job_id", None)
            if job_id:
                error_response["job_id"] = job_id

        elif isinstance(exc, ValueError):
            error_response.update({
                "error": "Bad Request",
                "message": str(exc),
                "status_code": status.HTTP_400_BAD_REQUEST
            })
        elif isinstance(exc, FileNotFoundError):
            error_response.update({
                "error": "Not Found",
                "message": str(exc) or "Resource not found",
                "status_code": status.HTTP_404_NOT_FOUND
            })

        return error_response
