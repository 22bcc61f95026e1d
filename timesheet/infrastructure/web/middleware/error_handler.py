"""
Error handler middleware.
Maps domain exceptions escaping a report request to JSON error responses.
"""

import logging
import traceback
from typing import Any, Dict, Tuple
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from fastapi import status

from timesheet.config import settings
from timesheet.domain.models.base import (
    DomainException,
    InvalidInterval,
    InvalidWindow,
    ParseError,
    StoreError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
_ERROR_RESPONSES: Tuple[Tuple[tuple, int, str, str], ...] = (
    ((ParseError, ValidationError), status.HTTP_400_BAD_REQUEST, "Bad Request", ""),
    ((StoreError,), status.HTTP_503_SERVICE_UNAVAILABLE, "Service Unavailable",
     "The report could not be read from the store"),
    ((InvalidWindow, InvalidInterval), status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error",
     "The report could not be computed"),
)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turn exceptions raised while building a report into error responses."""

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return await self.handle_exception(request, exc)

    async def handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        error_response = self.format_error_response(exc)
        log_context = {
            "request_path": request.url.path,
            "time_span": request.query_params.get("t"),
            "time_span_value": request.query_params.get("v"),
            "report": request.query_params.get("c"),
        }

        if error_response["status_code"] < status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.info(f"Rejected report request: {type(exc).__name__}: {exc}", extra=log_context)
        else:
            logger.error(f"Report request failed: {type(exc).__name__}: {exc}", exc_info=exc, extra=log_context)

        if settings.debug:
            error_response["debug"] = {
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__)
            }

        return JSONResponse(status_code=error_response["status_code"], content=error_response)

    def format_error_response(self, exc: Exception) -> Dict[str, Any]:
        """
        Build the response body of an exception.

        Domain exceptions carry their code; parse and validation errors also
        carry their message, since it names the offending parameter.
        """
        error_response: Dict[str, Any] = {
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "status_code": status.HTTP_500_INTERNAL_SERVER_ERROR
        }

        for classes, status_code, error, message in _ERROR_RESPONSES:
            if isinstance(exc, classes):
                error_response.update({
                    "error": error,
                    "message": message or exc.message,
                    "status_code": status_code
                })
                break

        if isinstance(exc, DomainException):
            error_response["code"] = exc.code

        return error_response
