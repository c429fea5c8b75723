"""
Error handling service for consistent error response formatting and logging.
Every error response carries at least a human-readable ``message``.
"""

from typing import Dict, Any, Optional, List, Union
from fastapi import Request, HTTPException
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from pydantic import ValidationError as PydanticValidationError
from property_desk.utils.exceptions import APIException
import logging
import uuid

logger = logging.getLogger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."


class ErrorHandlerService:
    """
    Service for handling and formatting errors consistently across the application.
    Internal details are logged, never returned to the client.
    """

    @staticmethod
    def format_error_response(
        message: str,
        error_code: Optional[str] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
        request_id: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Format error response in a consistent structure.

        Args:
            message: Human-readable error message
            error_code: Error code identifier
            errors: Optional list of field-level problems
            request_id: Optional request identifier for tracking

        Returns:
            Formatted error response dictionary
        """
        response: Dict[str, Any] = {"message": message}
        if error_code:
            response["code"] = error_code
        if errors is not None:
            response["errors"] = errors
        if request_id:
            response["request_id"] = request_id
        return response

    @staticmethod
    def handle_api_exception(exception: APIException, request: Optional[Request] = None) -> JSONResponse:
        """
        Handle custom API exceptions with structured response.

        Args:
            exception: API exception instance
            request: Optional FastAPI request object

        Returns:
            JSON response with formatted error
        """
        request_id = ErrorHandlerService._request_id(request)

        logger.warning(
            f"API Exception [{request_id}]: {exception.error_code} - {exception.detail}",
            extra={
                "error_code": exception.error_code,
                "status_code": exception.status_code,
                "request_id": request_id,
                "path": request.url.path if request else None
            }
        )

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                message=str(exception.detail),
                error_code=exception.error_code or "API_ERROR",
                request_id=request_id
            ),
            headers=exception.headers
        )

    @staticmethod
    def handle_validation_error(
        exception: Union[RequestValidationError, PydanticValidationError],
        request: Optional[Request] = None
    ) -> JSONResponse:
        """
        Handle request and Pydantic validation errors as 400 responses.

        Args:
            exception: RequestValidationError or Pydantic ValidationError
            request: Optional FastAPI request object

        Returns:
            JSON response with per-field problems
        """
        request_id = ErrorHandlerService._request_id(request)

        errors = []
        for error in exception.errors():
            location = [str(loc) for loc in error.get("loc", ()) if loc not in ("body", "query", "path")]
            errors.append({
                "field": ".".join(location) or None,
                "message": error.get("msg", "Invalid value"),
                "type": error.get("type"),
            })

        logger.warning(
            f"Validation Error [{request_id}]: {len(errors)} field errors",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
            }
        )

        message = "Request validation failed"
        if len(errors) == 1 and errors[0]["field"]:
            message = f"Invalid {errors[0]['field']}: {errors[0]['message']}"

        return JSONResponse(
            status_code=400,
            content=ErrorHandlerService.format_error_response(
                message=message,
                error_code="VALIDATION_ERROR",
                errors=errors,
                request_id=request_id
            )
        )

    @staticmethod
    def handle_database_error(exception: SQLAlchemyError, request: Optional[Request] = None) -> JSONResponse:
        """
        Handle database errors with appropriate error responses.

        Integrity violations map to 409, everything else to 500.
        """
        request_id = ErrorHandlerService._request_id(request)

        if isinstance(exception, IntegrityError):
            error_code = "INTEGRITY_ERROR"
            message = "Data integrity constraint violation"
            status_code = 409
        else:
            error_code = "DATABASE_ERROR"
            message = "Database operation failed"
            status_code = 500

        logger.error(
            f"Database Error [{request_id}]: {error_code} - {exception}",
            extra={
                "error_code": error_code,
                "request_id": request_id,
                "path": request.url.path if request else None,
                "exception_type": type(exception).__name__
            },
            exc_info=True
        )

        return JSONResponse(
            status_code=status_code,
            content=ErrorHandlerService.format_error_response(
                message=message,
                error_code=error_code,
                request_id=request_id
            )
        )

    @staticmethod
    def handle_http_exception(exception: HTTPException, request: Optional[Request] = None) -> JSONResponse:
        """Handle framework HTTP exceptions (404 routes, 405 methods)."""
        request_id = ErrorHandlerService._request_id(request)

        logger.warning(f"HTTP Exception [{request_id}]: {exception.status_code} - {exception.detail}")

        return JSONResponse(
            status_code=exception.status_code,
            content=ErrorHandlerService.format_error_response(
                message=str(exception.detail),
                error_code=f"HTTP_{exception.status_code}",
                request_id=request_id
            ),
            headers=getattr(exception, "headers", None)
        )

    @staticmethod
    def handle_unexpected_error(exception: Exception, request: Optional[Request] = None) -> JSONResponse:
        """Handle anything else as a generic 500, logging the traceback."""
        request_id = ErrorHandlerService._request_id(request)

        logger.error(
            f"Unexpected Error [{request_id}]: {type(exception).__name__} - {exception}",
            extra={
                "request_id": request_id,
                "path": request.url.path if request else None,
            },
            exc_info=exception
        )

        return JSONResponse(
            status_code=500,
            content=ErrorHandlerService.format_error_response(
                message=UNEXPECTED_ERROR_MESSAGE,
                error_code="INTERNAL_SERVER_ERROR",
                request_id=request_id
            )
        )

    @staticmethod
    def _request_id(request: Optional[Request]) -> str:
        """Request id assigned by the logging middleware, or a fresh one."""
        if request is not None:
            request_id = getattr(request.state, "request_id", None)
            if request_id:
                return request_id
        return str(uuid.uuid4())[:8]

