"""
Error response schemas for API documentation and consistent error formatting.
"""

from pydantic import BaseModel, Field
from typing import List, Optional


class ErrorDetail(BaseModel):
    """Schema for a single field-level validation problem."""

    field: Optional[str] = Field(None, description="Field name that caused the error")
    message: str = Field(..., description="Human-readable error message")
    type: Optional[str] = Field(None, description="Error type identifier")


class ErrorResponse(BaseModel):
    """Schema for standardized error responses."""

    message: str = Field(..., description="Human-readable error message")
    code: Optional[str] = Field(None, description="Error code identifier")
    request_id: Optional[str] = Field(None, description="Request identifier for log correlation")


class ValidationErrorResponse(ErrorResponse):
    """Error response for rejected input."""

    errors: List[ErrorDetail] = Field(default_factory=list)


# Shared ``responses=`` mappings for router declarations
COMMON_ERROR_RESPONSES = {
    400: {"model": ValidationErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Missing or invalid bearer token"},
    500: {"model": ErrorResponse, "description": "Unexpected server error"},
}

OWNERSHIP_ERROR_RESPONSES = {
    **COMMON_ERROR_RESPONSES,
    403: {"model": ErrorResponse, "description": "Caller is neither the owner nor an admin"},
    404: {"model": ErrorResponse, "description": "Resource not found"},
}
