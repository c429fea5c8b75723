"""
Pydantic schemas for request/response validation.
"""

from .auth import (
    LoginRequest,
    LoginResponse,
    ForgotPasswordRequest,
    MessageResponse,
    CurrentIdentityResponse,
)
from .user import UserResponse
from .property import (
    PropertyBase,
    PropertyCreate,
    PropertyUpdate,
    PropertySearchParams,
    PropertyResponse,
    PropertyListResponse,
)
from .media import (
    PropertyImageCreate,
    PropertyImageUpdate,
    PropertyImageResponse,
    PropertyDocumentCreate,
    PropertyDocumentUpdate,
    PropertyDocumentResponse,
)
from .dashboard import DashboardResponse
from .error import ErrorDetail, ErrorResponse, ValidationErrorResponse

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "ForgotPasswordRequest",
    "MessageResponse",
    "CurrentIdentityResponse",
    "UserResponse",
    "PropertyBase",
    "PropertyCreate",
    "PropertyUpdate",
    "PropertySearchParams",
    "PropertyResponse",
    "PropertyListResponse",
    "PropertyImageCreate",
    "PropertyImageUpdate",
    "PropertyImageResponse",
    "PropertyDocumentCreate",
    "PropertyDocumentUpdate",
    "PropertyDocumentResponse",
    "DashboardResponse",
    "ErrorDetail",
    "ErrorResponse",
    "ValidationErrorResponse",
]
