"""
Service layer for business logic implementation.
"""

from .auth import AuthService
from .property import PropertyService
from .media import ImageService, DocumentService
from .dashboard import DashboardService
from .email import EmailService
from .error_handler import ErrorHandlerService

__all__ = [
    "AuthService",
    "PropertyService",
    "ImageService",
    "DocumentService",
    "DashboardService",
    "EmailService",
    "ErrorHandlerService",
]
