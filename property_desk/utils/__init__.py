"""
Utility modules for the Property Desk API.
"""

from .auth import (
    create_access_token,
    verify_token,
    TokenPayload
)

from .exceptions import (
    APIException,
    NotFoundError,
    UnauthorizedError,
    ForbiddenError,
    BadRequestError,
    MissingTokenError,
    InvalidCredentialsError,
    TokenExpiredError,
    InvalidTokenError,
    InsufficientPermissionsError,
    PropertyNotFoundError,
    PropertyOwnershipError,
    ImageNotFoundError,
    DocumentNotFoundError,
    EmailDeliveryError
)

# Dependencies are imported directly where needed to avoid circular imports

__all__ = [
    # Auth utilities
    "create_access_token",
    "verify_token",
    "TokenPayload",

    # Exceptions
    "APIException",
    "NotFoundError",
    "UnauthorizedError",
    "ForbiddenError",
    "BadRequestError",
    "MissingTokenError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "InvalidTokenError",
    "InsufficientPermissionsError",
    "PropertyNotFoundError",
    "PropertyOwnershipError",
    "ImageNotFoundError",
    "DocumentNotFoundError",
    "EmailDeliveryError",
]
