"""
FastAPI dependency injection utilities for authentication, ownership and services.
Provides reusable dependencies for route protection and identity extraction.
"""

from typing import Optional
import uuid
from fastapi import Depends, Path
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from property_desk.database import get_db
from property_desk.models.property import Property
from property_desk.repositories.property import PropertyRepository
from property_desk.services.auth import AuthService
from property_desk.services.dashboard import DashboardService
from property_desk.services.email import EmailService
from property_desk.services.media import ImageService, DocumentService
from property_desk.services.property import PropertyService
from property_desk.utils.auth import TokenPayload, verify_token
from property_desk.utils.exceptions import (
    MissingTokenError,
    PropertyNotFoundError,
    PropertyOwnershipError,
)
import logging

logger = logging.getLogger(__name__)

# HTTP Bearer token security scheme
security = HTTPBearer(auto_error=False)


def get_email_service() -> EmailService:
    """Email collaborator; overridden in tests."""
    return EmailService()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    email_service: EmailService = Depends(get_email_service)
) -> AuthService:
    """
    Get authentication service instance.

    Args:
        db: Database session
        email_service: Email collaborator for reset links

    Returns:
        AuthService instance
    """
    return AuthService(db, email_service)


async def get_property_service(db: AsyncSession = Depends(get_db)) -> PropertyService:
    """Get property service instance."""
    return PropertyService(db)


async def get_image_service(db: AsyncSession = Depends(get_db)) -> ImageService:
    return ImageService(db)


async def get_document_service(db: AsyncSession = Depends(get_db)) -> DocumentService:
    return DocumentService(db)


async def get_dashboard_service(db: AsyncSession = Depends(get_db)) -> DashboardService:
    return DashboardService(db)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> TokenPayload:
    """
    Get the identity carried by the bearer token.

    The token alone decides the identity; no database lookup happens here.

    Args:
        credentials: HTTP Bearer credentials

    Returns:
        TokenPayload with id, email and role

    Raises:
        MissingTokenError: If no bearer token was sent
        TokenExpiredError: If token is expired
        InvalidTokenError: If token is malformed or forged
    """
    if not credentials or not credentials.credentials:
        raise MissingTokenError()

    return verify_token(credentials.credentials)


async def get_owned_property(
    property_id: uuid.UUID = Path(..., description="Property ID"),
    current_user: TokenPayload = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> Property:
    """
    Load the target property and require the caller to own it or be an admin.

    Args:
        property_id: Property from the URL
        current_user: Authenticated identity
        db: Database session shared with the handler's services

    Returns:
        The loaded, non-deleted Property

    Raises:
        PropertyNotFoundError: If the property is missing or soft-deleted
        PropertyOwnershipError: If the caller is neither owner nor admin
    """
    property_obj = await PropertyRepository(db).get_active(property_id)
    if not property_obj:
        raise PropertyNotFoundError()

    if not current_user.is_admin and not property_obj.is_owned_by(current_user.user_id):
        logger.warning(f"User {current_user.user_id} denied access to property {property_id}")
        raise PropertyOwnershipError()

    return property_obj
