"""
Authentication service for login and password reset issuance.
"""

from datetime import timedelta
from typing import Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from property_desk.config import settings
from property_desk.database import utcnow
from property_desk.repositories.user import UserRepository
from property_desk.models.user import User
from property_desk.services.email import EmailService
from property_desk.utils.auth import create_access_token
from property_desk.utils.exceptions import InvalidCredentialsError, EmailDeliveryError
import uuid
import logging

logger = logging.getLogger(__name__)

PASSWORD_RESET_MESSAGE = "If a user with that email exists, reset instructions have been sent."


class AuthService:
    """
    Authentication service.
    Issues bearer tokens for valid credentials and reset tokens on request.
    """

    def __init__(self, db_session: AsyncSession, email_service: EmailService):
        self.db = db_session
        self.user_repo = UserRepository(db_session)
        self.email_service = email_service

    async def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Authenticated User object

        Raises:
            InvalidCredentialsError: If the email is unknown or the password wrong
        """
        user = await self.user_repo.authenticate_user(email, password)

        if not user:
            logger.warning(f"Failed authentication attempt for email: {email}")
            raise InvalidCredentialsError()

        return user

    def create_token(self, user: User) -> str:
        """Create a bearer token carrying the user's id, email and role."""
        return create_access_token(user_id=user.id, email=user.email, role=user.role)

    async def login(self, email: str, password: str) -> Tuple[User, str]:
        """
        Authenticate user and create a token.

        Returns:
            Tuple of (user, access_token)

        Raises:
            InvalidCredentialsError: If credentials are invalid
        """
        user = await self.authenticate_user(email, password)
        token = self.create_token(user)
        logger.info(f"User logged in: {user.email}")
        return user, token

    async def request_password_reset(self, email: str) -> str:
        """
        Issue a reset token and email it, if the account exists.

        The returned message is identical whether or not the account exists,
        and delivery failures are only logged.

        Args:
            email: Address the reset was requested for

        Returns:
            Message to show the caller
        """
        user = await self.user_repo.get_by_email(email)
        if not user:
            logger.info("Password reset requested for unknown email")
            return PASSWORD_RESET_MESSAGE

        reset_token = str(uuid.uuid4())
        expires_at = utcnow() + timedelta(minutes=settings.reset_token_expire_minutes)
        await self.user_repo.set_reset_token(user.id, reset_token, expires_at)

        try:
            await self.email_service.send_password_reset(user.email, reset_token)
        except EmailDeliveryError as e:
            logger.error(f"Failed to deliver password reset email to user {user.id}: {e}")

        return PASSWORD_RESET_MESSAGE
