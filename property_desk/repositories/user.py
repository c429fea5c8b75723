"""
User repository for authentication and account provisioning.
"""

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update
from property_desk.database import utcnow
from property_desk.repositories.base import BaseRepository
from property_desk.models.user import User, UserRole
from datetime import datetime
from typing import Optional, Dict, Any
import uuid
import logging

logger = logging.getLogger(__name__)


class UserRepository(BaseRepository[User]):
    """
    Repository for user accounts.
    Handles lookups by email, credential checks and reset token issuance.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(User, db)

    async def create_user(self, user_data: Dict[str, Any]) -> User:
        """
        Create a new user with email validation and password hashing.

        Args:
            user_data: Dictionary containing user information
                      Must include: email, password, name
                      Optional: role (defaults to AGENT)

        Returns:
            Created user instance

        Raises:
            ValueError: If validation fails or the email is taken
            Exception: If database operation fails
        """
        try:
            email = User.validate_email_format(user_data["email"])

            existing_user = await self.get_by_email(email)
            if existing_user:
                raise ValueError(f"User with email {email} already exists")

            now = utcnow()
            create_data = {
                "name": user_data["name"],
                "email": email,
                "password_hash": User.hash_password(user_data["password"]),
                "role": UserRole(user_data.get("role", UserRole.AGENT)),
                "created_at": now,
                "updated_at": now,
            }

            created_user = await self.create(create_data)
            logger.info(f"Created user: {created_user.email} (ID: {created_user.id})")
            return created_user
        except ValueError as e:
            logger.error(f"User validation failed: {e}")
            raise
        except Exception as e:
            logger.error(f"Failed to create user: {e}")
            raise

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        Args:
            email: Email address to search for (matched case-insensitively)

        Returns:
            User instance if found, None otherwise
        """
        try:
            normalized_email = email.lower().strip()
            result = await self.db.execute(select(User).where(User.email == normalized_email))
            user = result.scalar_one_or_none()

            if user is None:
                logger.debug(f"User with email {email} not found")
            return user
        except Exception as e:
            logger.error(f"Failed to get user by email {email}: {e}")
            raise

    async def authenticate_user(self, email: str, password: str) -> Optional[User]:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            User instance if authentication successful, None otherwise
        """
        try:
            user = await self.get_by_email(email)

            if not user:
                logger.debug(f"Authentication failed: user {email} not found")
                return None

            if not user.verify_password(password):
                logger.debug(f"Authentication failed: invalid password for {email}")
                return None

            logger.info(f"User authenticated successfully: {email}")
            return user
        except Exception as e:
            logger.error(f"Failed to authenticate user {email}: {e}")
            raise

    async def set_reset_token(self, user_id: uuid.UUID, token: str, expires_at: datetime) -> bool:
        """
        Store a password reset token on the account.

        Args:
            user_id: Account to update
            token: Opaque reset token
            expires_at: When the token stops being valid

        Returns:
            True if the account was updated
        """
        try:
            stmt = (
                update(User)
                .where(User.id == user_id)
                .values(reset_token=token, reset_expires_at=expires_at, updated_at=utcnow())
            )
            result = await self.db.execute(stmt)
            await self.db.commit()

            updated = result.rowcount > 0
            if updated:
                logger.info(f"Issued password reset token for user {user_id}")
            return updated
        except Exception as e:
            await self.db.rollback()
            logger.error(f"Failed to store reset token for user {user_id}: {e}")
            raise
