"""
Test configuration and fixtures for the Property Desk API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Must be set before the application settings are imported
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.pop("SENDGRID_API_KEY", None)

import pytest
import uuid
from datetime import datetime
from decimal import Decimal
from typing import AsyncGenerator, List, Optional, Tuple
from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from httpx import AsyncClient, ASGITransport

from property_desk.main import app
from property_desk.database import Base, get_db
from property_desk.models.user import User, UserRole
from property_desk.models.property import Property, PropertyStatus, PropertyType
from property_desk.models.media import PropertyImage, PropertyDocument
from property_desk.repositories.user import UserRepository
from property_desk.repositories.property import PropertyRepository
from property_desk.repositories.media import ImageRepository, DocumentRepository
from property_desk.services.auth import AuthService
from property_desk.services.email import EmailService
from property_desk.services.property import PropertyService
from property_desk.utils.auth import TokenPayload, create_access_token
from property_desk.utils.dependencies import get_email_service


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"
TEST_PASSWORD = "testpassword123"


class RecordingEmailService(EmailService):
    """Email service that records reset requests instead of sending them."""

    def __init__(self):
        super().__init__(api_key="")
        self.sent_resets: List[Tuple[str, str]] = []

    async def send_password_reset(self, to_email: str, reset_token: str) -> bool:
        self.sent_resets.append((to_email, reset_token))
        return True


@pytest.fixture
async def test_engine():
    """Fresh in-memory schema for each test."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False}
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker:
    return async_sessionmaker(bind=test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def email_service() -> RecordingEmailService:
    return RecordingEmailService()


@pytest.fixture
async def async_client(
    db_session: AsyncSession,
    email_service: RecordingEmailService
) -> AsyncGenerator[AsyncClient, None]:
    """Create an async test client with database and email overrides."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def image_repository(db_session: AsyncSession) -> ImageRepository:
    return ImageRepository(db_session)


@pytest.fixture
def document_repository(db_session: AsyncSession) -> DocumentRepository:
    return DocumentRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession, email_service: RecordingEmailService) -> AuthService:
    return AuthService(db_session, email_service)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: Optional[str] = None,
        password: str = TEST_PASSWORD,
        name: str = "Test User",
        role: UserRole = UserRole.AGENT
    ) -> dict:
        return {
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "name": name,
            "role": role,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **overrides) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**overrides))


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    def create_property_data(**overrides) -> dict:
        data = {
            "title": "Test Property",
            "description": "A bright test property near the park",
            "street": "1 Main St",
            "city": "Springfield",
            "state": "IL",
            "zip_code": "62701",
            "country": "USA",
            "latitude": None,
            "longitude": None,
            "price": Decimal("250000.00"),
            "status": PropertyStatus.FOR_SALE,
            "property_type": PropertyType.RESIDENTIAL,
            "bedrooms": 3,
            "bathrooms": 2,
            "square_footage": 1500,
            "additional_notes": None,
            "tags": None,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_property(property_repo: PropertyRepository, owner_id: uuid.UUID, **overrides) -> Property:
        """Create a test property in the database."""
        return await property_repo.create_property(
            PropertyFactory.create_property_data(**overrides),
            owner_id=owner_id
        )

    @staticmethod
    async def set_created_at(property_repo: PropertyRepository, property_id: uuid.UUID, created_at: datetime) -> None:
        """Overwrite a property's creation time."""
        await property_repo.db.execute(
            update(Property).where(Property.id == property_id).values(created_at=created_at)
        )
        await property_repo.db.commit()


class ImageFactory:
    """Factory for creating test images."""

    @staticmethod
    def create_image_data(**overrides) -> dict:
        data = {
            "image_url": f"https://cdn.example.com/images/{uuid.uuid4().hex[:8]}.jpg",
            "alt_text": "Front view",
            "display_order": 0,
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_image(image_repo: ImageRepository, property_id: uuid.UUID, **overrides) -> PropertyImage:
        return await image_repo.add_to_property(property_id, ImageFactory.create_image_data(**overrides))


class DocumentFactory:
    """Factory for creating test documents."""

    @staticmethod
    def create_document_data(**overrides) -> dict:
        data = {
            "document_url": f"https://cdn.example.com/docs/{uuid.uuid4().hex[:8]}.pdf",
            "document_name": "Floor plan",
            "document_type": "floor_plan",
        }
        data.update(overrides)
        return data

    @staticmethod
    async def create_document(
        document_repo: DocumentRepository,
        property_id: uuid.UUID,
        **overrides
    ) -> PropertyDocument:
        return await document_repo.add_to_property(property_id, DocumentFactory.create_document_data(**overrides))


# Common test data fixtures
@pytest.fixture
async def test_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="agent@example.com",
        name="Test Agent",
        role=UserRole.AGENT
    )


@pytest.fixture
async def test_other_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="other.agent@example.com",
        name="Other Agent",
        role=UserRole.AGENT
    )


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@example.com",
        name="Test Admin",
        role=UserRole.ADMIN
    )


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_agent: User) -> Property:
    return await PropertyFactory.create_property(
        property_repository,
        owner_id=test_agent.id,
        title="Agent Listing"
    )


# Authentication helpers
def token_for(user: User) -> str:
    return create_access_token(user_id=user.id, email=user.email, role=user.role)


def auth_headers_for(user: User) -> dict:
    return {"Authorization": f"Bearer {token_for(user)}"}


def identity_for(user: User) -> TokenPayload:
    return TokenPayload(user_id=user.id, email=user.email, role=user.role)


@pytest.fixture
def agent_headers(test_agent: User) -> dict:
    return auth_headers_for(test_agent)


@pytest.fixture
def other_agent_headers(test_other_agent: User) -> dict:
    return auth_headers_for(test_other_agent)


@pytest.fixture
def admin_headers(test_admin: User) -> dict:
    return auth_headers_for(test_admin)
