"""
Tests for database models.
Tests model validation, serialization and business logic methods.
"""

import pytest
import uuid
from decimal import Decimal
from datetime import datetime, timezone

from property_desk.models.user import User, UserRole
from property_desk.models.property import Property, PropertyStatus, PropertyType, encode_tags, decode_tags
from property_desk.models.media import PropertyImage, PropertyDocument


def build_property(**overrides) -> Property:
    data = {
        "id": uuid.uuid4(),
        "user_id": uuid.uuid4(),
        "title": "Lakeview Cabin",
        "description": "Two-bedroom cabin with a private dock.",
        "street": "12 Shore Rd",
        "city": "Tahoe City",
        "state": "CA",
        "zip_code": "96145",
        "country": "USA",
        "price": Decimal("450000.00"),
        "status": PropertyStatus.FOR_SALE,
        "property_type": PropertyType.RESIDENTIAL,
        "bedrooms": 2,
        "bathrooms": 1,
        "square_footage": 900,
        "is_deleted": False,
    }
    data.update(overrides)
    return Property(**data)


class TestUserModel:
    """Test User model validation and methods."""

    def test_email_validation_valid(self):
        """Valid addresses are normalized to lower case."""
        for email in ["test@example.com", "User.Name@Domain.co.uk", "user+tag@example.org"]:
            assert User.validate_email_format(email) == email.lower()

    def test_email_validation_invalid(self):
        """Malformed addresses are rejected."""
        for email in ["invalid-email", "@example.com", "test@", "test..test@example.com", ""]:
            with pytest.raises(ValueError, match="Invalid email format"):
                User.validate_email_format(email)

    def test_password_hashing(self):
        password = "testpassword123"
        hashed = User.hash_password(password)

        assert hashed != password
        assert hashed.startswith("$2b$")

    def test_password_hashing_too_short(self):
        for password in ["", "short", "1234567", None]:
            with pytest.raises(ValueError, match="Password must be at least 8 characters"):
                User.hash_password(password)

    def test_password_verification(self):
        user = User(
            email="test@example.com",
            name="Test User",
            password_hash=User.hash_password("testpassword123"),
            role=UserRole.AGENT
        )

        assert user.verify_password("testpassword123") is True
        assert user.verify_password("wrongpassword") is False

    def test_is_admin(self):
        agent = User(email="agent@example.com", name="Agent", password_hash="hash", role=UserRole.AGENT)
        manager = User(email="pm@example.com", name="PM", password_hash="hash", role=UserRole.PROPERTY_MANAGER)
        admin = User(email="admin@example.com", name="Admin", password_hash="hash", role=UserRole.ADMIN)

        assert agent.is_admin is False
        assert manager.is_admin is False
        assert admin.is_admin is True

    def test_to_dict_excludes_secrets(self):
        """Password hash and reset token never leave the model."""
        user = User(
            id=uuid.uuid4(),
            email="test@example.com",
            name="Test User",
            password_hash="hash",
            role=UserRole.PROPERTY_MANAGER,
            reset_token="secret-token"
        )

        user_dict = user.to_dict()

        assert user_dict["email"] == "test@example.com"
        assert user_dict["name"] == "Test User"
        assert user_dict["role"] == "property_manager"
        assert "password_hash" not in user_dict
        assert "reset_token" not in user_dict
        assert "reset_expires_at" not in user_dict


class TestTagEncoding:
    """Tags are stored as JSON text."""

    def test_encode_decode(self):
        encoded = encode_tags(["lakefront", "dock"])
        assert isinstance(encoded, str)
        assert decode_tags(encoded) == ["lakefront", "dock"]

    def test_none_and_empty(self):
        assert encode_tags(None) is None
        assert decode_tags(None) is None
        assert decode_tags("") is None

    def test_decode_plain_text(self):
        """A legacy non-JSON value becomes a single tag."""
        assert decode_tags("waterfront") == ["waterfront"]


class TestPropertyModel:
    """Test Property model methods."""

    def test_is_owned_by(self):
        owner_id = uuid.uuid4()
        prop = build_property(user_id=owner_id)

        assert prop.is_owned_by(owner_id) is True
        assert prop.is_owned_by(uuid.uuid4()) is False

    def test_to_dict_numbers_and_enums(self):
        prop = build_property(
            latitude=Decimal("39.17000000"),
            longitude=Decimal("-120.14000000"),
            tags=encode_tags(["lakefront"])
        )

        data = prop.to_dict()

        assert data["price"] == 450000.0
        assert data["latitude"] == pytest.approx(39.17)
        assert data["longitude"] == pytest.approx(-120.14)
        assert data["status"] == "for_sale"
        assert data["property_type"] == "residential"
        assert data["tags"] == ["lakefront"]
        assert data["is_deleted"] is False
        assert data["images"] == []
        assert data["documents"] == []

    def test_to_dict_with_media(self):
        prop = build_property()
        image = PropertyImage(
            id=uuid.uuid4(),
            property_id=prop.id,
            image_url="https://cdn.example.com/a.jpg",
            alt_text="Front",
            display_order=1,
            created_at=datetime.now(timezone.utc)
        )
        document = PropertyDocument(
            id=uuid.uuid4(),
            property_id=prop.id,
            document_url="https://cdn.example.com/plan.pdf",
            document_name="Plan",
            document_type="floor_plan"
        )

        data = prop.to_dict(images=[image], documents=[document])

        assert data["images"][0]["image_url"] == "https://cdn.example.com/a.jpg"
        assert data["images"][0]["property_id"] == str(prop.id)
        assert data["documents"][0]["document_type"] == "floor_plan"
        assert data["documents"][0]["created_at"] is None

    def test_to_dict_without_coordinates(self):
        data = build_property().to_dict()

        assert data["latitude"] is None
        assert data["longitude"] is None
        assert data["tags"] is None
