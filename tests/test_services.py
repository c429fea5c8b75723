"""
Tests for service classes.
Tests authentication, password reset issuance, property rules, media and dashboard logic.
"""

import pytest
import uuid
from datetime import timedelta
from decimal import Decimal

import httpx
from pydantic import ValidationError

from property_desk.config import settings
from property_desk.database import utcnow
from property_desk.models.user import User, UserRole
from property_desk.models.property import Property, PropertyStatus
from property_desk.repositories.property import PropertyRepository
from property_desk.repositories.user import UserRepository
from property_desk.schemas.media import PropertyImageCreate, PropertyImageUpdate, PropertyDocumentCreate
from property_desk.schemas.property import PropertyCreate, PropertyUpdate, PropertySearchParams
from property_desk.services.auth import AuthService, PASSWORD_RESET_MESSAGE
from property_desk.services.dashboard import DashboardService
from property_desk.services.email import EmailService
from property_desk.services.media import ImageService, DocumentService
from property_desk.services.property import PropertyService
from property_desk.utils.auth import verify_token
from property_desk.utils.exceptions import (
    BadRequestError,
    EmailDeliveryError,
    ImageNotFoundError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    PropertyNotFoundError,
)
from tests.conftest import (
    PropertyFactory,
    ImageFactory,
    RecordingEmailService,
    TEST_PASSWORD,
    identity_for,
)


class TestAuthService:
    """Test AuthService functionality."""

    @pytest.mark.asyncio
    async def test_login_success(self, auth_service: AuthService, test_agent: User):
        user, token = await auth_service.login(test_agent.email, TEST_PASSWORD)

        assert user.id == test_agent.id
        payload = verify_token(token)
        assert payload.user_id == test_agent.id
        assert payload.email == test_agent.email
        assert payload.role == UserRole.AGENT

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, auth_service: AuthService, test_agent: User):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login(test_agent.email, "wrongpassword")

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, auth_service: AuthService):
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login("nobody@example.com", TEST_PASSWORD)

    @pytest.mark.asyncio
    async def test_password_reset_known_email(
        self,
        auth_service: AuthService,
        email_service: RecordingEmailService,
        user_repository: UserRepository,
        test_agent: User
    ):
        message = await auth_service.request_password_reset(test_agent.email)

        assert message == PASSWORD_RESET_MESSAGE
        assert len(email_service.sent_resets) == 1
        to_email, token = email_service.sent_resets[0]
        assert to_email == test_agent.email

        user = await user_repository.get_by_id(test_agent.id)
        assert user.reset_token == token
        assert user.reset_expires_at is not None

    @pytest.mark.asyncio
    async def test_password_reset_unknown_email(
        self,
        auth_service: AuthService,
        email_service: RecordingEmailService
    ):
        message = await auth_service.request_password_reset("nobody@example.com")

        assert message == PASSWORD_RESET_MESSAGE
        assert email_service.sent_resets == []

    @pytest.mark.asyncio
    async def test_password_reset_delivery_failure_is_not_raised(self, db_session, test_agent: User):
        class FailingEmailService(EmailService):
            async def send_password_reset(self, to_email, reset_token):
                raise EmailDeliveryError("provider down", status_code=503)

        service = AuthService(db_session, FailingEmailService(api_key=""))

        assert await service.request_password_reset(test_agent.email) == PASSWORD_RESET_MESSAGE


class TestEmailService:
    """Test SendGrid delivery through a mock transport."""

    @pytest.mark.asyncio
    async def test_disabled_without_api_key(self):
        service = EmailService(api_key="")
        assert await service.send_email("a@example.com", "Hi", "text", "<p>html</p>") is False

    @pytest.mark.asyncio
    async def test_sends_reset_link(self):
        captured = []

        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            return httpx.Response(202)

        service = EmailService(
            api_key="SG.test-key",
            from_email="desk@example.com",
            api_url="https://sendgrid.test/v3/mail/send",
            transport=httpx.MockTransport(handler)
        )

        assert await service.send_password_reset("agent@example.com", "abc-123") is True

        request = captured[0]
        assert request.headers["Authorization"] == "Bearer SG.test-key"
        body = request.content.decode()
        assert "agent@example.com" in body
        assert "token=abc-123" in body

    @pytest.mark.asyncio
    async def test_provider_rejection_raises(self):
        service = EmailService(
            api_key="SG.test-key",
            api_url="https://sendgrid.test/v3/mail/send",
            transport=httpx.MockTransport(lambda request: httpx.Response(401, text="bad key"))
        )

        with pytest.raises(EmailDeliveryError) as exc_info:
            await service.send_email("agent@example.com", "Hi", "text", "<p>html</p>")
        assert exc_info.value.status_code == 401


class TestPropertyService:
    """Test PropertyService business rules."""

    def _create_payload(self, **overrides) -> PropertyCreate:
        data = PropertyFactory.create_property_data(**overrides)
        return PropertyCreate(**data)

    @pytest.mark.asyncio
    async def test_create_property_owned_by_caller(self, property_service: PropertyService, test_agent: User):
        created = await property_service.create_property(
            self._create_payload(title="  Lakeview Cabin  ", tags=["lakefront", " "]),
            identity_for(test_agent)
        )

        assert created["user_id"] == str(test_agent.id)
        assert created["title"] == "Lakeview Cabin"
        assert created["tags"] == ["lakefront"]
        assert created["is_deleted"] is False
        assert created["images"] == []
        assert created["documents"] == []

    @pytest.mark.asyncio
    async def test_list_properties_includes_media(
        self,
        property_service: PropertyService,
        image_repository,
        test_property: Property
    ):
        await ImageFactory.create_image(image_repository, test_property.id)

        properties, total = await property_service.list_properties(PropertySearchParams())

        assert total == 1
        assert properties[0]["id"] == str(test_property.id)
        assert len(properties[0]["images"]) == 1
        assert properties[0]["documents"] == []

    def test_search_params_page_size_follows_settings(self):
        params = PropertySearchParams()
        assert params.limit == settings.default_page_size
        assert params.sort_order == "desc"

        assert PropertySearchParams(limit=settings.max_page_size).limit == settings.max_page_size
        with pytest.raises(ValidationError):
            PropertySearchParams(limit=settings.max_page_size + 1)

    @pytest.mark.asyncio
    async def test_get_property_detail_not_found(self, property_service: PropertyService):
        with pytest.raises(PropertyNotFoundError):
            await property_service.get_property_detail(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_update_property(self, property_service: PropertyService, test_property: Property, test_agent: User):
        updated = await property_service.update_property(
            test_property,
            PropertyUpdate(price=Decimal("275000"), status=PropertyStatus.SOLD),
            identity_for(test_agent)
        )

        assert updated["price"] == 275000.0
        assert updated["status"] == "sold"
        assert updated["title"] == "Agent Listing"

    @pytest.mark.asyncio
    async def test_update_property_id_mismatch(
        self,
        property_service: PropertyService,
        test_property: Property,
        test_agent: User
    ):
        with pytest.raises(BadRequestError):
            await property_service.update_property(
                test_property,
                PropertyUpdate(id=uuid.uuid4(), title="Other"),
                identity_for(test_agent)
            )

    @pytest.mark.asyncio
    async def test_owner_change_requires_admin(
        self,
        property_service: PropertyService,
        test_property: Property,
        test_agent: User,
        test_other_agent: User,
        test_admin: User
    ):
        with pytest.raises(InsufficientPermissionsError):
            await property_service.update_property(
                test_property,
                PropertyUpdate(user_id=test_other_agent.id),
                identity_for(test_agent)
            )

        updated = await property_service.update_property(
            test_property,
            PropertyUpdate(user_id=test_other_agent.id),
            identity_for(test_admin)
        )
        assert updated["user_id"] == str(test_other_agent.id)

    @pytest.mark.asyncio
    async def test_delete_property(
        self,
        property_service: PropertyService,
        property_repository: PropertyRepository,
        test_property: Property,
        test_agent: User
    ):
        await property_service.delete_property(test_property, identity_for(test_agent))

        assert await property_repository.get_active(test_property.id) is None
        with pytest.raises(PropertyNotFoundError):
            await property_service.delete_property(test_property, identity_for(test_agent))


class TestMediaServices:
    """Test image and document services."""

    @pytest.mark.asyncio
    async def test_add_and_update_image(self, db_session, test_property: Property):
        service = ImageService(db_session)

        created = await service.add(
            test_property,
            PropertyImageCreate(image_url="https://cdn.example.com/front.jpg", alt_text="Front")
        )
        assert created["image_url"] == "https://cdn.example.com/front.jpg"
        assert created["display_order"] == 0

        updated = await service.update(test_property, uuid.UUID(created["id"]), PropertyImageUpdate(display_order=3))
        assert updated["display_order"] == 3
        assert updated["alt_text"] == "Front"

    @pytest.mark.asyncio
    async def test_image_on_other_property_not_found(
        self,
        db_session,
        property_repository: PropertyRepository,
        test_property: Property,
        test_agent: User
    ):
        service = ImageService(db_session)
        other_property = await PropertyFactory.create_property(property_repository, test_agent.id)
        created = await service.add(test_property, PropertyImageCreate(image_url="https://cdn.example.com/a.jpg"))

        with pytest.raises(ImageNotFoundError):
            await service.delete(other_property, uuid.UUID(created["id"]))

    @pytest.mark.asyncio
    async def test_add_document(self, db_session, test_property: Property):
        service = DocumentService(db_session)

        created = await service.add(
            test_property,
            PropertyDocumentCreate(
                document_url="https://cdn.example.com/plan.pdf",
                document_name="Plan",
                document_type="floor_plan"
            )
        )

        assert created["property_id"] == str(test_property.id)
        assert created["document_name"] == "Plan"


class TestDashboardService:
    """Test dashboard aggregation."""

    @pytest.mark.asyncio
    async def test_summary(self, db_session, property_repository: PropertyRepository, test_agent: User):
        base = utcnow()
        for index in range(6):
            sale = await PropertyFactory.create_property(property_repository, test_agent.id, title=f"Sale {index}")
            await PropertyFactory.set_created_at(property_repository, sale.id, base + timedelta(minutes=index))
        rental = await PropertyFactory.create_property(
            property_repository, test_agent.id, title="Rental", status=PropertyStatus.FOR_RENT
        )
        await PropertyFactory.set_created_at(property_repository, rental.id, base + timedelta(minutes=10))
        sold = await PropertyFactory.create_property(
            property_repository, test_agent.id, title="Sold", status=PropertyStatus.SOLD
        )
        await property_repository.soft_delete(sold.id)

        summary = await DashboardService(db_session).get_summary()

        assert summary["total_properties"] == 7
        assert summary["for_sale_properties"] == 6
        assert summary["for_rent_properties"] == 1
        assert summary["sold_properties"] == 0
        assert summary["recent_activity"] == ["Rental", "Sale 5", "Sale 4", "Sale 3", "Sale 2"]
