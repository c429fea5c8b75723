"""
Tests for the async API client and its persisted session.
"""

import pytest
from pathlib import Path

from httpx import AsyncClient, ASGITransport

from property_desk.client import ApiError, PropertyDeskClient, SessionState
from property_desk.main import app
from property_desk.models.user import User
from property_desk.models.property import Property
from tests.conftest import TEST_PASSWORD


@pytest.fixture
async def desk_client(async_client: AsyncClient):
    """Client talking to the app in-process; ``async_client`` installs the overrides."""
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with PropertyDeskClient("http://test", SessionState(), transport=transport) as client:
        yield client


class TestSessionState:
    """Session lifecycle: restore, save, clear and notifications."""

    def test_restore_missing_file(self, tmp_path: Path):
        session = SessionState.restore(tmp_path / "missing.json")

        assert session.is_authenticated is False
        assert session.notifications == []

    def test_save_and_restore(self, tmp_path: Path):
        path = tmp_path / "nested" / "session.json"
        session = SessionState()
        session.set_auth("token-123", {"id": "u1", "email": "agent@example.com"})
        session.add_notification("Saved", type="success")

        session.save(path)
        restored = SessionState.restore(path)

        assert restored.auth_token == "token-123"
        assert restored.auth_user["email"] == "agent@example.com"
        assert [n.message for n in restored.notifications] == ["Saved"]

    def test_restore_corrupt_file(self, tmp_path: Path):
        path = tmp_path / "session.json"
        path.write_text("{not json", encoding="utf-8")

        assert SessionState.restore(path).auth_token is None

    def test_clear_keeps_notifications(self):
        session = SessionState()
        session.set_auth("token", {"id": "u1"})
        session.add_notification("Welcome back")

        session.clear()

        assert session.is_authenticated is False
        assert session.auth_user is None
        assert len(session.notifications) == 1

    def test_remove_notification(self):
        session = SessionState()
        first = session.add_notification("one")
        session.add_notification("two", type="error")

        session.remove_notification(first.id)
        assert [n.message for n in session.notifications] == ["two"]

        session.clear_notifications()
        assert session.notifications == []


class TestPropertyDeskClient:
    """Client calls against the in-process application."""

    @pytest.mark.asyncio
    async def test_login_stores_session(self, desk_client: PropertyDeskClient, test_agent: User):
        await desk_client.login(test_agent.email, TEST_PASSWORD)

        assert desk_client.session.is_authenticated
        assert desk_client.session.auth_user["id"] == str(test_agent.id)

        me = await desk_client.me()
        assert me["email"] == test_agent.email

    @pytest.mark.asyncio
    async def test_failed_login_adds_error_notification(self, desk_client: PropertyDeskClient, test_agent: User):
        with pytest.raises(ApiError) as exc_info:
            await desk_client.login(test_agent.email, "wrongpassword")

        assert exc_info.value.status_code == 401
        assert desk_client.session.is_authenticated is False
        assert desk_client.session.notifications[-1].type == "error"
        assert desk_client.session.notifications[-1].message == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_property_workflow(
        self,
        desk_client: PropertyDeskClient,
        test_agent: User,
        test_property: Property
    ):
        await desk_client.login(test_agent.email, TEST_PASSWORD)

        page = await desk_client.list_properties(status="for_sale", query=None)
        assert page["total_count"] == 1

        updated = await desk_client.update_property(str(test_property.id), {"bedrooms": 4})
        assert updated["bedrooms"] == 4

        image = await desk_client.add_image(str(test_property.id), {"image_url": "https://cdn.example.com/a.jpg"})
        detail = await desk_client.get_property(str(test_property.id))
        assert [i["id"] for i in detail["images"]] == [image["id"]]

        assert await desk_client.delete_image(str(test_property.id), image["id"]) == "Image deleted successfully"

        summary = await desk_client.dashboard()
        assert summary["total_properties"] == 1

        assert await desk_client.delete_property(str(test_property.id)) == "Property deleted successfully"

    @pytest.mark.asyncio
    async def test_logout_drops_token(self, desk_client: PropertyDeskClient, test_agent: User):
        await desk_client.login(test_agent.email, TEST_PASSWORD)
        desk_client.logout()

        with pytest.raises(ApiError) as exc_info:
            await desk_client.dashboard()
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_forgot_password(self, desk_client: PropertyDeskClient):
        message = await desk_client.forgot_password("ghost@example.com")
        assert message.startswith("If a user with that email exists")
