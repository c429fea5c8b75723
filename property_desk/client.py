"""
Async HTTP client for the Property Desk API.

``SessionState`` holds what a signed-in client keeps between calls (the bearer
token, the user record and pending notifications). It is an explicit object
with a load/save/clear lifecycle rather than global state, and it is passed to
``PropertyDeskClient`` which attaches the token to every request.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field
import httpx
import logging
import uuid

logger = logging.getLogger(__name__)


class Notification(BaseModel):
    """A message queued for display to the user."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    type: str = "info"
    message: str


class SessionState(BaseModel):
    """Persistable client session."""

    auth_token: Optional[str] = None
    auth_user: Optional[Dict[str, Any]] = None
    notifications: List[Notification] = Field(default_factory=list)

    @property
    def is_authenticated(self) -> bool:
        return bool(self.auth_token)

    @classmethod
    def restore(cls, path: Union[str, Path]) -> "SessionState":
        """
        Load a saved session.

        A missing or unreadable file yields an empty session.
        """
        path = Path(path)
        if not path.exists():
            return cls()
        try:
            return cls.model_validate_json(path.read_text(encoding="utf-8"))
        except ValueError as e:
            logger.warning(f"Discarding unreadable session file {path}: {e}")
            return cls()

    def save(self, path: Union[str, Path]) -> None:
        """Write the session to ``path`` as JSON."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.model_dump_json(indent=2), encoding="utf-8")

    def set_auth(self, token: str, user: Dict[str, Any]) -> None:
        self.auth_token = token
        self.auth_user = user

    def clear(self) -> None:
        """Forget the signed-in user (logout). Notifications are kept."""
        self.auth_token = None
        self.auth_user = None

    def add_notification(self, message: str, type: str = "info") -> Notification:
        notification = Notification(type=type, message=message)
        self.notifications.append(notification)
        return notification

    def remove_notification(self, notification_id: str) -> None:
        self.notifications = [n for n in self.notifications if n.id != notification_id]

    def clear_notifications(self) -> None:
        self.notifications = []


class ApiError(Exception):
    """Non-success response from the API."""

    def __init__(self, status_code: int, message: str, payload: Optional[dict] = None):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message
        self.payload = payload or {}


class PropertyDeskClient:
    """
    Async client covering every API endpoint.

    Usage::

        session = SessionState.restore("~/.property-desk/session.json")
        async with PropertyDeskClient("http://localhost:8000", session) as client:
            await client.login("agent@example.com", "secret-password")
            page = await client.list_properties(status="for_sale")
    """

    def __init__(
        self,
        base_url: str,
        session: Optional[SessionState] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 10.0,
        notify_errors: bool = True
    ):
        self.session = session or SessionState()
        self.notify_errors = notify_errors
        self._http = httpx.AsyncClient(base_url=base_url, transport=transport, timeout=timeout)

    async def __aenter__(self) -> "PropertyDeskClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    def _headers(self) -> Dict[str, str]:
        if self.session.auth_token:
            return {"Authorization": f"Bearer {self.session.auth_token}"}
        return {}

    async def _request(self, method: str, url: str, **kwargs) -> Any:
        response = await self._http.request(method, url, headers=self._headers(), **kwargs)

        try:
            payload = response.json()
        except ValueError:
            payload = {}

        if response.is_success:
            return payload

        message = payload.get("message") if isinstance(payload, dict) else None
        message = message or response.reason_phrase or "Request failed"
        if self.notify_errors:
            self.session.add_notification(message, type="error")
        raise ApiError(response.status_code, message, payload if isinstance(payload, dict) else None)

    # Authentication
    async def login(self, email: str, password: str) -> Dict[str, Any]:
        """Sign in and store the token and user on the session."""
        data = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        self.session.set_auth(data["token"], data["user"])
        return data

    def logout(self) -> None:
        self.session.clear()

    async def forgot_password(self, email: str) -> str:
        data = await self._request("POST", "/auth/forgot-password", json={"email": email})
        return data["message"]

    async def me(self) -> Dict[str, Any]:
        return await self._request("GET", "/auth/me")

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    # Dashboard
    async def dashboard(self) -> Dict[str, Any]:
        return await self._request("GET", "/dashboard")

    # Properties
    async def list_properties(self, **params) -> Dict[str, Any]:
        """
        List properties.

        Accepts ``query``, ``status``, ``property_type``, ``user_id``, ``limit``,
        ``offset``, ``sort_by`` and ``sort_order``; ``None`` values are dropped.
        """
        query = {key: str(value) for key, value in params.items() if value is not None}
        return await self._request("GET", "/properties", params=query)

    async def get_property(self, property_id: str) -> Dict[str, Any]:
        return await self._request("GET", f"/properties/{property_id}")

    async def create_property(self, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", "/properties", json=data)

    async def update_property(self, property_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/properties/{property_id}", json=changes)

    async def delete_property(self, property_id: str) -> str:
        data = await self._request("DELETE", f"/properties/{property_id}")
        return data["message"]

    # Images
    async def add_image(self, property_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/properties/{property_id}/images", json=data)

    async def update_image(self, property_id: str, image_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/properties/{property_id}/images/{image_id}", json=changes)

    async def delete_image(self, property_id: str, image_id: str) -> str:
        data = await self._request("DELETE", f"/properties/{property_id}/images/{image_id}")
        return data["message"]

    # Documents
    async def add_document(self, property_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("POST", f"/properties/{property_id}/documents", json=data)

    async def update_document(self, property_id: str, document_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/properties/{property_id}/documents/{document_id}", json=changes)

    async def delete_document(self, property_id: str, document_id: str) -> str:
        data = await self._request("DELETE", f"/properties/{property_id}/documents/{document_id}")
        return data["message"]
