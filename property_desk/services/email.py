"""
Email delivery through the SendGrid v3 HTTP API.
Used by the forgot-password flow to deliver reset links.
"""

from typing import Optional
from urllib.parse import urlencode
from property_desk.config import settings
from property_desk.utils.exceptions import EmailDeliveryError
import httpx
import logging

logger = logging.getLogger(__name__)


class EmailService:
    """
    Sends transactional email.

    Without an API key the message is logged and skipped, which keeps local
    development and tests free of network calls.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        from_email: Optional[str] = None,
        api_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key if api_key is not None else settings.sendgrid_api_key
        self.from_email = from_email or settings.from_email
        self.api_url = api_url or settings.sendgrid_api_url
        self.transport = transport

    def build_reset_link(self, reset_token: str) -> str:
        separator = "&" if "?" in settings.reset_url else "?"
        return f"{settings.reset_url}{separator}{urlencode({'token': reset_token})}"

    async def send_email(self, to_email: str, subject: str, text: str, html: str) -> bool:
        """
        Send one message.

        Args:
            to_email: Recipient address
            subject: Subject line
            text: Plain text body
            html: HTML body

        Returns:
            True if the provider accepted the message, False if sending is disabled

        Raises:
            EmailDeliveryError: If the provider rejects the request or is unreachable
        """
        if not self.api_key:
            logger.info(f"Email delivery disabled; skipped '{subject}' to {to_email}")
            return False

        payload = {
            "personalizations": [{"to": [{"email": to_email}]}],
            "from": {"email": self.from_email},
            "subject": subject,
            "content": [
                {"type": "text/plain", "value": text},
                {"type": "text/html", "value": html},
            ],
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(transport=self.transport, timeout=10.0) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error(f"Email provider unreachable: {e}")
            raise EmailDeliveryError(f"Email provider unreachable: {e}")

        if response.status_code not in (200, 201, 202):
            logger.error(f"Email provider rejected message ({response.status_code}): {response.text}")
            raise EmailDeliveryError("Email provider rejected message", status_code=response.status_code)

        logger.info(f"Sent '{subject}' to {to_email}")
        return True

    async def send_password_reset(self, to_email: str, reset_token: str) -> bool:
        """Deliver a password reset link for ``reset_token``."""
        link = self.build_reset_link(reset_token)
        text = (
            "You requested a password reset.\n\n"
            f"Open this link to choose a new password: {link}\n\n"
            f"The link expires in {settings.reset_token_expire_minutes} minutes."
        )
        html = (
            "<p>You requested a password reset.</p>"
            f"<p><a href=\"{link}\">Reset your password</a></p>"
            f"<p>The link expires in {settings.reset_token_expire_minutes} minutes.</p>"
        )
        return await self.send_email(to_email, "Password Reset Request", text, html)
