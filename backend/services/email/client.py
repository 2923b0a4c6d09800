import logging
from functools import lru_cache
from typing import Optional

import httpx

from config import get_settings
from exceptions import ConfigurationError
from services.upstream import check_response, transport_failure


logger = logging.getLogger(__name__)

SERVICE = "email"


class ResendEmailClient:
    """Transactional email over the Resend HTTP API."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        base_url: str = "https://api.resend.com",
        timeout: float = 20,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ConfigurationError("Email API key is required")
        self.api_key = api_key
        self.sender = sender
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy initialization of the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def send(self, to: str, subject: str, html: str) -> str:
        """Send one email.

        Returns:
            Provider message id.

        Raises:
            UpstreamServiceError: If the provider rejects the message or is unreachable.
        """
        try:
            response = await self.client.post(
                "/emails",
                json={"from": self.sender, "to": [to], "subject": subject, "html": html},
            )
        except httpx.HTTPError as e:
            raise transport_failure(SERVICE, e) from e

        payload = check_response(SERVICE, response).json()
        message_id = payload.get("id", "")
        logger.info(f"Email '{subject}' dispatched (id={message_id})")
        return message_id

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None


@lru_cache()
def get_email_client() -> ResendEmailClient:
    settings = get_settings()
    return ResendEmailClient(
        settings.resend_api_key,
        settings.email_from,
        base_url=settings.resend_api_url,
        timeout=settings.http_timeout,
    )
