import logging

import httpx

from app.domain import SubscriberEmail
from app.errors import NotifierError

logger = logging.getLogger(__name__)


class EmailClient:
    """
    Client for the transactional email HTTP API.

    Created once per process and shared by every request; each call carries
    its own timeout so a slow API only holds up the request that is waiting on it.
    """

    def __init__(
        self,
        base_url: str,
        sender: SubscriberEmail,
        authorization_token: str | None,
        timeout: float,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.sender = sender
        self.authorization_token = authorization_token
        self.timeout = timeout
        self._owns_http_client = http_client is None
        self.http_client = http_client or httpx.AsyncClient()

    async def send_email(
        self,
        recipient: SubscriberEmail,
        subject: str,
        html_content: str,
        text_content: str,
    ) -> None:
        """
        Send one email through the API.

        Raises:
            NotifierError: On a non-success status or any transport failure. Not retried.
        """
        request_body = {
            "From": self.sender.value,
            "To": recipient.value,
            "Subject": subject,
            "HtmlBody": html_content,
            "TextBody": text_content,
        }
        headers = {"X-Postmark-Server-Token": self.authorization_token or ""}

        try:
            response = await self.http_client.post(
                f"{self.base_url}/email",
                json=request_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise NotifierError(
                f"Email API request failed with status {e.response.status_code}"
            ) from e
        except httpx.RequestError as e:
            raise NotifierError(f"Email API request failed: {e!r}") from e

        logger.info("Email sent to %s", recipient)

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self.http_client.aclose()
