"""
Resend HTTP API email provider.
"""

from typing import Any

import httpx

from meeting_feedback.notifications.interfaces import EmailProvider, OutgoingEmail, SendReceipt
from meeting_feedback.shared.exceptions import DeliveryError
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)


class ResendEmailProvider(EmailProvider):
    """Sends email through the Resend REST API."""

    def __init__(
        self,
        api_key: str,
        default_from: str,
        base_url: str = "https://api.resend.com",
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize Resend provider.

        Args:
            api_key: Resend API key.
            default_from: Sender used when a message has none.
            base_url: Resend API base URL.
            timeout: HTTP request timeout in seconds.
            transport: Optional httpx transport (tests).
        """
        self._api_key = api_key
        self._default_from = default_from
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                headers={"Authorization": f"Bearer {self._api_key}"},
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _payload(self, message: OutgoingEmail) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": message.sender or self._default_from,
            "to": [message.recipient],
            "subject": message.subject,
            "html": message.html,
        }
        if message.text:
            payload["text"] = message.text
        return payload

    async def send(self, message: OutgoingEmail) -> SendReceipt:
        if not self._api_key:
            raise DeliveryError("Email provider is not configured")

        client = await self._get_client()
        try:
            response = await client.post("/emails", json=self._payload(message))
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            error_data = _json_object(e.response)

            logger.error(
                "Resend rejected email",
                extra={
                    "to": message.recipient,
                    "status_code": e.response.status_code,
                    "error": error_data,
                },
            )
            detail = error_data.get("message") or f"HTTP {e.response.status_code}"
            raise DeliveryError(
                f"Email provider error: {detail}",
                details={"status_code": e.response.status_code},
            ) from e
        except httpx.RequestError as e:
            logger.error(
                "Resend request failed",
                extra={"to": message.recipient, "error": str(e)},
            )
            raise DeliveryError(f"Email provider unreachable: {e}") from e

        # A 2xx means Resend took the email, even if the body is unreadable.
        raw_id = _json_object(response).get("id")
        message_id = str(raw_id) if raw_id else None
        if message_id is None:
            logger.warning("Resend accepted email without an id", extra={"to": message.recipient})
        logger.info("Email sent", extra={"to": message.recipient, "provider_message_id": message_id})
        return SendReceipt(message_id=message_id)

    async def health_check(self) -> bool:
        return bool(self._api_key)


def _json_object(response: httpx.Response) -> dict[str, Any]:
    """Response body as a JSON object, or empty when it is anything else."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
