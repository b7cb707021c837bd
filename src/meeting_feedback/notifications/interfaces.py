"""
Email delivery contract shared by the providers and the dispatcher.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class OutgoingEmail:
    """One rendered survey email addressed to a single participant."""

    recipient: str
    subject: str
    html: str
    text: str | None = None
    # Falls back to the provider's configured sender.
    sender: str | None = None


@dataclass(frozen=True)
class SendReceipt:
    """What a provider hands back once it has accepted an email."""

    message_id: str | None = None
    accepted_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class EmailProvider(ABC):
    """
    A way of getting an OutgoingEmail to its recipient.

    ``send`` either returns a SendReceipt or raises DeliveryError; providers
    never report failure through the return value.
    """

    @abstractmethod
    async def send(self, message: OutgoingEmail) -> SendReceipt:
        """Hand ``message`` to the provider.

        Raises:
            DeliveryError: The provider rejected the message or was unreachable.
        """

    @abstractmethod
    async def health_check(self) -> bool: ...

    async def close(self) -> None:
        """Release connections; the default provider holds none."""
