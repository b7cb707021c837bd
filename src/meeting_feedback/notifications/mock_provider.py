"""
In-memory email provider for tests and local development.
"""

from meeting_feedback.notifications.interfaces import EmailProvider, OutgoingEmail, SendReceipt
from meeting_feedback.shared.exceptions import DeliveryError


class MockEmailProvider(EmailProvider):
    """Records every message; can be told to fail for chosen recipients."""

    def __init__(self) -> None:
        self._sent: list[OutgoingEmail] = []
        self._next_id: int = 1
        self._fail_all: bool = False
        self._fail_for: set[str] = set()
        self._fail_error: str = "Mock failure"

    def reset(self) -> None:
        self._sent.clear()
        self._next_id = 1
        self._fail_all = False
        self._fail_for.clear()
        self._fail_error = "Mock failure"

    def configure_failure(
        self,
        should_fail: bool = True,
        error_message: str = "Mock failure",
        recipients: set[str] | None = None,
    ) -> None:
        """Fail every send, or only sends to ``recipients`` when given."""
        self._fail_error = error_message
        if recipients:
            self._fail_for = set(recipients) if should_fail else set()
            self._fail_all = False
        else:
            self._fail_all = should_fail
            self._fail_for = set()

    @property
    def sent(self) -> list[OutgoingEmail]:
        return self._sent.copy()

    def get_last_message(self) -> OutgoingEmail | None:
        return self._sent[-1] if self._sent else None

    async def send(self, message: OutgoingEmail) -> SendReceipt:
        if self._fail_all or message.recipient in self._fail_for:
            raise DeliveryError(self._fail_error)

        message_id = f"mock-{self._next_id}"
        self._next_id += 1
        self._sent.append(message)
        return SendReceipt(message_id=message_id)

    async def health_check(self) -> bool:
        return True
