"""
SMTP delivery for survey emails.
"""

import smtplib
import ssl
from email.message import EmailMessage
from email.utils import make_msgid

import anyio

from meeting_feedback.notifications.interfaces import EmailProvider, OutgoingEmail, SendReceipt
from meeting_feedback.shared.exceptions import DeliveryError
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)


class SMTPEmailProvider(EmailProvider):
    """
    Sends through an SMTP relay, optionally with STARTTLS and login.

    smtplib blocks, so each send runs in a worker thread. The generated
    Message-ID doubles as the delivery id.
    """

    def __init__(
        self,
        host: str,
        port: int,
        default_from: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = 30.0,
    ):
        self._host = host
        self._port = port
        self._default_from = default_from
        self._username = username
        self._password = password
        self._use_tls = use_tls
        self._timeout = timeout

    async def send(self, message: OutgoingEmail) -> SendReceipt:
        return await anyio.to_thread.run_sync(self._deliver, message)

    def compose(self, message: OutgoingEmail) -> EmailMessage:
        mime = EmailMessage()
        mime["Subject"] = message.subject
        mime["From"] = message.sender or self._default_from
        mime["To"] = message.recipient
        mime["Message-ID"] = make_msgid(domain=self._host)

        # Plain part first so clients without HTML fall back to it.
        mime.set_content(message.text or "")
        mime.add_alternative(message.html, subtype="html")
        return mime

    def _connect(self) -> smtplib.SMTP:
        return smtplib.SMTP(self._host, self._port, timeout=self._timeout)

    def _deliver(self, message: OutgoingEmail) -> SendReceipt:
        mime = self.compose(message)
        try:
            with self._connect() as server:
                if self._use_tls:
                    server.starttls(context=ssl.create_default_context())
                if self._username and self._password:
                    server.login(self._username, self._password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP send failed", extra={"to": message.recipient, "error": str(e)})
            raise DeliveryError(f"SMTP error: {e}") from e

        logger.info("Email sent", extra={"to": message.recipient, "provider_message_id": mime["Message-ID"]})
        return SendReceipt(message_id=mime["Message-ID"])

    async def health_check(self) -> bool:
        def probe() -> bool:
            try:
                with self._connect() as server:
                    server.noop()
            except (smtplib.SMTPException, OSError):
                return False
            return True

        return await anyio.to_thread.run_sync(probe)
