"""
Email provider factory.

Single source of truth for configuration: Settings (Pydantic Settings).
"""

from meeting_feedback.config import Settings
from meeting_feedback.notifications.interfaces import EmailProvider
from meeting_feedback.notifications.mock_provider import MockEmailProvider
from meeting_feedback.notifications.resend_provider import ResendEmailProvider
from meeting_feedback.notifications.smtp_provider import SMTPEmailProvider
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)


def _mask(s: str, keep: int = 6) -> str:
    if not s:
        return ""
    if len(s) <= keep:
        return "*" * len(s)
    return f"{s[:keep]}***"


def create_email_provider(settings: Settings) -> EmailProvider:
    """Create the email provider selected by ``settings.email_provider``."""
    logger.info(
        "Email provider resolved",
        extra={
            "email_provider": settings.email_provider,
            "resend_api_key": _mask(settings.resend_api_key),
            "sender": settings.sender,
            "base_url": settings.base_url,
        },
    )

    if settings.email_provider == "resend":
        if not settings.resend_api_key:
            logger.warning("RESEND_API_KEY is not set; survey emails will fail")
        return ResendEmailProvider(
            api_key=settings.resend_api_key,
            default_from=settings.sender,
            base_url=settings.resend_api_url,
            timeout=settings.email_timeout_seconds,
        )

    if settings.email_provider == "smtp":
        return SMTPEmailProvider(
            host=settings.smtp_host,
            port=settings.smtp_port,
            default_from=settings.sender,
            username=settings.smtp_username,
            password=settings.smtp_password,
            use_tls=settings.smtp_use_tls,
            timeout=settings.email_timeout_seconds,
        )

    if settings.email_provider == "mock":
        return MockEmailProvider()

    raise ValueError(f"Unsupported email_provider: {settings.email_provider}")
