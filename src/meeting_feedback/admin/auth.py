"""
Shared-secret guard for the admin API.
"""

import secrets
from typing import Annotated

from fastapi import Header, Query, Request

from meeting_feedback.config import Settings
from meeting_feedback.shared.exceptions import AuthenticationError
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)

ADMIN_TOKEN_HEADER = "x-admin-token"


async def require_admin(
    request: Request,
    x_admin_token: Annotated[str | None, Header(alias=ADMIN_TOKEN_HEADER)] = None,
    token: Annotated[str | None, Query()] = None,
) -> None:
    """Reject the request unless it carries the configured admin token.

    With no ``admin_token`` configured every request is let through.
    """
    settings: Settings = request.app.state.settings
    if not settings.admin_auth_enabled:
        return

    provided = x_admin_token or token
    if not provided or not secrets.compare_digest(
        provided.encode("utf-8"), settings.admin_token.encode("utf-8")
    ):
        logger.warning("Rejected admin request", extra={"path": request.url.path})
        raise AuthenticationError("Unauthorized")
