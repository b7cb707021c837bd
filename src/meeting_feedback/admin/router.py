"""
FastAPI routers for the admin surface.

``api_router`` serves the JSON API under ``/api/admin`` and ``legacy_router``
mirrors it under ``/admin`` next to the dashboard page.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Query
from fastapi.responses import HTMLResponse
from sqlalchemy.ext.asyncio import AsyncSession

from meeting_feedback.admin.auth import require_admin
from meeting_feedback.admin.dashboard import DASHBOARD_PAGE
from meeting_feedback.admin.repository import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, ResponseQuery
from meeting_feedback.admin.schemas import ResponseDetail, ResponseListItem, ResponseLookup, ResponsePage
from meeting_feedback.shared.database import get_db_session
from meeting_feedback.shared.exceptions import StorageError, ValidationError
from meeting_feedback.shared.logging import get_logger

logger = get_logger(__name__)

api_router = APIRouter(prefix="/api/admin", tags=["admin"])
legacy_router = APIRouter(prefix="/admin", tags=["admin"])


def _parse_int(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def parse_page(value: str | None) -> int:
    """Missing, non-numeric or non-positive pages fall back to 1."""
    page = _parse_int(value)
    return max(page or 1, 1)


def parse_limit(value: str | None) -> int:
    """Missing or non-numeric limits use the default; others are clamped."""
    limit = _parse_int(value) or DEFAULT_PAGE_SIZE
    return min(max(limit, 1), MAX_PAGE_SIZE)


def get_response_query(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> ResponseQuery:
    return ResponseQuery(session)


async def list_responses(
    query: Annotated[ResponseQuery, Depends(get_response_query)],
    page: Annotated[str | None, Query()] = None,
    limit: Annotated[str | None, Query()] = None,
    q: Annotated[str | None, Query()] = None,
    response_id: Annotated[str | None, Query(alias="id")] = None,
) -> ResponsePage | ResponseLookup:
    """List responses, or look up one when ``id`` is given."""
    if response_id is not None and response_id.strip():
        record_id = _parse_int(response_id)
        if record_id is None:
            raise ValidationError("id must be an integer", details={"id": response_id})
        record = await query.get_one(record_id)
        return ResponseLookup(result=ResponseDetail.model_validate(record))

    search = q.strip() if q else None
    try:
        data: dict[str, Any] = await query.list(
            page=parse_page(page),
            limit=parse_limit(limit),
            search=search or None,
        )
    except StorageError:
        logger.exception("Error fetching responses", extra={"search": search})
        raise
    return ResponsePage(
        page=data["page"],
        limit=data["limit"],
        total=data["total"],
        results=[ResponseListItem.model_validate(row) for row in data["results"]],
    )


async def admin_dashboard() -> HTMLResponse:
    return HTMLResponse(DASHBOARD_PAGE)


for _router in (api_router, legacy_router):
    _router.add_api_route(
        "/responses",
        list_responses,
        methods=["GET"],
        response_model=ResponsePage | ResponseLookup,
        dependencies=[Depends(require_admin)],
        summary="Browse survey responses",
    )
    _router.add_api_route(
        "",
        admin_dashboard,
        methods=["GET"],
        response_class=HTMLResponse,
        summary="Admin dashboard",
    )
    _router.add_api_route(
        "/",
        admin_dashboard,
        methods=["GET"],
        response_class=HTMLResponse,
        include_in_schema=False,
    )
