"""
FastAPI router for the public survey pages.
"""

import json
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from meeting_feedback.invites.models import InviteState
from meeting_feedback.shared.database import DatabaseManager, get_database_manager
from meeting_feedback.shared.exceptions import NotFoundError, StorageError, ValidationError
from meeting_feedback.shared.logging import get_logger
from meeting_feedback.surveys.pages import (
    ERROR_PAGE,
    NOT_FOUND_PAGE,
    THANK_YOU_PAGE,
    render_completed,
    render_survey_form,
)
from meeting_feedback.surveys.session import SurveySession

logger = get_logger(__name__)

router = APIRouter(prefix="/api/survey", tags=["survey"])

INVALID_BODY_MESSAGE = "Invalid request body"


def get_survey_session(
    db: Annotated[DatabaseManager, Depends(get_database_manager)],
) -> SurveySession:
    """Dependency for the survey state machine."""
    return SurveySession(db)


async def read_submission(request: Request) -> dict[str, Any]:
    """Body as a flat mapping, from JSON or a form post."""
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in ("application/x-www-form-urlencoded", "multipart/form-data"):
        form = await request.form()
        return {key: value for key, value in form.items() if isinstance(value, str)}

    body = await request.body()
    if not body:
        return {}
    # Decode errors and the integer digit limit are all ValueErrors.
    try:
        data = json.loads(body)
    except ValueError as e:
        raise ValidationError(INVALID_BODY_MESSAGE) from e
    if not isinstance(data, dict):
        raise ValidationError(INVALID_BODY_MESSAGE)
    return data


@router.get("/{token}", response_class=HTMLResponse, summary="Survey page")
async def show_survey(
    token: str,
    surveys: Annotated[SurveySession, Depends(get_survey_session)],
) -> HTMLResponse:
    try:
        view = await surveys.view(token)
    except NotFoundError:
        return HTMLResponse(NOT_FOUND_PAGE, status_code=404)
    except StorageError:
        logger.exception("Failed to load survey")
        return HTMLResponse(ERROR_PAGE, status_code=500)

    if view.state is InviteState.COMPLETED and view.completed_at is not None:
        return HTMLResponse(render_completed(view.completed_at))
    return HTMLResponse(render_survey_form(token, view.participant_name, view.meeting_title))


@router.post(
    "/{token}",
    response_class=HTMLResponse,
    summary="Submit a survey",
    description="Accepts JSON or form data. Errors are returned as JSON.",
)
async def submit_survey(
    token: str,
    request: Request,
    surveys: Annotated[SurveySession, Depends(get_survey_session)],
) -> HTMLResponse:
    raw = await read_submission(request)
    await surveys.submit(token, raw)
    return HTMLResponse(THANK_YOU_PAGE)
