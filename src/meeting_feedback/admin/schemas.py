"""
Pydantic schemas for the admin response API.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class _ResponseFields(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    submitted_at: datetime
    punctuality: int
    listening_understanding: int
    knowledge_expertise: int
    clarity_answers: int
    overall_value: int
    most_valuable: str | None = None
    improvements: str | None = None
    response_data: dict[str, Any] | None = None
    participant_email: str
    participant_name: str | None = None
    meeting_id: int


class ResponseListItem(_ResponseFields):
    """A row of the responses table."""

    meeting_title: str | None = None


class ResponseDetail(_ResponseFields):
    """A single response with the full meeting document."""

    survey_invite_id: int
    meeting_data: dict[str, Any] | None = None


class ResponsePage(BaseModel):
    success: bool = True
    page: int
    limit: int
    total: int
    results: list[ResponseListItem]


class ResponseLookup(BaseModel):
    success: bool = True
    result: ResponseDetail
