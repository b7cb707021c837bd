"""
Import every ORM model so the mapper registry and Base.metadata are complete.
"""

from meeting_feedback.invites.models import InviteState, SurveyInvite
from meeting_feedback.meetings.models import Meeting
from meeting_feedback.shared.database import Base
from meeting_feedback.surveys.models import SurveyResponse

__all__ = ["Base", "InviteState", "Meeting", "SurveyInvite", "SurveyResponse"]
