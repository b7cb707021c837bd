"""Create survey_invites table.

Revision ID: V0002
Revises: V0001
Create Date: 2025-01-01 00:00:01.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "V0002"
down_revision: Union[str, None] = "V0001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "survey_invites",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "meeting_id",
            sa.Integer,
            sa.ForeignKey("meetings.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("participant_name", sa.String(255), nullable=True),
        sa.Column("participant_email", sa.String(255), nullable=False),
        sa.Column("token", sa.String(255), nullable=False),
        sa.Column(
            "sent_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("delivery_id", sa.String(255), nullable=True),
        sa.UniqueConstraint(
            "meeting_id", "participant_email", name="uq_survey_invites_meeting_email"
        ),
    )

    op.create_index("ix_survey_invites_token", "survey_invites", ["token"], unique=True)
    op.create_index("ix_survey_invites_meeting_id", "survey_invites", ["meeting_id"])


def downgrade() -> None:
    op.drop_index("ix_survey_invites_meeting_id", table_name="survey_invites")
    op.drop_index("ix_survey_invites_token", table_name="survey_invites")
    op.drop_table("survey_invites")
