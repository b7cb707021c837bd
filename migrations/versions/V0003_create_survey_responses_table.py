"""Create survey_responses table.

Revision ID: V0003
Revises: V0002
Create Date: 2025-01-01 00:00:02.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "V0003"
down_revision: Union[str, None] = "V0002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

RATING_COLUMNS = (
    "punctuality",
    "listening_understanding",
    "knowledge_expertise",
    "clarity_answers",
    "overall_value",
)


def upgrade() -> None:
    op.create_table(
        "survey_responses",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "survey_invite_id",
            sa.Integer,
            sa.ForeignKey("survey_invites.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        *(sa.Column(name, sa.Integer, nullable=False) for name in RATING_COLUMNS),
        sa.Column("most_valuable", sa.Text, nullable=True),
        sa.Column("improvements", sa.Text, nullable=True),
        sa.Column(
            "response_data",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
        ),
        sa.Column(
            "submitted_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        *(
            sa.CheckConstraint(
                f"{name} >= 1 AND {name} <= 5",
                name=f"ck_survey_responses_{name}_range",
            )
            for name in RATING_COLUMNS
        ),
    )

    op.create_index("ix_survey_responses_submitted_at", "survey_responses", ["submitted_at"])


def downgrade() -> None:
    op.drop_index("ix_survey_responses_submitted_at", table_name="survey_responses")
    op.drop_table("survey_responses")
