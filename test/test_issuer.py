"""
Tests for invite issuing.
"""

from types import SimpleNamespace
from unittest.mock import patch

import pytest

from meeting_feedback.invites.issuer import INVITE_FAILED_MESSAGE, InviteIssuer
from meeting_feedback.invites.repository import InviteRepository
from meeting_feedback.meetings.repository import MeetingRepository
from meeting_feedback.shared.database import DatabaseManager
from meeting_feedback.shared.exceptions import StorageError


def person(name: str | None, email: str | None) -> SimpleNamespace:
    return SimpleNamespace(name=name, email=email)


async def _meeting(db: DatabaseManager, session_id: str = "m-1") -> int:
    async with db.session() as session:
        meeting = await MeetingRepository(session).upsert(session_id, {"title": "Kickoff"})
        return meeting.id


class TestInviteIssuer:
    @pytest.mark.asyncio
    async def test_participants_without_email_are_skipped(self, db: DatabaseManager, issuer: InviteIssuer) -> None:
        meeting_id = await _meeting(db)

        results = await issuer.issue_invites(
            meeting_id,
            [person("A", "a@example.com"), person("B", None), person("C", "")],
        )

        assert len(results) == 1
        assert results[0].ok
        assert results[0].participant_email == "a@example.com"
        async with db.session() as session:
            invites = await InviteRepository(session).list_by_meeting(meeting_id)
        assert [i.participant_email for i in invites] == ["a@example.com"]

    @pytest.mark.asyncio
    async def test_repeated_email_in_batch_issues_once(self, db: DatabaseManager, issuer: InviteIssuer) -> None:
        meeting_id = await _meeting(db)

        results = await issuer.issue_invites(
            meeting_id,
            [person("A", "a@example.com"), person("A again", "a@example.com")],
        )

        assert len(results) == 1

    @pytest.mark.asyncio
    async def test_reissue_returns_persisted_token(self, db: DatabaseManager, issuer: InviteIssuer) -> None:
        meeting_id = await _meeting(db)

        [first] = await issuer.issue_invites(meeting_id, [person("A", "a@example.com")])
        [second] = await issuer.issue_invites(meeting_id, [person("A", "a@example.com")])

        assert second.invite_id == first.invite_id
        assert second.token != first.token
        async with db.session() as session:
            repo = InviteRepository(session)
            stored = await repo.get_by_meeting_and_email(meeting_id, "a@example.com")
            old = await repo.get_by_token(first.token)
        assert stored is not None and stored.token == second.token
        assert old is None

    @pytest.mark.asyncio
    async def test_one_storage_failure_does_not_fail_batch(self, db: DatabaseManager, issuer: InviteIssuer) -> None:
        meeting_id = await _meeting(db)
        real_upsert = InviteRepository.upsert

        async def flaky_upsert(self, **kwargs):
            if kwargs["participant_email"] == "bad@example.com":
                raise StorageError("Storage failure during upsert survey invite")
            return await real_upsert(self, **kwargs)

        with patch.object(InviteRepository, "upsert", flaky_upsert):
            results = await issuer.issue_invites(
                meeting_id,
                [person("Bad", "bad@example.com"), person("Good", "good@example.com")],
            )

        by_email = {r.participant_email: r for r in results}
        assert not by_email["bad@example.com"].ok
        assert by_email["bad@example.com"].error == INVITE_FAILED_MESSAGE
        assert by_email["good@example.com"].ok
        async with db.session() as session:
            invites = await InviteRepository(session).list_by_meeting(meeting_id)
        assert [i.participant_email for i in invites] == ["good@example.com"]
