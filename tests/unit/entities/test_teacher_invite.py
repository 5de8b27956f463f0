"""Unit tests for the TeacherInvite entity."""

from datetime import datetime, timedelta
from uuid import uuid4

import pytest

from domain.entities.teacher_invite import InviteStatus, TeacherInvite


def _invite(**overrides) -> TeacherInvite:
    fields = {
        "school_id": uuid4(),
        "code": "AbCdE12345",
        "email": "ada@school.com",
        "first_name": "Ada",
        "last_name": "Obi",
    }
    fields.update(overrides)
    return TeacherInvite(**fields)


class TestTeacherInvite:
    def test_defaults_to_pending_for_seven_days(self):
        invite = _invite()

        assert invite.status == InviteStatus.PENDING
        assert not invite.is_expired
        assert timedelta(days=6, hours=23) < invite.expires_at - datetime.utcnow()

    def test_expiry_is_derived_not_stored(self):
        invite = _invite(expires_at=datetime.utcnow() - timedelta(seconds=1))

        assert invite.is_expired
        assert invite.status == InviteStatus.PENDING
        assert invite.display_status == InviteStatus.EXPIRED

    @pytest.mark.parametrize("status", [InviteStatus.ACCEPTED, InviteStatus.CANCELLED])
    def test_terminal_status_wins_over_expiry_for_display(self, status: InviteStatus):
        invite = _invite(status=status, expires_at=datetime.utcnow() - timedelta(days=1))

        assert invite.display_status == status

    def test_pending_moves_only_to_terminal_states(self):
        invite = _invite()

        assert invite.can_transition_to(InviteStatus.ACCEPTED)
        assert invite.can_transition_to(InviteStatus.CANCELLED)
        assert not invite.can_transition_to(InviteStatus.EXPIRED)
        assert not invite.can_transition_to(InviteStatus.PENDING)

    @pytest.mark.parametrize("status", [InviteStatus.ACCEPTED, InviteStatus.CANCELLED])
    def test_terminal_states_never_move(self, status: InviteStatus):
        invite = _invite(status=status)

        for target in InviteStatus:
            assert not invite.can_transition_to(target)

    def test_full_name_without_last_name(self):
        assert _invite(last_name="").full_name == "Ada"
