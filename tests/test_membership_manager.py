import pytest

from clubhub.core.exceptions import ValidationError
from clubhub.models.club import ClubModel
from clubhub.schemas.identity import AdminPrincipal, ProfilePrincipal
from clubhub.utils.membership_manager import MembershipManager, can_manage_club
from clubhub.utils.notification_manager import NotificationManager

ADMIN = AdminPrincipal(
    user_id="admin-1",
    admin_id="a-1",
    full_name="Alex Admin",
    school_name="Springfield High",
    email="admin@example.com",
)
STUDENT = ProfilePrincipal(user_id="student-1", full_name="Sam", email="sam@example.com")


def test_admin_manages_own_club_until_president_assigned():
    club = ClubModel(created_by="admin-1", president_id=None)
    assert can_manage_club(ADMIN, club)

    club.president_id = "student-1"
    assert not can_manage_club(ADMIN, club)
    assert can_manage_club(STUDENT, club)


def test_other_admins_and_students_are_refused():
    club = ClubModel(created_by="someone-else", president_id=None)
    assert not can_manage_club(ADMIN, club)
    assert not can_manage_club(STUDENT, club)


def test_unknown_action_rejected(db_session):
    with pytest.raises(ValidationError):
        MembershipManager(db_session).transition(ADMIN, "any", "promote")


def test_notify_rejects_unknown_type(db_session):
    with pytest.raises(ValidationError):
        NotificationManager(db_session).notify(["student-1"], "party", "t", "m")
