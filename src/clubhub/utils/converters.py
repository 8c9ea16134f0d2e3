"""Conversions between SQLAlchemy models and API schemas."""

from clubhub.models.admin import AdminModel
from clubhub.models.club import ClubModel
from clubhub.models.club_membership import ClubMembershipModel
from clubhub.models.club_role import ClubRoleModel
from clubhub.models.event import EventModel
from clubhub.models.notification import NotificationModel
from clubhub.models.profile import ProfileModel
from clubhub.schemas.club import ClubRoleInfo, ClubSummary, PresidentSummary
from clubhub.schemas.event import EventInfo
from clubhub.schemas.identity import AdminPrincipal, ProfilePrincipal
from clubhub.schemas.membership import MembershipInfo
from clubhub.schemas.notification import NotificationInfo


def admin_to_principal(model: AdminModel) -> AdminPrincipal:
    return AdminPrincipal(
        user_id=model.user_id,
        admin_id=model.id,
        full_name=model.full_name,
        school_name=model.school_name,
        email=model.email,
    )


def profile_to_principal(model: ProfileModel) -> ProfilePrincipal:
    return ProfilePrincipal(
        user_id=model.id,
        full_name=model.full_name,
        email=model.email,
    )


def profile_to_president(model: ProfileModel) -> PresidentSummary:
    return PresidentSummary(id=model.id, full_name=model.full_name, email=model.email)


def club_to_summary(model: ClubModel) -> ClubSummary:
    return ClubSummary(
        id=model.id,
        name=model.name,
        description=model.description,
        category=model.category,
    )


def model_to_membership(model: ClubMembershipModel) -> MembershipInfo:
    return MembershipInfo(
        id=model.id,
        club_id=model.club_id,
        user_id=model.user_id,
        role_id=model.role_id,
        status=model.status,
        requested_at=model.requested_at,
        responded_at=model.responded_at,
    )


def model_to_role(model: ClubRoleModel) -> ClubRoleInfo:
    return ClubRoleInfo(
        id=model.id,
        club_id=model.club_id,
        name=model.name,
        permissions=list(model.permissions or []),
    )


def model_to_event(model: EventModel) -> EventInfo:
    """Convert an event, trimming the stored time to HH:MM."""
    return EventInfo(
        id=model.id,
        club_id=model.club_id,
        club_name=model.club.name if model.club else "",
        title=model.title,
        description=model.description,
        event_date=model.event_date,
        event_time=model.event_time[:5],
        location=model.location,
    )


def model_to_notification(model: NotificationModel) -> NotificationInfo:
    return NotificationInfo(
        id=model.id,
        type=model.type,
        title=model.title,
        message=model.message,
        club_id=model.club_id,
        club_name=model.club.name if model.club else None,
        read=bool(model.read),
        created_at=model.created_at,
    )
