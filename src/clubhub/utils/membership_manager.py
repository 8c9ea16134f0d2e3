"""Membership lifecycle utilities.

A membership moves ``pending -> accepted`` or ``pending -> rejected``; an
accepted membership can be removed, which deletes the row. Every status
change by a president or an admin goes through ``MembershipManager.transition``
so both consoles share one authorization rule and one notification writer.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional, Union

import pytz
from sqlalchemy.orm import Session, joinedload

from clubhub.core.exceptions import (
    DuplicateMembershipError,
    InvalidTransitionError,
    MembershipNotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from clubhub.models.club import ClubModel
from clubhub.models.club_membership import ClubMembershipModel
from clubhub.schemas.identity import AdminPrincipal, ProfilePrincipal
from clubhub.schemas.membership import MembershipAction, MembershipRequestInfo
from clubhub.utils.club_manager import ClubManager
from clubhub.utils.notification_manager import NotificationManager

logger = logging.getLogger(__name__)

Actor = Union[AdminPrincipal, ProfilePrincipal]

# action -> (required current status, resulting status); None deletes the row
TRANSITIONS = {
    "approve": ("pending", "accepted"),
    "reject": ("pending", "rejected"),
    "remove": ("accepted", None),
}


def can_manage_club(actor: Actor, club: ClubModel) -> bool:
    """Whether the actor may decide on memberships of the club.

    Presidents manage the clubs they preside. Admins manage clubs they
    created only while those clubs have no president.
    """
    if isinstance(actor, AdminPrincipal):
        return club.created_by == actor.user_id and club.president_id is None
    return club.president_id is not None and club.president_id == actor.user_id


class MembershipManager:
    """Manages join requests and membership state transitions."""

    def __init__(self, db: Session):
        self.db = db
        self.clubs = ClubManager(db)
        self.notifications = NotificationManager(db)

    def get_membership(self, membership_id: str) -> ClubMembershipModel:
        model = (
            self.db.query(ClubMembershipModel)
            .options(joinedload(ClubMembershipModel.club))
            .filter(ClubMembershipModel.id == membership_id)
            .first()
        )
        if not model:
            raise MembershipNotFoundError(membership_id)
        return model

    def join(self, club_id: str, user_id: str) -> ClubMembershipModel:
        """Request membership of a club.

        Args:
            club_id: Club to join.
            user_id: Profile id of the requester.

        Returns:
            The pending ClubMembershipModel.

        Raises:
            ClubNotFoundError: If the club does not exist.
            DuplicateMembershipError: If a pending or accepted row already exists.
        """
        self.clubs.get_club(club_id)
        existing = (
            self.db.query(ClubMembershipModel)
            .filter(
                ClubMembershipModel.club_id == club_id,
                ClubMembershipModel.user_id == user_id,
            )
            .all()
        )
        for membership in existing:
            if membership.status in ("pending", "accepted"):
                raise DuplicateMembershipError(club_id, membership.status)

        now = datetime.now(pytz.utc).isoformat()
        if existing:
            # Reopen a rejected request instead of stacking rows
            membership = existing[0]
            membership.status = "pending"
            membership.role_id = None
            membership.requested_at = now
            membership.responded_at = None
        else:
            membership = ClubMembershipModel(
                id=str(uuid.uuid4()),
                club_id=club_id,
                user_id=user_id,
                status="pending",
                requested_at=now,
            )
            self.db.add(membership)
        self.db.commit()
        self.db.refresh(membership)
        logger.info("Profile %s requested to join club %s", user_id, club_id)
        return membership

    def transition(
        self, actor: Actor, membership_id: str, action: MembershipAction
    ) -> Optional[ClubMembershipModel]:
        """Apply a president or admin decision to a membership.

        Args:
            actor: The resolved caller.
            membership_id: Membership to act on.
            action: "approve", "reject" or "remove".

        Returns:
            The updated membership, or None when it was removed.

        Raises:
            ValidationError: If the action is unknown.
            MembershipNotFoundError: If the membership does not exist.
            PermissionDeniedError: If the actor may not manage the club, or
                tries to remove the club's president.
            InvalidTransitionError: If the action does not apply to the
                membership's current status.
        """
        if action not in TRANSITIONS:
            raise ValidationError(f"Unknown membership action: {action}")
        membership = self.get_membership(membership_id)
        club = membership.club
        if not can_manage_club(actor, club):
            logger.warning(
                "%s %s denied %s on membership %s",
                actor.kind,
                actor.user_id,
                action,
                membership_id,
            )
            if isinstance(actor, AdminPrincipal) and club.created_by == actor.user_id:
                raise PermissionDeniedError(
                    "This club has a president who handles its memberships"
                )
            raise PermissionDeniedError("You cannot manage memberships of this club")

        required, target = TRANSITIONS[action]
        if membership.status != required:
            raise InvalidTransitionError(action, membership.status)

        if target is None:
            if membership.user_id == club.president_id:
                raise PermissionDeniedError("The club president cannot be removed")
            self.db.delete(membership)
        else:
            membership.status = target
            membership.responded_at = datetime.now(pytz.utc).isoformat()
            if target == "accepted":
                self.notifications.notify(
                    [membership.user_id],
                    "accepted",
                    "Membership approved",
                    f"Your request to join {club.name} has been accepted.",
                    club_id=club.id,
                )
            else:
                self.notifications.notify(
                    [membership.user_id],
                    "rejected",
                    "Membership declined",
                    f"Your request to join {club.name} has been declined.",
                    club_id=club.id,
                )
        club_id = club.id
        self.db.commit()
        if target is not None:
            self.db.refresh(membership)
        logger.info(
            "%s %s applied %s to membership %s in club %s",
            actor.kind,
            actor.user_id,
            action,
            membership_id,
            club_id,
        )
        return membership if target is not None else None

    def _pending_query(self):
        return (
            self.db.query(ClubMembershipModel)
            .options(
                joinedload(ClubMembershipModel.profile),
                joinedload(ClubMembershipModel.club),
            )
            .filter(ClubMembershipModel.status == "pending")
            .order_by(ClubMembershipModel.requested_at)
        )

    def list_pending_for_club(self, club_id: str) -> List[MembershipRequestInfo]:
        models = self._pending_query().filter(ClubMembershipModel.club_id == club_id).all()
        return [self._to_request_info(m) for m in models]

    def list_pending_for_admin(self, admin_user_id: str) -> List[MembershipRequestInfo]:
        """Pending requests for the admin's clubs that have no president."""
        models = (
            self._pending_query()
            .join(ClubModel, ClubModel.id == ClubMembershipModel.club_id)
            .filter(
                ClubModel.created_by == admin_user_id,
                ClubModel.president_id.is_(None),
            )
            .all()
        )
        return [self._to_request_info(m) for m in models]

    @staticmethod
    def _to_request_info(model: ClubMembershipModel) -> MembershipRequestInfo:
        return MembershipRequestInfo(
            id=model.id,
            user_id=model.user_id,
            full_name=model.profile.full_name if model.profile else "Unknown",
            email=model.profile.email if model.profile else "",
            club_id=model.club_id,
            club_name=model.club.name if model.club else "Unknown Club",
            requested_at=model.requested_at,
            has_president=bool(model.club and model.club.president_id),
        )
