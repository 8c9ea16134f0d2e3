"""Club role catalogue and role assignment utilities."""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from clubhub.core.exceptions import (
    InvalidTransitionError,
    MembershipNotFoundError,
    RoleNotFoundError,
    ValidationError,
)
from clubhub.models.club_membership import ClubMembershipModel
from clubhub.models.club_role import ClubRoleModel
from clubhub.utils.club_manager import ClubManager

logger = logging.getLogger(__name__)


class RoleManager:
    """Manages the roles a president defines for a club.

    Every mutating method takes the acting profile id and checks that it
    presides the club.
    """

    def __init__(self, db: Session):
        self.db = db
        self.clubs = ClubManager(db)

    def list_roles(self, club_id: str) -> List[ClubRoleModel]:
        return (
            self.db.query(ClubRoleModel)
            .filter(ClubRoleModel.club_id == club_id)
            .order_by(ClubRoleModel.created_at)
            .all()
        )

    def _get_role(self, club_id: str, role_id: str) -> ClubRoleModel:
        model = (
            self.db.query(ClubRoleModel)
            .filter(ClubRoleModel.id == role_id, ClubRoleModel.club_id == club_id)
            .first()
        )
        if not model:
            raise RoleNotFoundError(role_id)
        return model

    def create_role(
        self,
        club_id: str,
        profile_id: str,
        name: str,
        permissions: Optional[List[str]] = None,
    ) -> ClubRoleModel:
        self.clubs.get_presided_club(club_id, profile_id)
        name = name.strip()
        if not name:
            raise ValidationError("Role name cannot be empty.")
        model = ClubRoleModel(
            id=str(uuid.uuid4()),
            club_id=club_id,
            name=name,
            permissions=list(permissions or []),
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created role %s (%s) in club %s", model.id, model.name, club_id)
        return model

    def delete_role(self, club_id: str, profile_id: str, role_id: str) -> None:
        """Delete a role; members holding it fall back to plain members."""
        self.clubs.get_presided_club(club_id, profile_id)
        model = self._get_role(club_id, role_id)
        self.db.query(ClubMembershipModel).filter(
            ClubMembershipModel.role_id == role_id
        ).update({ClubMembershipModel.role_id: None}, synchronize_session=False)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted role %s from club %s", role_id, club_id)

    def assign_role(
        self,
        club_id: str,
        profile_id: str,
        membership_id: str,
        role_id: Optional[str],
    ) -> ClubMembershipModel:
        """Set or clear the role of an accepted member.

        Args:
            club_id: Club the membership belongs to.
            profile_id: Acting president.
            membership_id: Membership to update.
            role_id: Role of the same club, or None to clear.

        Raises:
            MembershipNotFoundError: If the membership is not in this club.
            RoleNotFoundError: If the role is not in this club.
            InvalidTransitionError: If the membership is not accepted.
        """
        self.clubs.get_presided_club(club_id, profile_id)
        membership = (
            self.db.query(ClubMembershipModel)
            .filter(
                ClubMembershipModel.id == membership_id,
                ClubMembershipModel.club_id == club_id,
            )
            .first()
        )
        if not membership:
            raise MembershipNotFoundError(membership_id)
        if membership.status != "accepted":
            raise InvalidTransitionError("assign a role to", membership.status)
        if role_id:
            self._get_role(club_id, role_id)
        membership.role_id = role_id or None
        self.db.commit()
        self.db.refresh(membership)
        logger.info(
            "Set role of membership %s to %s", membership_id, membership.role_id
        )
        return membership
