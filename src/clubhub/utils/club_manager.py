"""Club management utilities."""

import logging
import uuid
from datetime import datetime
from typing import Dict, Iterable, List, Optional

import pytz
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from clubhub.config import (
    DEFAULT_CLUB_CATEGORY,
    DEFAULT_MEMBER_ROLE_NAME,
    PRESIDENT_ROLE_NAME,
)
from clubhub.core.exceptions import (
    ClubNotFoundError,
    PermissionDeniedError,
    ProfileNotFoundError,
    ValidationError,
)
from clubhub.models.club import ClubModel
from clubhub.models.club_membership import ClubMembershipModel
from clubhub.models.profile import ProfileModel
from clubhub.schemas.club import AdminClubInfo, DirectoryClubInfo, RosterEntry
from clubhub.utils.converters import profile_to_president
from clubhub.utils.notification_manager import NotificationManager

logger = logging.getLogger(__name__)


def _matches(query: Optional[str], *fields: Optional[str]) -> bool:
    if not query:
        return True
    needle = query.strip().lower()
    return any(needle in (field or "").lower() for field in fields)


class ClubManager:
    """Manages clubs, their rosters and president assignment."""

    def __init__(self, db: Session):
        self.db = db

    # --- Lookup ---

    def get_club(self, club_id: str) -> ClubModel:
        model = self.db.query(ClubModel).filter(ClubModel.id == club_id).first()
        if not model:
            raise ClubNotFoundError(club_id)
        return model

    def get_owned_club(self, club_id: str, admin_user_id: str) -> ClubModel:
        """Return a club created by the given admin.

        Raises:
            ClubNotFoundError: If the club does not exist.
            PermissionDeniedError: If another admin created it.
        """
        model = self.get_club(club_id)
        if model.created_by != admin_user_id:
            logger.warning("Admin %s tried to manage club %s", admin_user_id, club_id)
            raise PermissionDeniedError("You can only manage clubs you created")
        return model

    def get_presided_club(self, club_id: str, profile_id: str) -> ClubModel:
        """Return a club the given profile presides.

        Raises:
            ClubNotFoundError: If the club does not exist.
            PermissionDeniedError: If the profile is not its president.
        """
        model = self.get_club(club_id)
        if model.president_id != profile_id:
            logger.warning("Profile %s is not president of club %s", profile_id, club_id)
            raise PermissionDeniedError("Only the club president can manage this club")
        return model

    def member_counts(self, club_ids: Optional[Iterable[str]] = None) -> Dict[str, int]:
        """Count accepted memberships per club."""
        query = (
            self.db.query(ClubMembershipModel.club_id, func.count(ClubMembershipModel.id))
            .filter(ClubMembershipModel.status == "accepted")
            .group_by(ClubMembershipModel.club_id)
        )
        if club_ids is not None:
            query = query.filter(ClubMembershipModel.club_id.in_(list(club_ids)))
        return {club_id: count for club_id, count in query.all()}

    # --- Admin console ---

    def create_club(
        self,
        name: str,
        created_by: str,
        description: str = "",
        category: str = DEFAULT_CLUB_CATEGORY,
    ) -> ClubModel:
        """Create a club without a president."""
        name = name.strip()
        if not name:
            raise ValidationError("Club name cannot be empty.")
        now = datetime.now(pytz.utc).isoformat()
        model = ClubModel(
            id=str(uuid.uuid4()),
            name=name,
            description=description or "",
            category=(category or "").strip() or DEFAULT_CLUB_CATEGORY,
            created_by=created_by,
            president_id=None,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)
        self.db.commit()
        self.db.refresh(model)
        logger.info("Created club %s (%s) by %s", model.id, model.name, created_by)
        return model

    def update_club(
        self,
        club_id: str,
        admin_user_id: str,
        name: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
    ) -> ClubModel:
        model = self.get_owned_club(club_id, admin_user_id)
        if name is not None:
            if not name.strip():
                raise ValidationError("Club name cannot be empty.")
            model.name = name.strip()
        if description is not None:
            model.description = description
        if category is not None:
            model.category = category.strip() or DEFAULT_CLUB_CATEGORY
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated club %s", club_id)
        return model

    def delete_club(self, club_id: str, admin_user_id: str) -> None:
        """Delete a club with its memberships, roles and events."""
        model = self.get_owned_club(club_id, admin_user_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted club %s", club_id)

    def list_admin_clubs(
        self, admin_user_id: str, query: Optional[str] = None
    ) -> List[AdminClubInfo]:
        """List the admin's clubs with member counts and president details.

        Args:
            admin_user_id: Account id of the admin.
            query: Optional case-insensitive filter on the club name.
        """
        models = (
            self.db.query(ClubModel)
            .options(joinedload(ClubModel.president))
            .filter(ClubModel.created_by == admin_user_id)
            .order_by(ClubModel.created_at)
            .all()
        )
        counts = self.member_counts(m.id for m in models)
        return [
            self._to_admin_info(m, counts.get(m.id, 0))
            for m in models
            if _matches(query, m.name)
        ]

    def get_admin_club(self, club_id: str, admin_user_id: str) -> AdminClubInfo:
        """Return one of the admin's clubs as shown in the admin console."""
        model = self.get_owned_club(club_id, admin_user_id)
        return self._to_admin_info(model, self.member_counts([club_id]).get(club_id, 0))

    @staticmethod
    def _to_admin_info(model: ClubModel, member_count: int) -> AdminClubInfo:
        return AdminClubInfo(
            id=model.id,
            name=model.name,
            description=model.description,
            category=model.category,
            member_count=member_count,
            president=profile_to_president(model.president) if model.president else None,
            status=model.status,
        )

    def assign_president(
        self, club_id: str, admin_user_id: str, profile_id: str
    ) -> ClubModel:
        """Appoint a profile as the club's president.

        The club update, the membership bootstrap and the notification are
        committed together. An existing membership of the profile is flipped
        to accepted; otherwise a new accepted membership is created, skipping
        the pending state.

        Args:
            club_id: Club to update.
            admin_user_id: Account id of the admin; must have created the club.
            profile_id: Profile to appoint.

        Returns:
            The updated ClubModel.

        Raises:
            ClubNotFoundError: If the club does not exist.
            PermissionDeniedError: If the admin did not create the club.
            ProfileNotFoundError: If the profile does not exist.
        """
        club = self.get_owned_club(club_id, admin_user_id)
        profile = self.db.query(ProfileModel).filter(ProfileModel.id == profile_id).first()
        if not profile:
            raise ProfileNotFoundError(profile_id)

        now = datetime.now(pytz.utc).isoformat()
        club.president_id = profile.id
        club.updated_at = now

        # Oldest row wins when earlier duplicate requests exist
        membership = (
            self.db.query(ClubMembershipModel)
            .filter(
                ClubMembershipModel.club_id == club_id,
                ClubMembershipModel.user_id == profile_id,
            )
            .order_by(ClubMembershipModel.requested_at)
            .first()
        )
        if membership is None:
            self.db.add(
                ClubMembershipModel(
                    id=str(uuid.uuid4()),
                    club_id=club_id,
                    user_id=profile_id,
                    status="accepted",
                    requested_at=now,
                    responded_at=now,
                )
            )
        elif membership.status != "accepted":
            membership.status = "accepted"
            membership.responded_at = now

        NotificationManager(self.db).notify(
            [profile_id],
            "info",
            "You are now club president",
            f"You have been appointed president of {club.name}.",
            club_id=club_id,
        )
        self.db.commit()
        self.db.refresh(club)
        logger.info("Assigned profile %s as president of club %s", profile_id, club_id)
        return club

    # --- Student directory ---

    def list_directory(
        self, user_id: str, query: Optional[str] = None
    ) -> List[DirectoryClubInfo]:
        """List all clubs with member counts and the caller's membership status.

        Args:
            user_id: Profile id of the caller.
            query: Optional case-insensitive filter on name or description.
        """
        models = (
            self.db.query(ClubModel)
            .options(joinedload(ClubModel.president))
            .order_by(ClubModel.name)
            .all()
        )
        counts = self.member_counts()
        statuses = {}
        memberships = (
            self.db.query(ClubMembershipModel)
            .filter(ClubMembershipModel.user_id == user_id)
            .order_by(ClubMembershipModel.requested_at)
            .all()
        )
        for membership in memberships:
            # An accepted row outranks stray duplicates
            if statuses.get(membership.club_id) != "accepted":
                statuses[membership.club_id] = membership.status

        return [
            DirectoryClubInfo(
                id=m.id,
                name=m.name,
                description=m.description,
                category=m.category,
                president_id=m.president_id,
                president_name=m.president.full_name if m.president else None,
                member_count=counts.get(m.id, 0),
                membership_status=statuses.get(m.id),
            )
            for m in models
            if _matches(query, m.name, m.description)
        ]

    def list_joined_clubs(self, user_id: str) -> List[DirectoryClubInfo]:
        return [
            club
            for club in self.list_directory(user_id)
            if club.membership_status == "accepted"
        ]

    def list_president_clubs(self, profile_id: str) -> List[ClubModel]:
        return (
            self.db.query(ClubModel)
            .filter(ClubModel.president_id == profile_id)
            .order_by(ClubModel.name)
            .all()
        )

    def list_roster(self, club_id: str) -> List[RosterEntry]:
        """List accepted members of a club.

        Members without a role are labelled "Member". The president is
        labelled "President" and is prepended when it has no accepted
        membership row.

        Raises:
            ClubNotFoundError: If the club does not exist.
        """
        club = self.get_club(club_id)
        memberships = (
            self.db.query(ClubMembershipModel)
            .options(
                joinedload(ClubMembershipModel.profile),
                joinedload(ClubMembershipModel.role),
            )
            .filter(
                ClubMembershipModel.club_id == club_id,
                ClubMembershipModel.status == "accepted",
            )
            .order_by(ClubMembershipModel.requested_at)
            .all()
        )
        roster = [
            RosterEntry(
                id=m.user_id,
                membership_id=m.id,
                full_name=m.profile.full_name if m.profile else "",
                email=m.profile.email if m.profile else "",
                role_id=m.role_id,
                role_name=m.role.name if m.role else DEFAULT_MEMBER_ROLE_NAME,
                joined_at=m.responded_at or m.requested_at,
            )
            for m in memberships
        ]

        if club.president_id:
            president_entry = next(
                (entry for entry in roster if entry.id == club.president_id), None
            )
            if president_entry:
                president_entry.role_name = PRESIDENT_ROLE_NAME
            elif club.president:
                roster.insert(
                    0,
                    RosterEntry(
                        id=club.president.id,
                        full_name=club.president.full_name,
                        email=club.president.email,
                        role_name=PRESIDENT_ROLE_NAME,
                    ),
                )
        return roster
