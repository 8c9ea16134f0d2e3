"""Club event management utilities."""

import logging
import uuid
from datetime import date, datetime, time
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session, joinedload

from clubhub.config import APP_TIMEZONE
from clubhub.core.exceptions import EventNotFoundError, ValidationError
from clubhub.models.club_membership import ClubMembershipModel
from clubhub.models.event import EventModel
from clubhub.utils.club_manager import ClubManager
from clubhub.utils.notification_manager import NotificationManager

logger = logging.getLogger(__name__)


def today_iso(tz_name: str = APP_TIMEZONE) -> str:
    """Today's date in the configured timezone as YYYY-MM-DD."""
    return datetime.now(pytz.timezone(tz_name)).date().isoformat()


class EventManager:
    """Manages events of clubs and the upcoming-event feeds."""

    def __init__(self, db: Session):
        self.db = db
        self.clubs = ClubManager(db)
        self.notifications = NotificationManager(db)

    def _upcoming_query(self):
        return (
            self.db.query(EventModel)
            .options(joinedload(EventModel.club))
            .filter(EventModel.event_date >= today_iso())
            .order_by(EventModel.event_date.asc(), EventModel.event_time.asc())
        )

    def list_upcoming_for_club(self, club_id: str) -> List[EventModel]:
        self.clubs.get_club(club_id)
        return self._upcoming_query().filter(EventModel.club_id == club_id).all()

    def list_feed(self, user_id: str) -> List[EventModel]:
        """Upcoming events of every club where the user is an accepted member."""
        club_ids = [
            row.club_id
            for row in self.db.query(ClubMembershipModel.club_id).filter(
                ClubMembershipModel.user_id == user_id,
                ClubMembershipModel.status == "accepted",
            )
        ]
        if not club_ids:
            return []
        return self._upcoming_query().filter(EventModel.club_id.in_(club_ids)).all()

    def _get_event(self, club_id: str, event_id: str) -> EventModel:
        model = (
            self.db.query(EventModel)
            .filter(EventModel.id == event_id, EventModel.club_id == club_id)
            .first()
        )
        if not model:
            raise EventNotFoundError(event_id)
        return model

    def create_event(
        self,
        club_id: str,
        profile_id: str,
        title: str,
        event_date: date,
        event_time: time,
        location: str,
        description: Optional[str] = None,
    ) -> EventModel:
        """Schedule an event and notify the club's accepted members.

        Args:
            club_id: Club hosting the event.
            profile_id: Acting president; also recorded as creator.
            title: Event title.
            event_date: Calendar date of the event.
            event_time: Start time of the event.
            location: Where it takes place.
            description: Optional details.

        Returns:
            The created EventModel.
        """
        club = self.clubs.get_presided_club(club_id, profile_id)
        if not title.strip() or not location.strip():
            raise ValidationError("Event title and location cannot be empty.")
        now = datetime.now(pytz.utc).isoformat()
        model = EventModel(
            id=str(uuid.uuid4()),
            club_id=club_id,
            title=title.strip(),
            description=description,
            event_date=event_date.isoformat(),
            event_time=event_time.replace(microsecond=0).isoformat(),
            location=location.strip(),
            created_by=profile_id,
            created_at=now,
            updated_at=now,
        )
        self.db.add(model)

        recipients = [
            row.user_id
            for row in self.db.query(ClubMembershipModel.user_id).filter(
                ClubMembershipModel.club_id == club_id,
                ClubMembershipModel.status == "accepted",
                ClubMembershipModel.user_id != profile_id,
            )
        ]
        self.notifications.notify(
            recipients,
            "event",
            f"New event: {model.title}",
            f"{club.name} scheduled {model.title} on {model.event_date} at "
            f"{model.event_time[:5]}, {model.location}.",
            club_id=club_id,
        )
        self.db.commit()
        self.db.refresh(model)
        logger.info(
            "Created event %s in club %s, notified %d members",
            model.id,
            club_id,
            len(recipients),
        )
        return model

    def update_event(
        self,
        club_id: str,
        profile_id: str,
        event_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        event_date: Optional[date] = None,
        event_time: Optional[time] = None,
        location: Optional[str] = None,
    ) -> EventModel:
        self.clubs.get_presided_club(club_id, profile_id)
        model = self._get_event(club_id, event_id)
        if title is not None:
            if not title.strip():
                raise ValidationError("Event title cannot be empty.")
            model.title = title.strip()
        if description is not None:
            model.description = description
        if event_date is not None:
            model.event_date = event_date.isoformat()
        if event_time is not None:
            model.event_time = event_time.replace(microsecond=0).isoformat()
        if location is not None:
            if not location.strip():
                raise ValidationError("Event location cannot be empty.")
            model.location = location.strip()
        model.updated_at = datetime.now(pytz.utc).isoformat()
        self.db.commit()
        self.db.refresh(model)
        logger.info("Updated event %s in club %s", event_id, club_id)
        return model

    def delete_event(self, club_id: str, profile_id: str, event_id: str) -> None:
        self.clubs.get_presided_club(club_id, profile_id)
        model = self._get_event(club_id, event_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted event %s from club %s", event_id, club_id)
