"""Club event database model."""

from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class EventModel(Base):
    """Event database model.

    Date and time are stored separately as ISO strings ("YYYY-MM-DD" and
    "HH:MM:SS"), so lexical ordering matches chronological ordering.
    """

    __tablename__ = "events"

    id = Column(String, primary_key=True, index=True)
    club_id = Column(String, ForeignKey("clubs.id", ondelete="CASCADE"), index=True, nullable=False)
    title = Column(String, nullable=False)
    description = Column(String, nullable=True)
    event_date = Column(String, index=True, nullable=False)
    event_time = Column(String, nullable=False)
    location = Column(String, nullable=False)
    created_by = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    club = relationship("ClubModel", back_populates="events")
