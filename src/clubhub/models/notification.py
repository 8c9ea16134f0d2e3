from sqlalchemy import Boolean, Column, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base

NOTIFICATION_TYPES = ("accepted", "rejected", "event", "info")


class NotificationModel(Base):
    __tablename__ = "notifications"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("accounts.user_id", ondelete="CASCADE"), index=True, nullable=False)
    club_id = Column(String, ForeignKey("clubs.id", ondelete="SET NULL"), nullable=True)
    type = Column(String, nullable=False)  # see NOTIFICATION_TYPES
    title = Column(String, nullable=False)
    message = Column(String, nullable=False)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(String, nullable=False)

    club = relationship("ClubModel")
