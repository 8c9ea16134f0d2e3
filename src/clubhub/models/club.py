from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class ClubModel(Base):
    __tablename__ = "clubs"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False, default="")
    category = Column(String, nullable=False, default="General")
    created_by = Column(String, index=True, nullable=False)  # admin's user_id
    president_id = Column(
        String, ForeignKey("profiles.id", ondelete="SET NULL"), index=True, nullable=True
    )
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)

    president = relationship("ProfileModel")
    memberships = relationship(
        "ClubMembershipModel",
        back_populates="club",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    roles = relationship(
        "ClubRoleModel",
        back_populates="club",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    events = relationship(
        "EventModel",
        back_populates="club",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def status(self) -> str:
        return "active" if self.president_id else "needs_president"
