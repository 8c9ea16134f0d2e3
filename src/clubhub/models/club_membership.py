from sqlalchemy import Column, String, ForeignKey
from sqlalchemy.orm import relationship
from .base import Base


class ClubMembershipModel(Base):
    __tablename__ = "club_memberships"

    id = Column(String, primary_key=True, index=True)
    club_id = Column(String, ForeignKey("clubs.id", ondelete="CASCADE"), index=True, nullable=False)
    user_id = Column(String, ForeignKey("profiles.id", ondelete="CASCADE"), index=True, nullable=False)
    role_id = Column(String, ForeignKey("club_roles.id", ondelete="SET NULL"), nullable=True)
    status = Column(String, nullable=False, default="pending")  # pending | accepted | rejected
    requested_at = Column(String, nullable=False)
    responded_at = Column(String, nullable=True)

    club = relationship("ClubModel", back_populates="memberships")
    profile = relationship("ProfileModel")
    role = relationship("ClubRoleModel")
