from sqlalchemy import Column, String, ForeignKey, JSON
from sqlalchemy.orm import relationship
from .base import Base


class ClubRoleModel(Base):
    __tablename__ = "club_roles"

    id = Column(String, primary_key=True, index=True)
    club_id = Column(String, ForeignKey("clubs.id", ondelete="CASCADE"), index=True, nullable=False)
    name = Column(String, nullable=False)
    permissions = Column(JSON, nullable=True)  # list of strings, stored only
    created_at = Column(String, nullable=False)

    club = relationship("ClubModel", back_populates="roles")
