from sqlalchemy import Column, String, ForeignKey
from .base import Base


class ProfileModel(Base):
    __tablename__ = "profiles"

    # Same value as accounts.user_id
    id = Column(String, ForeignKey("accounts.user_id", ondelete="CASCADE"), primary_key=True, index=True)
    full_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)
