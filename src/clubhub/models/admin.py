from sqlalchemy import Column, String, ForeignKey
from .base import Base


class AdminModel(Base):
    __tablename__ = "admins"

    id = Column(String, primary_key=True, index=True)
    user_id = Column(
        String, ForeignKey("accounts.user_id", ondelete="CASCADE"), unique=True, index=True, nullable=False
    )
    full_name = Column(String, nullable=False)
    school_name = Column(String, nullable=False)
    email = Column(String, nullable=False)
    created_at = Column(String, nullable=False)
    updated_at = Column(String, nullable=False)
