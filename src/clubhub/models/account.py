"""Account database model.

An account is the authentication record behind every principal. Whether the
principal is an admin or a student profile is decided by which of the
``admins``/``profiles`` tables holds a row for it.
"""

from sqlalchemy import Column, String
from .base import Base


class AccountModel(Base):
    """Account database model."""

    __tablename__ = "accounts"

    user_id = Column(String, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(String, nullable=False)  # ISO format string
