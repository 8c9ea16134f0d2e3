"""Identity management utilities.

This module provides account registration, password hashing, login
verification and principal resolution. A principal is either an admin or a
student profile, never both.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional, Union

import bcrypt
import pytz
from sqlalchemy.orm import Session

from clubhub.config import BCRYPT_ROUNDS
from clubhub.core.exceptions import (
    AccountAlreadyExistsError,
    InvalidCredentialsError,
)
from clubhub.models.account import AccountModel
from clubhub.models.admin import AdminModel
from clubhub.models.club import ClubModel
from clubhub.models.profile import ProfileModel
from clubhub.schemas.identity import AdminPrincipal, ProfilePrincipal, UserDirectoryEntry
from clubhub.utils.converters import admin_to_principal, profile_to_principal

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _normalize_email(email: str) -> str:
    return email.strip().lower()


class IdentityManager:
    """Manages accounts, admin records and student profiles using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize IdentityManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        password_bytes = password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def _create_account(self, email: str, password: str, now: str) -> AccountModel:
        email = _normalize_email(email)
        existing = (
            self.db.query(AccountModel).filter(AccountModel.email == email).first()
        )
        if existing:
            raise AccountAlreadyExistsError(email)
        account = AccountModel(
            user_id=str(uuid.uuid4()),
            email=email,
            password_hash=self.hash_password(password),
            created_at=now,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def register_profile(self, email: str, password: str, full_name: str) -> ProfileModel:
        """Create an account together with its student profile.

        Args:
            email: Login email; must not be registered yet.
            password: Plain text password.
            full_name: Display name of the student.

        Returns:
            The created ProfileModel.

        Raises:
            AccountAlreadyExistsError: If the email is taken.
        """
        now = datetime.now(pytz.utc).isoformat()
        account = self._create_account(email, password, now)
        profile = ProfileModel(
            id=account.user_id,
            full_name=full_name.strip(),
            email=account.email,
            created_at=now,
            updated_at=now,
        )
        self.db.add(profile)
        self.db.commit()
        self.db.refresh(profile)
        logger.info("Registered profile %s", profile.id)
        return profile

    def register_admin(
        self, email: str, password: str, full_name: str, school_name: str
    ) -> AdminModel:
        """Create an account together with its admin record.

        Both rows are written in one transaction, so a failure leaves no
        orphaned account behind.

        Raises:
            AccountAlreadyExistsError: If the email is taken.
        """
        now = datetime.now(pytz.utc).isoformat()
        account = self._create_account(email, password, now)
        admin = AdminModel(
            id=str(uuid.uuid4()),
            user_id=account.user_id,
            full_name=full_name.strip(),
            school_name=school_name.strip(),
            email=account.email,
            created_at=now,
            updated_at=now,
        )
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)
        logger.info("Registered admin %s for %s", admin.id, admin.school_name)
        return admin

    def authenticate(self, email: str, password: str) -> AccountModel:
        """Return the account matching the credentials.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong.
        """
        account = (
            self.db.query(AccountModel)
            .filter(AccountModel.email == _normalize_email(email))
            .first()
        )
        if account is None or not self.verify_password(password, account.password_hash):
            raise InvalidCredentialsError()
        return account

    def resolve_principal(
        self, user_id: str
    ) -> Optional[Union[AdminPrincipal, ProfilePrincipal]]:
        """Resolve an account id to its principal.

        The admins table is probed first; only when no admin record exists is
        the profile looked up.

        Args:
            user_id: Account id taken from the session token.

        Returns:
            AdminPrincipal, ProfilePrincipal, or None when neither record exists.
        """
        admin = self.db.query(AdminModel).filter(AdminModel.user_id == user_id).first()
        if admin:
            return admin_to_principal(admin)
        profile = self.db.query(ProfileModel).filter(ProfileModel.id == user_id).first()
        if profile:
            return profile_to_principal(profile)
        return None

    def list_user_directory(self, admin_user_id: str) -> List[UserDirectoryEntry]:
        """List every profile for the admin console.

        ``is_president`` is set for profiles presiding over a club created by
        this admin; ``is_admin`` for profiles whose account also has an admin
        record.
        """
        profiles = self.db.query(ProfileModel).order_by(ProfileModel.full_name).all()
        president_ids = {
            row.president_id
            for row in self.db.query(ClubModel.president_id).filter(
                ClubModel.created_by == admin_user_id,
                ClubModel.president_id.isnot(None),
            )
        }
        admin_user_ids = {row.user_id for row in self.db.query(AdminModel.user_id)}
        return [
            UserDirectoryEntry(
                id=profile.id,
                full_name=profile.full_name,
                email=profile.email,
                is_president=profile.id in president_ids,
                is_admin=profile.id in admin_user_ids,
            )
            for profile in profiles
        ]
