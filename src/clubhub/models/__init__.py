"""SQLAlchemy models.

Importing this package registers every table with ``Base.metadata``.
"""

from .account import AccountModel
from .admin import AdminModel
from .club import ClubModel
from .club_membership import ClubMembershipModel
from .club_role import ClubRoleModel
from .event import EventModel
from .notification import NotificationModel
from .profile import ProfileModel

__all__ = [
    "AccountModel",
    "AdminModel",
    "ClubModel",
    "ClubMembershipModel",
    "ClubRoleModel",
    "EventModel",
    "NotificationModel",
    "ProfileModel",
]
