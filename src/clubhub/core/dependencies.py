"""Dependency injection module for FastAPI.

This module provides dependency injection functions for FastAPI routes. Each
manager receives the request-scoped database session.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from clubhub.core.database import get_db
from clubhub.utils import club_manager
from clubhub.utils import event_manager
from clubhub.utils import identity_manager
from clubhub.utils import membership_manager
from clubhub.utils import notification_manager
from clubhub.utils import role_manager


def get_identity_manager(db: Session = Depends(get_db)) -> identity_manager.IdentityManager:
    """Get IdentityManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        IdentityManager instance.
    """
    return identity_manager.IdentityManager(db)


def get_club_manager(db: Session = Depends(get_db)) -> club_manager.ClubManager:
    """Get ClubManager instance with request-scoped DB session."""
    return club_manager.ClubManager(db)


def get_membership_manager(
    db: Session = Depends(get_db),
) -> membership_manager.MembershipManager:
    """Get MembershipManager instance with request-scoped DB session."""
    return membership_manager.MembershipManager(db)


def get_role_manager(db: Session = Depends(get_db)) -> role_manager.RoleManager:
    return role_manager.RoleManager(db)


def get_event_manager(db: Session = Depends(get_db)) -> event_manager.EventManager:
    return event_manager.EventManager(db)


def get_notification_manager(
    db: Session = Depends(get_db),
) -> notification_manager.NotificationManager:
    return notification_manager.NotificationManager(db)


# Type aliases for dependency injection
IdentityManagerDep = Annotated[
    identity_manager.IdentityManager, Depends(get_identity_manager)
]
ClubManagerDep = Annotated[club_manager.ClubManager, Depends(get_club_manager)]
MembershipManagerDep = Annotated[
    membership_manager.MembershipManager, Depends(get_membership_manager)
]
RoleManagerDep = Annotated[role_manager.RoleManager, Depends(get_role_manager)]
EventManagerDep = Annotated[event_manager.EventManager, Depends(get_event_manager)]
NotificationManagerDep = Annotated[
    notification_manager.NotificationManager, Depends(get_notification_manager)
]
