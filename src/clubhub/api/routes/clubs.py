"""Club directory and membership view routes."""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends

from clubhub.api.errors import to_http_exception
from clubhub.api.routes.auth import get_current_principal, require_profile
from clubhub.core.dependencies import ClubManagerDep, EventManagerDep, MembershipManagerDep
from clubhub.core.exceptions import ClubHubError
from clubhub.schemas.club import DirectoryClubInfo, RosterEntry
from clubhub.schemas.event import EventInfo
from clubhub.schemas.identity import AdminPrincipal, ProfilePrincipal
from clubhub.schemas.membership import MembershipInfo
from clubhub.utils.converters import model_to_event, model_to_membership

router = APIRouter(prefix="/api/clubs", tags=["Clubs"])


@router.get("", response_model=List[DirectoryClubInfo], summary="Browse clubs")
def list_clubs(
    club_manager: ClubManagerDep,
    q: Optional[str] = None,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[DirectoryClubInfo]:
    """List every club with its member count and the caller's membership status.

    Args:
        club_manager: Injected ClubManager instance.
        q: Optional search on name or description.
        current_user: Current student profile.
    """
    return club_manager.list_directory(current_user.user_id, query=q)


@router.get("/joined", response_model=List[DirectoryClubInfo], summary="My clubs")
def list_joined_clubs(
    club_manager: ClubManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[DirectoryClubInfo]:
    return club_manager.list_joined_clubs(current_user.user_id)


@router.post("/{club_id}/join", response_model=MembershipInfo, summary="Request to join")
def join_club(
    club_id: str,
    membership_manager: MembershipManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> MembershipInfo:
    """Submit a pending membership request.

    Raises:
        HTTPException: 404 for an unknown club, 409 when a pending or
            accepted membership already exists.
    """
    try:
        membership = membership_manager.join(club_id, current_user.user_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_membership(membership)


@router.get("/{club_id}/members", response_model=List[RosterEntry], summary="Club members")
def list_club_members(
    club_id: str,
    club_manager: ClubManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> List[RosterEntry]:
    try:
        return club_manager.list_roster(club_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)


@router.get("/{club_id}/events", response_model=List[EventInfo], summary="Upcoming club events")
def list_club_events(
    club_id: str,
    event_manager: EventManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> List[EventInfo]:
    try:
        events = event_manager.list_upcoming_for_club(club_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return [model_to_event(event) for event in events]
