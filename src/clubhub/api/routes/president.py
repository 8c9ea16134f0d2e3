"""President console routes.

Every club-scoped route requires the caller to be the club's president.
Approving, rejecting and removing members go through /api/memberships.
"""

from typing import List

from fastapi import APIRouter, Depends

from clubhub.api.errors import to_http_exception
from clubhub.api.routes.auth import require_profile
from clubhub.core.dependencies import (
    ClubManagerDep,
    EventManagerDep,
    MembershipManagerDep,
    RoleManagerDep,
)
from clubhub.core.exceptions import ClubHubError
from clubhub.schemas.club import (
    AssignRoleRequest,
    ClubRoleInfo,
    ClubSummary,
    CreateRoleRequest,
    RosterEntry,
)
from clubhub.schemas.event import CreateEventRequest, EventInfo, UpdateEventRequest
from clubhub.schemas.identity import ProfilePrincipal
from clubhub.schemas.membership import MembershipInfo, MembershipRequestInfo
from clubhub.utils.converters import (
    club_to_summary,
    model_to_event,
    model_to_membership,
    model_to_role,
)

router = APIRouter(prefix="/api/president", tags=["President"])


@router.get("/clubs", response_model=List[ClubSummary], summary="Clubs I preside")
def list_president_clubs(
    club_manager: ClubManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[ClubSummary]:
    return [
        club_to_summary(model)
        for model in club_manager.list_president_clubs(current_user.user_id)
    ]


@router.get("/clubs/{club_id}/members", response_model=List[RosterEntry], summary="Club roster")
def list_members(
    club_id: str,
    club_manager: ClubManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[RosterEntry]:
    try:
        club_manager.get_presided_club(club_id, current_user.user_id)
        return club_manager.list_roster(club_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)


@router.get(
    "/clubs/{club_id}/requests",
    response_model=List[MembershipRequestInfo],
    summary="Pending join requests",
)
def list_requests(
    club_id: str,
    club_manager: ClubManagerDep,
    membership_manager: MembershipManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[MembershipRequestInfo]:
    try:
        club_manager.get_presided_club(club_id, current_user.user_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return membership_manager.list_pending_for_club(club_id)


# --- Roles ---


@router.get("/clubs/{club_id}/roles", response_model=List[ClubRoleInfo], summary="Club roles")
def list_roles(
    club_id: str,
    club_manager: ClubManagerDep,
    role_manager: RoleManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[ClubRoleInfo]:
    try:
        club_manager.get_presided_club(club_id, current_user.user_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return [model_to_role(model) for model in role_manager.list_roles(club_id)]


@router.post("/clubs/{club_id}/roles", response_model=ClubRoleInfo, summary="Create role")
def create_role(
    club_id: str,
    req: CreateRoleRequest,
    role_manager: RoleManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> ClubRoleInfo:
    try:
        model = role_manager.create_role(
            club_id, current_user.user_id, req.name, req.permissions
        )
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_role(model)


@router.delete("/clubs/{club_id}/roles/{role_id}", summary="Delete role")
def delete_role(
    club_id: str,
    role_id: str,
    role_manager: RoleManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> dict:
    try:
        role_manager.delete_role(club_id, current_user.user_id, role_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return {"success": True, "message": "Role deleted"}


@router.put(
    "/clubs/{club_id}/members/{membership_id}/role",
    response_model=MembershipInfo,
    summary="Assign or clear a member's role",
)
def assign_role(
    club_id: str,
    membership_id: str,
    req: AssignRoleRequest,
    role_manager: RoleManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> MembershipInfo:
    """Set the member's role; a null role_id makes them a plain member again."""
    try:
        membership = role_manager.assign_role(
            club_id, current_user.user_id, membership_id, req.role_id
        )
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_membership(membership)


# --- Events ---


@router.get("/clubs/{club_id}/events", response_model=List[EventInfo], summary="Upcoming events")
def list_events(
    club_id: str,
    club_manager: ClubManagerDep,
    event_manager: EventManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[EventInfo]:
    try:
        club_manager.get_presided_club(club_id, current_user.user_id)
        events = event_manager.list_upcoming_for_club(club_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return [model_to_event(event) for event in events]


@router.post("/clubs/{club_id}/events", response_model=EventInfo, summary="Create event")
def create_event(
    club_id: str,
    req: CreateEventRequest,
    event_manager: EventManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> EventInfo:
    """Schedule an event; accepted members are notified."""
    try:
        model = event_manager.create_event(
            club_id,
            current_user.user_id,
            title=req.title,
            event_date=req.event_date,
            event_time=req.event_time,
            location=req.location,
            description=req.description,
        )
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_event(model)


@router.patch(
    "/clubs/{club_id}/events/{event_id}", response_model=EventInfo, summary="Update event"
)
def update_event(
    club_id: str,
    event_id: str,
    req: UpdateEventRequest,
    event_manager: EventManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> EventInfo:
    try:
        model = event_manager.update_event(
            club_id,
            current_user.user_id,
            event_id,
            **req.model_dump(exclude_unset=True),
        )
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_event(model)


@router.delete("/clubs/{club_id}/events/{event_id}", summary="Delete event")
def delete_event(
    club_id: str,
    event_id: str,
    event_manager: EventManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> dict:
    try:
        event_manager.delete_event(club_id, current_user.user_id, event_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return {"success": True, "message": "Event deleted"}
