"""Admin console routes.

Admins manage only the clubs they created. Pending requests are triaged
here only for clubs that have no president yet; decisions are posted to
/api/memberships.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends

from clubhub.api.errors import to_http_exception
from clubhub.api.routes.auth import require_admin
from clubhub.core.dependencies import (
    ClubManagerDep,
    IdentityManagerDep,
    MembershipManagerDep,
)
from clubhub.core.exceptions import ClubHubError
from clubhub.schemas.club import (
    AdminClubInfo,
    AssignPresidentRequest,
    CreateClubRequest,
    UpdateClubRequest,
)
from clubhub.schemas.identity import AdminPrincipal, UserDirectoryEntry
from clubhub.schemas.membership import MembershipRequestInfo

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/clubs", response_model=List[AdminClubInfo], summary="My clubs")
def list_clubs(
    club_manager: ClubManagerDep,
    q: Optional[str] = None,
    current_user: AdminPrincipal = Depends(require_admin),
) -> List[AdminClubInfo]:
    """List clubs created by the admin with member counts and status.

    Args:
        club_manager: Injected ClubManager instance.
        q: Optional search on club name.
        current_user: Current administrator.
    """
    return club_manager.list_admin_clubs(current_user.user_id, query=q)


@router.post("/clubs", response_model=AdminClubInfo, summary="Create club")
def create_club(
    req: CreateClubRequest,
    club_manager: ClubManagerDep,
    current_user: AdminPrincipal = Depends(require_admin),
) -> AdminClubInfo:
    try:
        model = club_manager.create_club(
            req.name,
            current_user.user_id,
            description=req.description,
            category=req.category,
        )
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return club_manager.get_admin_club(model.id, current_user.user_id)


@router.get("/clubs/{club_id}", response_model=AdminClubInfo, summary="Club details")
def get_club(
    club_id: str,
    club_manager: ClubManagerDep,
    current_user: AdminPrincipal = Depends(require_admin),
) -> AdminClubInfo:
    try:
        return club_manager.get_admin_club(club_id, current_user.user_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)


@router.patch("/clubs/{club_id}", response_model=AdminClubInfo, summary="Update club")
def update_club(
    club_id: str,
    req: UpdateClubRequest,
    club_manager: ClubManagerDep,
    current_user: AdminPrincipal = Depends(require_admin),
) -> AdminClubInfo:
    try:
        club_manager.update_club(
            club_id, current_user.user_id, **req.model_dump(exclude_unset=True)
        )
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return club_manager.get_admin_club(club_id, current_user.user_id)


@router.delete("/clubs/{club_id}", summary="Delete club")
def delete_club(
    club_id: str,
    club_manager: ClubManagerDep,
    current_user: AdminPrincipal = Depends(require_admin),
) -> dict:
    """Delete a club together with its memberships, roles and events."""
    try:
        club_manager.delete_club(club_id, current_user.user_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return {"success": True, "message": "Club deleted successfully"}


@router.put(
    "/clubs/{club_id}/president", response_model=AdminClubInfo, summary="Assign president"
)
def assign_president(
    club_id: str,
    req: AssignPresidentRequest,
    club_manager: ClubManagerDep,
    current_user: AdminPrincipal = Depends(require_admin),
) -> AdminClubInfo:
    """Appoint a profile as president and make them an accepted member."""
    try:
        club_manager.assign_president(club_id, current_user.user_id, req.profile_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return club_manager.get_admin_club(club_id, current_user.user_id)


@router.get(
    "/requests",
    response_model=List[MembershipRequestInfo],
    summary="Pending requests for clubs without a president",
)
def list_pending_requests(
    membership_manager: MembershipManagerDep,
    current_user: AdminPrincipal = Depends(require_admin),
) -> List[MembershipRequestInfo]:
    return membership_manager.list_pending_for_admin(current_user.user_id)


@router.get("/users", response_model=List[UserDirectoryEntry], summary="User directory")
def list_users(
    identity_manager: IdentityManagerDep,
    current_user: AdminPrincipal = Depends(require_admin),
) -> List[UserDirectoryEntry]:
    return identity_manager.list_user_directory(current_user.user_id)
