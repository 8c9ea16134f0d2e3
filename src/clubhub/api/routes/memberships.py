"""Membership decision routes shared by presidents and admins.

Whether the caller may decide is checked by ``MembershipManager.transition``:
presidents act on the clubs they preside, admins on their own clubs that
have no president yet.
"""

from typing import Union

from fastapi import APIRouter, Depends

from clubhub.api.errors import to_http_exception
from clubhub.api.routes.auth import get_current_principal
from clubhub.core.dependencies import MembershipManagerDep
from clubhub.core.exceptions import ClubHubError
from clubhub.schemas.identity import AdminPrincipal, ProfilePrincipal
from clubhub.schemas.membership import MembershipInfo
from clubhub.utils.converters import model_to_membership

router = APIRouter(prefix="/api/memberships", tags=["Memberships"])


@router.post("/{membership_id}/approve", response_model=MembershipInfo, summary="Approve request")
def approve_membership(
    membership_id: str,
    membership_manager: MembershipManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> MembershipInfo:
    try:
        membership = membership_manager.transition(current_user, membership_id, "approve")
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_membership(membership)


@router.post("/{membership_id}/reject", response_model=MembershipInfo, summary="Reject request")
def reject_membership(
    membership_id: str,
    membership_manager: MembershipManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> MembershipInfo:
    """Reject a pending request. The row is kept with status "rejected"."""
    try:
        membership = membership_manager.transition(current_user, membership_id, "reject")
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_membership(membership)


@router.delete("/{membership_id}", summary="Remove member")
def remove_member(
    membership_id: str,
    membership_manager: MembershipManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> dict:
    try:
        membership_manager.transition(current_user, membership_id, "remove")
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return {"success": True, "message": "Member removed"}
