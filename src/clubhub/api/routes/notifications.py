"""Notification feed and read-state routes."""

from typing import Union

from fastapi import APIRouter, Depends

from clubhub.api.errors import to_http_exception
from clubhub.api.routes.auth import get_current_principal
from clubhub.core.dependencies import NotificationManagerDep
from clubhub.core.exceptions import ClubHubError
from clubhub.schemas.identity import AdminPrincipal, ProfilePrincipal
from clubhub.schemas.notification import (
    MarkAllReadResponse,
    NotificationFeedResponse,
    NotificationInfo,
)
from clubhub.utils.converters import model_to_notification

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationFeedResponse, summary="My notifications")
def list_notifications(
    notification_manager: NotificationManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> NotificationFeedResponse:
    """Most recent notifications, newest first, with the unread total."""
    models = notification_manager.list_for_user(current_user.user_id)
    return NotificationFeedResponse(
        notifications=[model_to_notification(m) for m in models],
        unread_count=notification_manager.count_unread(current_user.user_id),
    )


@router.post("/read-all", response_model=MarkAllReadResponse, summary="Mark all as read")
def mark_all_read(
    notification_manager: NotificationManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> MarkAllReadResponse:
    return MarkAllReadResponse(
        updated=notification_manager.mark_all_read(current_user.user_id)
    )


@router.post(
    "/{notification_id}/read", response_model=NotificationInfo, summary="Mark as read"
)
def mark_read(
    notification_id: str,
    notification_manager: NotificationManagerDep,
    current_user: Union[AdminPrincipal, ProfilePrincipal] = Depends(get_current_principal),
) -> NotificationInfo:
    try:
        model = notification_manager.mark_read(notification_id, current_user.user_id)
    except ClubHubError as exc:
        raise to_http_exception(exc)
    return model_to_notification(model)
