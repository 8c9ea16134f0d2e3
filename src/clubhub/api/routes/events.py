"""Event feed routes."""

from typing import List

from fastapi import APIRouter, Depends

from clubhub.api.routes.auth import require_profile
from clubhub.core.dependencies import EventManagerDep
from clubhub.schemas.event import EventInfo
from clubhub.schemas.identity import ProfilePrincipal
from clubhub.utils.converters import model_to_event

router = APIRouter(prefix="/api/events", tags=["Events"])


@router.get("/feed", response_model=List[EventInfo], summary="Upcoming events of my clubs")
def event_feed(
    event_manager: EventManagerDep,
    current_user: ProfilePrincipal = Depends(require_profile),
) -> List[EventInfo]:
    """Upcoming events across clubs where the caller is an accepted member."""
    return [model_to_event(event) for event in event_manager.list_feed(current_user.user_id)]
