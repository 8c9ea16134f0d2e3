from typing import List, Optional

from pydantic import BaseModel


class NotificationInfo(BaseModel):
    id: str
    type: str
    title: str
    message: str
    club_id: Optional[str] = None
    club_name: Optional[str] = None
    read: bool
    created_at: str


class NotificationFeedResponse(BaseModel):
    notifications: List[NotificationInfo]
    unread_count: int


class MarkAllReadResponse(BaseModel):
    updated: int
