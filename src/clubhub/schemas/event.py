"""Event schema definitions."""

from datetime import date, time
from typing import Optional

from pydantic import BaseModel, Field


class CreateEventRequest(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    event_date: date
    event_time: time
    location: str = Field(min_length=1)


class UpdateEventRequest(BaseModel):
    """Partial update; omitted fields keep their value."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    event_date: Optional[date] = None
    event_time: Optional[time] = None
    location: Optional[str] = Field(default=None, min_length=1)


class EventInfo(BaseModel):
    id: str
    club_id: str
    club_name: str = ""
    title: str
    description: Optional[str] = None
    event_date: str = Field(description="ISO date, YYYY-MM-DD.")
    event_time: str = Field(description="24h time, HH:MM.")
    location: str
