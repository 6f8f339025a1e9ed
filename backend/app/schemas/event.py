"""Pydantic schemas for Events."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from app.models.event import EventStatus
from app.schemas.user import UserIdentity


class EventCreate(BaseModel):
    title: str
    start_time: datetime
    end_time: datetime
    status: Optional[EventStatus] = None


class EventUpdate(BaseModel):
    title: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    status: Optional[EventStatus] = None


class EventOut(BaseModel):
    event_id: str
    title: str
    start_time: datetime
    end_time: datetime
    status: EventStatus
    owner_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class SwappableSlotOut(EventOut):
    """Marketplace entry: someone else's swappable slot plus who owns it."""

    owner: UserIdentity


class EventDeleted(BaseModel):
    message: str
    event_id: str
