"""Pydantic schemas for SwapRequests."""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, StrictBool

from app.models.swap_request import SwapStatus
from app.schemas.event import EventOut
from app.schemas.user import UserIdentity


class SwapRequestCreate(BaseModel):
    my_slot_id: str = Field(min_length=1)
    their_slot_id: str = Field(min_length=1)


class SwapResponseIn(BaseModel):
    accepted: StrictBool


class SwapRequestOut(BaseModel):
    request_id: str
    requester_id: str
    receiver_id: str
    my_slot_id: str
    their_slot_id: str
    status: SwapStatus
    created_at: datetime
    responded_at: Optional[datetime] = None
    requester: Optional[UserIdentity] = None
    receiver: Optional[UserIdentity] = None
    # None when the referenced event has since been deleted
    my_slot: Optional[EventOut] = None
    their_slot: Optional[EventOut] = None

    model_config = {"from_attributes": True}
