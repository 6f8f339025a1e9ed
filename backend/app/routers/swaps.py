"""Marketplace and swap negotiation API routes."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.event import SwappableSlotOut
from app.schemas.swap_request import SwapRequestCreate, SwapRequestOut, SwapResponseIn
from app.security import get_current_user
from app.services import swap_service

router = APIRouter()


@router.get("/swappable-slots", response_model=list[SwappableSlotOut])
def list_swappable_slots(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Other users' SWAPPABLE slots with their owners, earliest first."""
    return swap_service.list_swappable_slots(db, current_user.user_id)


@router.post("/swap-request", response_model=SwapRequestOut, status_code=status.HTTP_201_CREATED)
def create_swap_request(
    payload: SwapRequestCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Offer one of the caller's slots for someone else's slot."""
    return swap_service.create_swap_request(
        db=db,
        requester_id=current_user.user_id,
        my_slot_id=payload.my_slot_id,
        their_slot_id=payload.their_slot_id,
    )


@router.post("/swap-response/{request_id}", response_model=SwapRequestOut)
def respond_to_swap_request(
    request_id: str,
    payload: SwapResponseIn,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Accept or reject a request addressed to the caller."""
    return swap_service.respond_to_swap_request(
        db=db,
        responder_id=current_user.user_id,
        request_id=request_id,
        accepted=payload.accepted,
    )


@router.get("/swap-requests/incoming", response_model=list[SwapRequestOut])
def list_incoming(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return swap_service.list_incoming_requests(db, current_user.user_id)


@router.get("/swap-requests/outgoing", response_model=list[SwapRequestOut])
def list_outgoing(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return swap_service.list_outgoing_requests(db, current_user.user_id)
