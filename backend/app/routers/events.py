"""Event API routes — delegates to event_service for invariant enforcement."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.schemas.event import EventCreate, EventUpdate, EventOut, EventDeleted
from app.security import get_current_user
from app.services import event_service

router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a slot owned by the caller. Status defaults to BUSY."""
    return event_service.create_event(
        db=db,
        owner_id=current_user.user_id,
        title=payload.title,
        start_time=payload.start_time,
        end_time=payload.end_time,
        status=payload.status,
    )


@router.get("/", response_model=list[EventOut])
def list_my_events(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """The caller's events, earliest first."""
    return event_service.list_own_events(db, current_user.user_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(
    event_id: str,
    payload: EventUpdate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Partially update an event (owner only)."""
    return event_service.update_event(
        db=db,
        owner_id=current_user.user_id,
        event_id=event_id,
        updates=payload.model_dump(exclude_unset=True, exclude_none=True),
    )


@router.delete("/{event_id}", response_model=EventDeleted)
def delete_event(
    event_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete an event (owner only, not while a swap is pending)."""
    event_service.delete_event(db, current_user.user_id, event_id)
    return EventDeleted(message="Event deleted successfully", event_id=event_id)
