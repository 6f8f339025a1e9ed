"""Event lifecycle service — owner-scoped create/list/update/delete.

Responsibilities:
- Ownership hook: only the owner may update or delete a slot
- Time validation: end_time > start_time on every write, partial updates included
- Status rules: owners toggle BUSY <-> SWAPPABLE; SWAP_PENDING belongs to the
  negotiation service and cannot be entered or left by hand
- Slots locked in a pending negotiation cannot be deleted
"""
import logging
from datetime import datetime
from typing import Optional, Any

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from app.models.event import Event, EventStatus
from app.models.types import to_utc

logger = logging.getLogger(__name__)

OWNER_SETTABLE_STATUSES = (EventStatus.busy, EventStatus.swappable)
UPDATABLE_FIELDS = ("title", "start_time", "end_time", "status")


def validate_time_range(start_time: Optional[datetime], end_time: Optional[datetime]) -> None:
    """Reject missing bounds and any range where end_time <= start_time."""
    if start_time is None or end_time is None:
        raise ValidationError("Please provide start_time and end_time")
    if to_utc(end_time) <= to_utc(start_time):
        raise ValidationError("End time must be after start time")


def _clean_title(title: Optional[str]) -> str:
    if title is None or not title.strip():
        raise ValidationError("Please provide an event title")
    return title.strip()


def _coerce_status(value: Any) -> EventStatus:
    try:
        return EventStatus(value)
    except ValueError:
        raise ValidationError(f"Invalid event status: {value}")


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def _get_owned_event(db: Session, owner_id: str, event_id: str, action: str) -> Event:
    event = get_event(db, event_id)
    if event.owner_id != owner_id:
        logger.warning("User %s tried to %s event %s owned by %s", owner_id, action, event_id, event.owner_id)
        raise AuthorizationError(f"Not authorized to {action} this event")
    return event


def create_event(
    db: Session,
    owner_id: str,
    title: Optional[str],
    start_time: Optional[datetime],
    end_time: Optional[datetime],
    status: Optional[str] = None,
) -> Event:
    """Create a slot for its owner. Status defaults to BUSY."""
    if not title or start_time is None or end_time is None:
        raise ValidationError("Please provide title, start_time, and end_time")
    title = _clean_title(title)
    validate_time_range(start_time, end_time)

    event_status = _coerce_status(status) if status else EventStatus.busy
    if event_status not in OWNER_SETTABLE_STATUSES:
        raise ValidationError("New events must be BUSY or SWAPPABLE")

    event = Event(
        title=title,
        start_time=to_utc(start_time),
        end_time=to_utc(end_time),
        status=event_status,
        owner_id=owner_id,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) for owner %s", title, event.event_id, owner_id)
    return event


def list_own_events(db: Session, owner_id: str) -> list[Event]:
    """All events owned by the user, earliest first."""
    return (
        db.query(Event)
        .filter(Event.owner_id == owner_id)
        .order_by(Event.start_time)
        .all()
    )


def update_event(db: Session, owner_id: str, event_id: str, updates: dict[str, Any]) -> Event:
    """Apply a partial update; only provided fields change."""
    event = _get_owned_event(db, owner_id, event_id, "update")
    updates = {k: v for k, v in updates.items() if k in UPDATABLE_FIELDS and v is not None}

    if "title" in updates:
        updates["title"] = _clean_title(updates["title"])

    if "status" in updates:
        new_status = _coerce_status(updates["status"])
        if new_status != event.status:
            if event.status == EventStatus.swap_pending:
                raise ValidationError("Event is part of a pending swap and its status cannot be changed")
            if new_status not in OWNER_SETTABLE_STATUSES:
                raise ValidationError("Only BUSY or SWAPPABLE can be set by the owner")
        updates["status"] = new_status

    # Re-validate against the merged state, not just the supplied fields
    start_time = updates.get("start_time", event.start_time)
    end_time = updates.get("end_time", event.end_time)
    validate_time_range(start_time, end_time)
    for field in ("start_time", "end_time"):
        if field in updates:
            updates[field] = to_utc(updates[field])

    for field, value in updates.items():
        setattr(event, field, value)

    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError("Event was modified concurrently. Re-fetch and retry.")
    db.refresh(event)
    logger.info("Updated event %s (%s)", event_id, ", ".join(sorted(updates)) or "no changes")
    return event


def delete_event(db: Session, owner_id: str, event_id: str) -> None:
    """Remove an owner's event unless it is locked in a pending swap."""
    event = _get_owned_event(db, owner_id, event_id, "delete")
    if event.status == EventStatus.swap_pending:
        raise ValidationError("Cannot delete an event that is part of a pending swap request")

    db.delete(event)
    try:
        db.commit()
    except StaleDataError:
        db.rollback()
        raise ConflictError("Event was modified concurrently. Re-fetch and retry.")
    logger.info("Deleted event %s for owner %s", event_id, owner_id)
