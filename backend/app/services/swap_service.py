"""Swap negotiation service — the only writer that touches two slots at once.

Event state machine:
    BUSY <-> SWAPPABLE                       (owner, via event_service)
    SWAPPABLE -> SWAP_PENDING -> BUSY        (accepted swap)
    SWAPPABLE -> SWAP_PENDING -> SWAPPABLE   (rejected swap)

SwapRequest state machine:
    PENDING -> ACCEPTED | REJECTED           (both terminal)

Each negotiation step (request row + two event rows) is committed in a
single session transaction and rolled back as a unit on failure.
"""
import logging
from datetime import datetime, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.errors import AuthorizationError, ConflictError, NotFoundError, ValidationError
from app.models.event import Event, EventStatus
from app.models.swap_request import SwapRequest, SwapStatus

logger = logging.getLogger(__name__)


def list_swappable_slots(db: Session, user_id: str) -> list[Event]:
    """Everyone else's SWAPPABLE slots, earliest first, with owner loaded."""
    return (
        db.query(Event)
        .filter(
            Event.status == EventStatus.swappable,
            Event.owner_id != user_id,
        )
        .order_by(Event.start_time)
        .all()
    )


def _lock_event(db: Session, event_id: str) -> Event | None:
    """Load an event with a row lock where the backend supports FOR UPDATE.

    Attributes are overwritten from the locked row even when the event is
    already in the session from an earlier joined load.
    """
    return (
        db.query(Event)
        .filter(Event.event_id == event_id)
        .with_for_update(of=Event)
        .populate_existing()
        .first()
    )


def _get_request(db: Session, request_id: str) -> SwapRequest:
    swap_request = db.query(SwapRequest).filter(SwapRequest.request_id == request_id).first()
    if not swap_request:
        raise NotFoundError("Swap request not found")
    return swap_request


def _commit_negotiation(db: Session, description: str) -> None:
    """Commit the pending request/slot changes together or not at all."""
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.warning("Rolled back %s: pending request already exists", description)
        raise ConflictError("Swap request already exists")
    except StaleDataError:
        db.rollback()
        logger.warning("Rolled back %s: slots were modified concurrently", description)
        raise ConflictError("Slots were modified by another request. Re-fetch and retry.")
    except Exception:
        db.rollback()
        logger.exception("Rolled back %s after an unexpected error", description)
        raise


def create_swap_request(db: Session, requester_id: str, my_slot_id: str, their_slot_id: str) -> SwapRequest:
    """Offer my_slot in exchange for their_slot; locks both slots as SWAP_PENDING."""
    if not my_slot_id or not their_slot_id:
        raise ValidationError("Please provide both slot IDs")

    my_slot = _lock_event(db, my_slot_id)
    their_slot = _lock_event(db, their_slot_id)
    if not my_slot or not their_slot:
        raise NotFoundError("One or both slots not found")

    if my_slot.owner_id != requester_id:
        logger.warning("User %s tried to offer slot %s owned by %s", requester_id, my_slot_id, my_slot.owner_id)
        raise AuthorizationError("You can only swap your own slots")

    if their_slot.owner_id == requester_id:
        raise ValidationError("You cannot request a swap with your own slot")

    existing = (
        db.query(SwapRequest)
        .filter(
            SwapRequest.my_slot_id == my_slot_id,
            SwapRequest.their_slot_id == their_slot_id,
            SwapRequest.status == SwapStatus.pending,
        )
        .first()
    )
    if existing:
        raise ConflictError("Swap request already exists")

    if my_slot.status != EventStatus.swappable:
        raise ValidationError("Your slot must be marked as SWAPPABLE")
    if their_slot.status != EventStatus.swappable:
        raise ValidationError("The requested slot is not available for swapping")

    swap_request = SwapRequest(
        requester_id=requester_id,
        receiver_id=their_slot.owner_id,
        my_slot_id=my_slot_id,
        their_slot_id=their_slot_id,
        status=SwapStatus.pending,
    )
    db.add(swap_request)
    my_slot.status = EventStatus.swap_pending
    their_slot.status = EventStatus.swap_pending

    _commit_negotiation(db, f"swap request {my_slot_id} -> {their_slot_id}")
    db.refresh(swap_request)
    logger.info(
        "SwapRequest %s created by %s for %s: slot %s <-> %s",
        swap_request.request_id, requester_id, swap_request.receiver_id, my_slot_id, their_slot_id,
    )
    return swap_request


def respond_to_swap_request(db: Session, responder_id: str, request_id: str, accepted: bool) -> SwapRequest:
    """Accept (exchange owners) or reject (release both slots) a pending request."""
    swap_request = _get_request(db, request_id)

    if swap_request.receiver_id != responder_id:
        logger.warning("User %s tried to respond to request %s addressed to %s", responder_id, request_id, swap_request.receiver_id)
        raise AuthorizationError("Not authorized to respond to this request")

    if swap_request.status != SwapStatus.pending:
        raise ValidationError("This request has already been responded to")

    my_slot = _lock_event(db, swap_request.my_slot_id)
    their_slot = _lock_event(db, swap_request.their_slot_id)
    if not my_slot or not their_slot:
        raise NotFoundError("One or both slots of this request no longer exist")

    if accepted:
        my_slot.owner_id, their_slot.owner_id = their_slot.owner_id, my_slot.owner_id
        my_slot.status = EventStatus.busy
        their_slot.status = EventStatus.busy
        swap_request.status = SwapStatus.accepted
    else:
        my_slot.status = EventStatus.swappable
        their_slot.status = EventStatus.swappable
        swap_request.status = SwapStatus.rejected
    swap_request.responded_at = datetime.now(timezone.utc)

    _commit_negotiation(db, f"response to swap request {request_id}")
    db.refresh(swap_request)
    logger.info("SwapRequest %s %s by %s", request_id, swap_request.status.value, responder_id)
    return swap_request


def list_incoming_requests(db: Session, user_id: str) -> list[SwapRequest]:
    """Requests addressed to the user, newest first."""
    return (
        db.query(SwapRequest)
        .filter(SwapRequest.receiver_id == user_id)
        .order_by(SwapRequest.created_at.desc())
        .all()
    )


def list_outgoing_requests(db: Session, user_id: str) -> list[SwapRequest]:
    """Requests the user has made, newest first."""
    return (
        db.query(SwapRequest)
        .filter(SwapRequest.requester_id == user_id)
        .order_by(SwapRequest.created_at.desc())
        .all()
    )
