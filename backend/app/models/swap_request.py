"""SwapRequest ORM model — a proposal to exchange two slots between users."""
import uuid
from datetime import datetime, timezone
import enum
from sqlalchemy import Column, String, Integer, ForeignKey, Index, text, Enum as SAEnum
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.types import UTCDateTime, enum_values


class SwapStatus(str, enum.Enum):
    pending = "PENDING"
    accepted = "ACCEPTED"
    rejected = "REJECTED"


class SwapRequest(Base):
    __tablename__ = "swap_requests"

    request_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    requester_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    receiver_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    # No FK: a slot may be deleted after the request reaches a terminal state
    my_slot_id = Column(String(36), nullable=False)
    their_slot_id = Column(String(36), nullable=False)
    status = Column(
        SAEnum(SwapStatus, name="swap_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=SwapStatus.pending,
    )
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(UTCDateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    responded_at = Column(UTCDateTime, nullable=True)

    requester = relationship("User", foreign_keys=[requester_id], lazy="joined")
    receiver = relationship("User", foreign_keys=[receiver_id], lazy="joined")
    my_slot = relationship(
        "Event",
        primaryjoin="foreign(SwapRequest.my_slot_id) == Event.event_id",
        lazy="joined",
        viewonly=True,
    )
    their_slot = relationship(
        "Event",
        primaryjoin="foreign(SwapRequest.their_slot_id) == Event.event_id",
        lazy="joined",
        viewonly=True,
    )

    __table_args__ = (
        # At most one PENDING request per (my_slot, their_slot) pair
        Index(
            "uq_swap_requests_pending_pair",
            "my_slot_id",
            "their_slot_id",
            unique=True,
            sqlite_where=text("status = 'PENDING'"),
            postgresql_where=text("status = 'PENDING'"),
        ),
    )

    __mapper_args__ = {"version_id_col": version}
