"""Event ORM model — a calendar slot owned by exactly one user."""
import uuid
import enum
from sqlalchemy import Column, String, Integer, ForeignKey, Index, CheckConstraint, Enum as SAEnum
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from app.database import Base
from app.models.types import UTCDateTime, enum_values


class EventStatus(str, enum.Enum):
    busy = "BUSY"
    swappable = "SWAPPABLE"
    swap_pending = "SWAP_PENDING"


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(255), nullable=False)
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime, nullable=False)
    status = Column(
        SAEnum(EventStatus, name="event_status", native_enum=False, values_callable=enum_values),
        nullable=False,
        default=EventStatus.busy,
    )
    owner_id = Column(String(36), ForeignKey("users.user_id"), nullable=False, index=True)
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(UTCDateTime, server_default=func.now())
    updated_at = Column(UTCDateTime, server_default=func.now(), onupdate=func.now())

    owner = relationship("User", lazy="joined")

    __table_args__ = (
        CheckConstraint("end_time > start_time", name="check_event_end_after_start"),
        # Marketplace scan: status filter, ordered by start
        Index("ix_events_status_start", "status", "start_time"),
    )

    # Concurrent writers to the same row fail with StaleDataError
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Event(event_id={self.event_id}, title={self.title}, status={self.status})>"
