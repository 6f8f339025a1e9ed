"""Column types shared by the ORM models."""
from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.types import TypeDecorator


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime stored as UTC.

    SQLite drops tzinfo on the way back; values are re-tagged as UTC so
    comparisons against aware request datetimes never mix naive and aware.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect):
        if value is None:
            return None
        return to_utc(value)

    def process_result_value(self, value: datetime | None, dialect):
        if value is None:
            return None
        return to_utc(value)


def to_utc(value: datetime) -> datetime:
    """Normalize a datetime to aware UTC. Naive values are taken as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def enum_values(enum_cls) -> list[str]:
    """Persist enum values (``"SWAP_PENDING"``) rather than member names."""
    return [member.value for member in enum_cls]
