from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """Mixin to add date_added and last_modified timestamps.

    date_added is written once on insert. last_modified is refreshed by the
    service on every successful mutation, including changes that only touch
    child rows.
    """
    date_added = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    last_modified = Column(DateTime(timezone=True), default=utcnow, nullable=False)
