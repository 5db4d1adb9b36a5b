"""
Host-local time helpers.

Report windows are resolved in the server's local time zone; there is no
per-restaurant time zone. Timestamps coming back from the store may be
timezone-aware, so they are normalised to naive local time before comparison.
Values written to the store carry the host offset so a store running in
another zone (UTC on hosted Postgres) reads them correctly.
"""
from datetime import datetime


def local_now() -> datetime:
    """Current host-local time, naive."""
    return datetime.now()


def to_aware(dt: datetime) -> datetime:
    """Attach the host zone to a naive local time; aware values are returned unchanged."""
    if dt.tzinfo is not None:
        return dt
    return dt.astimezone()


def to_local(dt: datetime) -> datetime:
    """Convert an aware datetime to naive host-local time. Naive values are assumed local already."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone().replace(tzinfo=None)


def start_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(dt: datetime) -> datetime:
    return dt.replace(hour=23, minute=59, second=59, microsecond=999999)
