from datetime import datetime, timedelta
from typing import Optional
import pytz

UTC = pytz.utc

def get_utc_now() -> datetime:
    """Get current time in UTC."""
    return datetime.now(UTC)

def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """
    Current UTC time, nudged forward so it is strictly later than `previous`.
    Keeps updated_at monotonic even when two writes land on the same clock tick.
    """
    now = get_utc_now()
    if previous is None:
        return now
    if previous.tzinfo is None:
        previous = previous.replace(tzinfo=UTC)
    if now <= previous:
        now = previous + timedelta(microseconds=1)
    return now

def to_utc(dt: datetime) -> datetime:
    """Convert a datetime to UTC, assuming UTC when naive."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)

def format_iso(dt: Optional[datetime]) -> Optional[str]:
    """Format datetime as an ISO-8601 string in UTC."""
    if dt is None:
        return None
    return to_utc(dt).isoformat()
