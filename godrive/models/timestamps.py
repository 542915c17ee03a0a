"""ISO-8601 helpers for persisted timestamps."""

from datetime import datetime
from typing import Optional, Union


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Render a datetime as an ISO-8601 string, passing None through."""
    if value is None:
        return None
    return value.isoformat()


def parse_timestamp(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 string (or pass a datetime/None through)."""
    if value is None or isinstance(value, datetime):
        return value
    # JavaScript clients send a trailing "Z"
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    return datetime.fromisoformat(value)
