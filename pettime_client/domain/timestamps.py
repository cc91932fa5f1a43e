"""
Timestamp helpers for API payloads.

The API emits RFC 3339 strings, possibly with a trailing "Z" and more than
six fractional digits.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional

_FRACTION = re.compile(r"(\.\d{6})\d+")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an API timestamp into an aware datetime; None passes through."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    text = str(value).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(r"\1", text)
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime the way the API expects it."""
    if value is None:
        return None
    return value.isoformat()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)
