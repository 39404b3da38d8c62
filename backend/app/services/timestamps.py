"""
Datetime conversion at the API boundary.

Inbound:  client-supplied `timestamp` / `date` values (ISO-8601 strings or
          epoch milliseconds) become timezone-aware UTC datetimes.
Outbound: store datetimes become ISO-8601 UTC strings with millisecond
          precision and a trailing "Z", e.g. 2024-05-01T08:30:00.000Z.
"""

import re
from datetime import datetime, timezone
from typing import Any, Optional, Union

from app.exceptions import ValidationError

# Seconds fraction of any length; fromisoformat on 3.10 takes only 3 or 6 digits
_FRACTION = re.compile(r"(\d{2}:\d{2}:\d{2})[.,](\d+)")


def _six_digit_fraction(match: "re.Match[str]") -> str:
    return f"{match.group(1)}.{match.group(2)[:6].ljust(6, '0')}"


def parse_client_datetime(value: Union[str, int, float, datetime], field: str) -> datetime:
    """
    Parse a client-supplied datetime. Naive values are taken as UTC.

    Raises:
        ValidationError: value cannot be interpreted as a datetime
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise ValidationError(message=f"Invalid {field}", field=field)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        text = _FRACTION.sub(_six_digit_fraction, text, count=1)
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(message=f"Invalid {field}", field=field)
    else:
        raise ValidationError(message=f"Invalid {field}", field=field)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def to_iso(value: Any) -> Optional[Any]:
    """
    Render a stored datetime as an ISO string; other values pass through.

    Firestore returns DatetimeWithNanoseconds (a datetime subclass), so one
    isinstance check covers both backends.
    """
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        utc = value.astimezone(timezone.utc)
        return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
    return value
