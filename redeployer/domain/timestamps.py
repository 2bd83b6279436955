"""Timestamp parsing for API payloads."""

from __future__ import annotations

from datetime import datetime, timezone
import re
from typing import Final

_FRACTION_PATTERN: Final[re.Pattern[str]] = re.compile(r"\.(\d+)")


def domain_parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Fractions longer than microseconds are truncated and naive values are read as UTC.

    Args:
        value: Timestamp text, e.g. `2024-05-01T10:00:00.123456789Z`.

    Returns:
        datetime: Timezone-aware datetime normalized to UTC.

    Raises:
        ValueError: Raised when the text is not a valid timestamp.
    """

    text = value.strip()
    if not text:
        raise ValueError("timestamp must not be blank")
    if text[-1] in "zZ":
        text = f"{text[:-1]}+00:00"
    text = _FRACTION_PATTERN.sub(lambda match: "." + match.group(1)[:6].ljust(6, "0"), text, count=1)

    parsed_value = datetime.fromisoformat(text)
    if parsed_value.tzinfo is None:
        parsed_value = parsed_value.replace(tzinfo=timezone.utc)
    return parsed_value.astimezone(timezone.utc)
