"""Duration string parsing compatible with the Okteto CLI threshold format.

Accepted strings are an optional sign followed by one or more
`<decimal><unit>` groups, for example `24h`, `1h30m`, `1.5h` or `300ms`.
The bare string `0` means zero.
"""

from __future__ import annotations

from datetime import timedelta
from decimal import Decimal
import re
from typing import Final

_DURATION_COMPONENT_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
)
_MAX_DURATION_NANOSECONDS: Final[int] = 2**63 - 1
_DURATION_UNIT_SECONDS: Final[dict[str, Decimal]] = {
    "ns": Decimal("0.000000001"),
    "us": Decimal("0.000001"),
    "µs": Decimal("0.000001"),
    "μs": Decimal("0.000001"),
    "ms": Decimal("0.001"),
    "s": Decimal("1"),
    "m": Decimal("60"),
    "h": Decimal("3600"),
}


def domain_parse_duration(value: str) -> timedelta:
    """Parse one duration string into a timedelta.

    Args:
        value: Duration text such as `24h` or `1h30m`.

    Returns:
        timedelta: Parsed duration. Sub-microsecond precision is rounded.

    Raises:
        ValueError: Raised when the text is blank, not a valid duration or
            longer than the largest signed 64-bit nanosecond count.
    """

    text = value.strip()
    if not text:
        raise ValueError("invalid duration: value must not be blank")

    sign = 1
    remainder = text
    if remainder[0] in "+-":
        sign = -1 if remainder[0] == "-" else 1
        remainder = remainder[1:]

    if remainder == "0":
        return timedelta(0)
    if not remainder:
        raise ValueError(f"invalid duration {value!r}")

    total_seconds = Decimal(0)
    position = 0
    while position < len(remainder):
        component_match = _DURATION_COMPONENT_PATTERN.match(remainder, position)
        if component_match is None:
            raise ValueError(f"invalid duration {value!r}")
        amount, unit = component_match.groups()
        total_seconds += Decimal(amount) * _DURATION_UNIT_SECONDS[unit]
        position = component_match.end()

    if total_seconds * 1_000_000_000 > _MAX_DURATION_NANOSECONDS:
        raise ValueError(f"invalid duration {value!r}: value out of range")

    total_microseconds = (sign * total_seconds * 1_000_000).to_integral_value()
    return timedelta(microseconds=int(total_microseconds))
