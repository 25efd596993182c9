"""Go-style duration parsing and formatting.

Durations are accepted and displayed the way the Tailscale tooling writes
them: "15m", "1h30m", "2.5s", "250ms".
"""

from __future__ import annotations

import re
from datetime import timedelta

_UNIT_MICROSECONDS = {
    "ns": 0.001,
    "us": 1,
    "µs": 1,
    "μs": 1,
    "ms": 1_000,
    "s": 1_000_000,
    "m": 60_000_000,
    "h": 3_600_000_000,
}

_COMPONENT_RE = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")


def parse_duration(value: str) -> timedelta:
    """Parse a Go duration string.

    Args:
        value: Duration such as "15m", "1h30m", "-1.5h" or "0"

    Returns:
        Parsed duration (sub-microsecond parts are truncated)

    Raises:
        ValueError: If the value is not a valid duration
    """
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise ValueError(f"invalid duration {value!r}")

    sign = 1
    if text[0] in "+-":
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return timedelta(0)

    position = 0
    total = 0.0
    while position < len(text):
        match = _COMPONENT_RE.match(text, position)
        if not match:
            if re.match(r"[\d.]+$", text[position:]):
                raise ValueError(f"missing unit in duration {value!r}")
            raise ValueError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += float(number) * _UNIT_MICROSECONDS[unit]
        position = match.end()

    if position == 0:
        raise ValueError(f"invalid duration {value!r}")

    return timedelta(microseconds=sign * round(total))


def format_duration(duration: timedelta) -> str:
    """Format a duration like Go's Duration.String().

    Examples: "0s", "250µs", "1.5ms", "20m0.5s", "1h0m0s".

    Args:
        duration: Duration to format

    Returns:
        Formatted duration
    """
    # timedelta is exact in microseconds
    micros = duration // timedelta(microseconds=1)
    if micros == 0:
        return "0s"

    sign = "-" if micros < 0 else ""
    micros = abs(micros)

    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim_fraction(micros, 1_000)}ms"

    hours, remainder = divmod(micros, 3_600_000_000)
    minutes, remainder = divmod(remainder, 60_000_000)
    seconds = _trim_fraction(remainder, 1_000_000)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim_fraction(value: int, scale: int) -> str:
    """Render value/scale with trailing fractional zeros removed."""
    whole, fraction = divmod(value, scale)
    if not fraction:
        return str(whole)
    digits = len(str(scale)) - 1
    return f"{whole}.{fraction:0{digits}d}".rstrip("0")
