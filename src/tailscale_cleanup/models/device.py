"""Device model.

Snapshot of a tailnet device as returned by the Tailscale API.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional

# RFC 3339 fraction may carry up to nanosecond precision; datetime stops at micro
_FRACTION_RE = re.compile(r"\.(\d+)")


def parse_timestamp(value: str) -> datetime:
    """Parse an RFC 3339 timestamp into an aware UTC datetime.

    Args:
        value: Timestamp string (e.g. "2024-05-01T10:15:30.123456789Z")

    Returns:
        Timezone-aware datetime in UTC

    Raises:
        ValueError: If the value is not a valid RFC 3339 timestamp
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")

    normalized = value.strip()
    if normalized[-1] in ("Z", "z"):
        normalized = normalized[:-1] + "+00:00"
    normalized = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), normalized, count=1)

    try:
        parsed = datetime.fromisoformat(normalized)
    except ValueError:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp without UTC offset: {value!r}")

    return parsed.astimezone(timezone.utc)


@dataclass(frozen=True)
class Device:
    """Tailnet device entity.

    Attributes:
        id: Device identifier, unique within the tailnet
        name: Display name (not guaranteed unique)
        last_seen: When the device last checked in (UTC), None if never
    """

    id: str
    name: str
    last_seen: Optional[datetime]

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Device":
        """Build a device from a Tailscale API device object.

        Args:
            data: Device object with "id", "name" and "lastSeen" keys

        Returns:
            Device instance

        Raises:
            ValueError: If the object is missing fields or has bad values
        """
        if not isinstance(data, dict):
            raise ValueError(f"Device entry must be an object, got {type(data).__name__}")

        device_id = data.get("id")
        if not isinstance(device_id, str) or not device_id:
            raise ValueError("Device entry is missing 'id'")

        name = data.get("name", "")
        if not isinstance(name, str):
            raise ValueError(f"Device {device_id} has a non-string 'name'")

        raw_last_seen = data.get("lastSeen")
        last_seen = parse_timestamp(raw_last_seen) if raw_last_seen else None

        return cls(id=device_id, name=name, last_seen=last_seen)

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"
