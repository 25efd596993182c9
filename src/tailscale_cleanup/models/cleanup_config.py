"""Cleanup configuration model.

Immutable settings for a single cleanup run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

DEFAULT_LAST_SEEN_TIMEOUT = timedelta(minutes=15)


@dataclass(frozen=True)
class CleanupConfig:
    """Cleanup run configuration.

    Built once per invocation by the CLI and passed to the API client and
    cleaner. Never mutated after construction.

    Attributes:
        api_key: Tailscale API key (sent as the Basic auth username)
        base_url: API base URL, without trailing slash
        tailnet: Tailnet name
        last_seen_timeout: Devices last seen longer ago than this are stale
        exclude: Substrings protecting matching device names from deletion
        dry_run: Report deletions without performing them
        timeout: Per-request timeout in seconds (None for no timeout)
    """

    api_key: str
    base_url: str
    tailnet: str
    last_seen_timeout: timedelta = DEFAULT_LAST_SEEN_TIMEOUT
    exclude: tuple[str, ...] = field(default_factory=tuple)
    dry_run: bool = False
    timeout: Optional[float] = None

    def __post_init__(self) -> None:
        # Normalize so URL joins never produce "//"
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        object.__setattr__(self, "exclude", tuple(self.exclude))

    def validate(self) -> bool:
        """Validate configuration invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if not self.api_key:
            raise ValueError("API key is required")
        if not self.tailnet:
            raise ValueError("Tailnet name is required")
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError(f"Invalid base URL: {self.base_url}")
        if self.last_seen_timeout < timedelta(0):
            raise ValueError("Last-seen timeout cannot be negative")
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError("Request timeout must be positive")

        return True

    def __repr__(self) -> str:
        # Keep the API key out of logs and tracebacks
        return (
            f"CleanupConfig(base_url={self.base_url!r}, tailnet={self.tailnet!r}, "
            f"last_seen_timeout={self.last_seen_timeout!r}, exclude={self.exclude!r}, "
            f"dry_run={self.dry_run!r}, timeout={self.timeout!r})"
        )
