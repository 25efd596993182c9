"""CLI configuration loading.

Settings are resolved from built-in defaults, an optional YAML file and
environment variables; command-line flags override all of them. The API
key is never read from the file.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from ..api.client import DEFAULT_BASE_URL

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "TAILSCALE_CLEANUP_CONFIG"
DEFAULT_CONFIG_PATH = Path.home() / ".tailscale-cleanup" / "config.yaml"

_FILE_KEYS = {"base_url", "last_seen_duration", "exclude", "timeout", "log_level"}


class ConfigError(Exception):
    """Invalid or unreadable configuration."""


@dataclass
class Config:
    """CLI settings.

    Attributes:
        base_url: Tailscale API base URL
        last_seen_duration: Staleness threshold as a duration string
        exclude: Exclusion substrings from the config file
        timeout: Per-request timeout in seconds (None for no timeout)
        log_level: Default log level name
        source: Config file the settings were read from (None if defaults)
    """

    base_url: str = DEFAULT_BASE_URL
    last_seen_duration: str = "15m"
    exclude: list[str] = field(default_factory=list)
    timeout: Optional[float] = None
    log_level: str = "WARNING"
    source: Optional[Path] = None

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Config":
        """Load configuration.

        Args:
            path: Explicit config file (must exist). When omitted,
                $TAILSCALE_CLEANUP_CONFIG and then the default location are
                tried, and a missing file is not an error.

        Returns:
            Resolved configuration

        Raises:
            ConfigError: If the file cannot be read or has invalid values
        """
        config = cls()

        required = path is not None
        if path is None and os.environ.get(CONFIG_ENV_VAR):
            path = Path(os.environ[CONFIG_ENV_VAR])
            required = True
        if path is None:
            path = DEFAULT_CONFIG_PATH

        path = path.expanduser()
        if path.exists():
            config._apply_file(path)
        elif required:
            raise ConfigError(f"Config file not found: {path}")

        config._apply_env()
        return config

    def _apply_file(self, path: Path) -> None:
        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping")

        unknown = set(data) - _FILE_KEYS
        if unknown:
            raise ConfigError(f"Unknown keys in config file {path}: {', '.join(sorted(unknown))}")

        self._set_values(data, origin=str(path))
        self.source = path
        logger.debug(f"Loaded configuration from {path}")

    def _apply_env(self) -> None:
        values: dict[str, Any] = {}
        if os.environ.get("TAILSCALE_BASE_URL"):
            values["base_url"] = os.environ["TAILSCALE_BASE_URL"]
        if os.environ.get("TAILSCALE_CLEANUP_LOG_LEVEL"):
            values["log_level"] = os.environ["TAILSCALE_CLEANUP_LOG_LEVEL"]
        self._set_values(values, origin="environment")

    def _set_values(self, values: dict[str, Any], origin: str) -> None:
        if "base_url" in values:
            if not isinstance(values["base_url"], str):
                raise ConfigError(f"base_url must be a string ({origin})")
            self.base_url = values["base_url"]

        if "last_seen_duration" in values:
            self.last_seen_duration = str(values["last_seen_duration"])

        if "exclude" in values:
            exclude = values["exclude"] or []
            if isinstance(exclude, str):
                exclude = [exclude]
            if not isinstance(exclude, list) or not all(isinstance(item, str) for item in exclude):
                raise ConfigError(f"exclude must be a list of strings ({origin})")
            self.exclude = list(exclude)

        if "timeout" in values:
            timeout = values["timeout"]
            if timeout is not None and (isinstance(timeout, bool) or not isinstance(timeout, (int, float))):
                raise ConfigError(f"timeout must be a number of seconds ({origin})")
            self.timeout = float(timeout) if timeout is not None else None

        if "log_level" in values:
            level = str(values["log_level"]).upper()
            if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
                raise ConfigError(f"Invalid log_level {values['log_level']!r} ({origin})")
            self.log_level = level
