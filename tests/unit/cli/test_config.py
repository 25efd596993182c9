"""Tests for CLI configuration loading."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

import pytest

from tailscale_cleanup.api.client import DEFAULT_BASE_URL
from tailscale_cleanup.cli.config import CONFIG_ENV_VAR, Config, ConfigError


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    """Keep the user's config file and environment out of the tests."""
    for name in (CONFIG_ENV_VAR, "TAILSCALE_BASE_URL", "TAILSCALE_CLEANUP_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    with patch("tailscale_cleanup.cli.config.DEFAULT_CONFIG_PATH", tmp_path / "missing" / "config.yaml"):
        yield


def _write(path: Path, content: str) -> Path:
    path.write_text(content)
    return path


class TestConfigLoad:
    """Test suite for Config.load."""

    def test_defaults_without_file(self) -> None:
        """Test built-in defaults when no file exists."""
        config = Config.load()

        assert config.base_url == DEFAULT_BASE_URL
        assert config.last_seen_duration == "15m"
        assert config.exclude == []
        assert config.timeout is None
        assert config.log_level == "WARNING"
        assert config.source is None

    def test_load_explicit_file(self, tmp_path: Path) -> None:
        """Test values from an explicit YAML file."""
        path = _write(
            tmp_path / "config.yaml",
            "base_url: https://ts.example.test/api/v2\n"
            "last_seen_duration: 1h\n"
            "exclude:\n"
            "  - build-server\n"
            "  - router\n"
            "timeout: 30\n"
            "log_level: info\n",
        )

        config = Config.load(path)

        assert config.base_url == "https://ts.example.test/api/v2"
        assert config.last_seen_duration == "1h"
        assert config.exclude == ["build-server", "router"]
        assert config.timeout == 30.0
        assert config.log_level == "INFO"
        assert config.source == path

    def test_single_exclusion_string(self, tmp_path: Path) -> None:
        """Test a scalar exclude value becomes a one-item list."""
        config = Config.load(_write(tmp_path / "config.yaml", "exclude: build-server\n"))

        assert config.exclude == ["build-server"]

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test an empty file keeps the defaults."""
        config = Config.load(_write(tmp_path / "config.yaml", ""))

        assert config.base_url == DEFAULT_BASE_URL

    def test_file_from_environment(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test $TAILSCALE_CLEANUP_CONFIG selects the file."""
        path = _write(tmp_path / "env.yaml", "last_seen_duration: 2h\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

        assert Config.load().last_seen_duration == "2h"

    def test_default_location_used_when_present(self, tmp_path: Path) -> None:
        """Test the default config path is read if it exists."""
        path = _write(tmp_path / "default.yaml", "exclude: [db]\n")

        with patch("tailscale_cleanup.cli.config.DEFAULT_CONFIG_PATH", path):
            config = Config.load()

        assert config.exclude == ["db"]

    def test_environment_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test environment variables take precedence over the file."""
        path = _write(tmp_path / "config.yaml", "base_url: https://file.test\nlog_level: INFO\n")
        monkeypatch.setenv("TAILSCALE_BASE_URL", "https://env.test")
        monkeypatch.setenv("TAILSCALE_CLEANUP_LOG_LEVEL", "debug")

        config = Config.load(path)

        assert config.base_url == "https://env.test"
        assert config.log_level == "DEBUG"

    def test_missing_explicit_file(self, tmp_path: Path) -> None:
        """Test an explicit path must exist."""
        with pytest.raises(ConfigError, match="not found"):
            Config.load(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "content, message",
        [
            ("- a\n- b\n", "mapping"),
            ("api_key: secret\n", "Unknown keys"),
            ("exclude: {a: b}\n", "exclude"),
            ("timeout: soon\n", "timeout"),
            ("log_level: loud\n", "log_level"),
            ("base_url: [1]\n", "base_url"),
            ("base_url: [unclosed\n", "Cannot read"),
        ],
    )
    def test_invalid_files(self, tmp_path: Path, content: str, message: str) -> None:
        """Test malformed files raise ConfigError."""
        path = _write(tmp_path / "config.yaml", content)

        with pytest.raises(ConfigError, match=message):
            Config.load(path)
