"""Disconnected device cleanup.

This module decides which tailnet devices are stale and removes them,
honoring exclusion entries and dry-run mode.

Classes:
    DeviceCleaner: Main orchestrator for cleanup runs
    DeviceDeleter: Per-device deletion with isolated failures
    ExclusionChecker: Exclusion entry evaluation
    CleanupReporter: Line-oriented decision output
"""

from __future__ import annotations

from .cleaner import DeviceCleaner
from .deleter import DeviceDeleter
from .reporter import CleanupReporter
from .safety import ExclusionChecker

__all__ = [
    "DeviceCleaner",
    "DeviceDeleter",
    "ExclusionChecker",
    "CleanupReporter",
]
