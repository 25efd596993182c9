"""Data models for cleanup runs."""

from __future__ import annotations

from .cleanup_config import CleanupConfig
from .cleanup_operation import CleanupOperation, DeviceAction, DeviceOutcome, OperationMode, OperationStatus
from .device import Device

__all__ = [
    "CleanupConfig",
    "CleanupOperation",
    "Device",
    "DeviceAction",
    "DeviceOutcome",
    "OperationMode",
    "OperationStatus",
]
