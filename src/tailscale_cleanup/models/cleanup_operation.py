"""Cleanup operation model.

Represents one cleanup run and the decision taken for every listed device.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Optional

from .device import Device


class OperationMode(Enum):
    """Operation execution mode."""

    DRY_RUN = "dry-run"
    EXECUTE = "execute"


class OperationStatus(Enum):
    """Final status of a cleanup run."""

    COMPLETED = "completed"
    PARTIAL = "partial"
    FAILED = "failed"


class DeviceAction(Enum):
    """Decision taken for a single device."""

    EXCLUDED = "excluded"
    HEALTHY = "healthy"
    NEVER_SEEN = "never_seen"
    DELETED = "deleted"
    WOULD_DELETE = "would_delete"
    FAILED = "failed"


@dataclass
class DeviceOutcome:
    """Decision record for one device.

    Validation rules:
        - action=excluded: requires matched_exclusion
        - action=failed: requires error
        - actions deleted, would_delete and failed: require elapsed

    Attributes:
        device: Device the decision applies to
        action: Decision taken
        elapsed: Time since the device was last seen (None if not evaluated)
        matched_exclusion: Exclusion entry that protected the device (optional)
        error: Deletion error message if failed (optional)
    """

    device: Device
    action: DeviceAction
    elapsed: Optional[timedelta] = None
    matched_exclusion: Optional[str] = None
    error: Optional[str] = None

    def validate(self) -> bool:
        """Validate outcome invariants.

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        if self.action == DeviceAction.EXCLUDED and not self.matched_exclusion:
            raise ValueError("Excluded action requires matched_exclusion")
        if self.action == DeviceAction.FAILED and not self.error:
            raise ValueError("Failed action requires error")
        if self.action in (DeviceAction.DELETED, DeviceAction.WOULD_DELETE, DeviceAction.FAILED):
            if self.elapsed is None:
                raise ValueError(f"{self.action.value} action requires elapsed time")

        return True


@dataclass
class CleanupOperation:
    """Cleanup run entity.

    Attributes:
        tailnet: Tailnet the run operated on
        timestamp: Reference "now" used for every staleness check (UTC)
        last_seen_timeout: Staleness threshold applied
        mode: dry-run or execute
        outcomes: Per-device decisions in listing order
        completed_at: When the run finished (optional)
    """

    tailnet: str
    timestamp: datetime
    last_seen_timeout: timedelta
    mode: OperationMode
    outcomes: list[DeviceOutcome] = field(default_factory=list)
    completed_at: Optional[datetime] = None

    def count(self, action: DeviceAction) -> int:
        """Number of devices with the given decision."""
        return sum(1 for outcome in self.outcomes if outcome.action == action)

    @property
    def total_devices(self) -> int:
        return len(self.outcomes)

    @property
    def deleted_count(self) -> int:
        return self.count(DeviceAction.DELETED)

    @property
    def would_delete_count(self) -> int:
        return self.count(DeviceAction.WOULD_DELETE)

    @property
    def failed_count(self) -> int:
        return self.count(DeviceAction.FAILED)

    @property
    def excluded_count(self) -> int:
        return self.count(DeviceAction.EXCLUDED)

    @property
    def stale_count(self) -> int:
        """Devices found disconnected, whatever happened to them afterwards."""
        return self.deleted_count + self.would_delete_count + self.failed_count

    @property
    def status(self) -> OperationStatus:
        """Derive final status from deletion results.

        A run with failures is partial when at least one deletion succeeded,
        failed when none did. Per-device failures never abort the run.
        """
        if self.failed_count == 0:
            return OperationStatus.COMPLETED
        if self.deleted_count > 0:
            return OperationStatus.PARTIAL
        return OperationStatus.FAILED

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.timestamp).total_seconds()

    def validate(self) -> bool:
        """Validate operation invariants.

        Validation rules:
            - every device appears at most once
            - dry-run mode never records deletions or failures
            - completed_at must not be before timestamp

        Returns:
            True if validation passes

        Raises:
            ValueError: If any validation rule fails
        """
        device_ids = [outcome.device.id for outcome in self.outcomes]
        if len(device_ids) != len(set(device_ids)):
            raise ValueError("Device evaluated more than once")

        if self.mode == OperationMode.DRY_RUN and (self.deleted_count or self.failed_count):
            raise ValueError("Dry-run mode cannot delete devices")

        if self.completed_at and self.completed_at < self.timestamp:
            raise ValueError("Completion time before start time")

        for outcome in self.outcomes:
            outcome.validate()

        return True
