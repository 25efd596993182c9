"""Device cleaner for disconnected tailnet devices.

Main orchestrator for a cleanup run: list devices once, then decide and act
on each device in listing order.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from ..api.client import TailscaleClient
from ..models.cleanup_config import CleanupConfig
from ..models.cleanup_operation import CleanupOperation, DeviceAction, DeviceOutcome, OperationMode
from ..models.device import Device
from .deleter import DeviceDeleter
from .reporter import CleanupReporter
from .safety import ExclusionChecker

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class DeviceCleaner:
    """Device cleaner orchestrator.

    Coordinates device listing, exclusion checks, staleness evaluation and
    deletion. Supports both dry-run and execution modes.

    Listing failures propagate to the caller and abort the run before any
    device is evaluated. Deletion failures are reported and recorded, and
    never stop the remaining devices from being processed.

    Attributes:
        config: Cleanup configuration
        client: API client used for listing
        deleter: Device deleter
        exclusion_checker: Exclusion checker built from config.exclude
        reporter: Receives each decision as it is made
    """

    def __init__(
        self,
        config: CleanupConfig,
        client: TailscaleClient,
        reporter: Optional[CleanupReporter] = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        """Initialize device cleaner.

        Args:
            config: Cleanup configuration
            client: Shared API client
            reporter: Decision reporter (creates a console reporter if omitted)
            clock: Returns the current aware UTC time
        """
        self.config = config
        self.client = client
        self.deleter = DeviceDeleter(client)
        self.exclusion_checker = ExclusionChecker(config.exclude)
        self.reporter = reporter or CleanupReporter()
        self.clock = clock

    def run(self, dry_run: Optional[bool] = None) -> CleanupOperation:
        """Run one cleanup pass over the tailnet.

        Args:
            dry_run: Override config.dry_run (optional)

        Returns:
            CleanupOperation with one outcome per listed device

        Raises:
            TailscaleAPIError: If the device list cannot be fetched
        """
        if dry_run is None:
            dry_run = self.config.dry_run

        devices = self.client.list_devices(self.config.tailnet)
        logger.info(f"Evaluating {len(devices)} devices in tailnet {self.config.tailnet}")

        # Single reference time for the whole pass
        now = self.clock()

        operation = CleanupOperation(
            tailnet=self.config.tailnet,
            timestamp=now,
            last_seen_timeout=self.config.last_seen_timeout,
            mode=OperationMode.DRY_RUN if dry_run else OperationMode.EXECUTE,
        )

        for device in devices:
            outcome = self._process_device(device, now, dry_run)
            operation.outcomes.append(outcome)

        operation.completed_at = max(self.clock(), now)

        logger.info(
            f"Cleanup {operation.status.value}: {operation.stale_count} disconnected, "
            f"{operation.deleted_count} deleted, {operation.failed_count} failed, "
            f"{operation.excluded_count} excluded"
        )

        return operation

    def _process_device(self, device: Device, now: datetime, dry_run: bool) -> DeviceOutcome:
        """Decide and act on a single device.

        Args:
            device: Device to evaluate
            now: Reference time of the run
            dry_run: Skip the delete call

        Returns:
            Outcome for the device
        """
        # Exclusion wins over staleness
        is_protected, matched = self.exclusion_checker.is_protected(device.name)
        if is_protected:
            logger.debug(f"Device {device} matches exclusion {matched!r}")
            self.reporter.excluded(device, matched)
            return DeviceOutcome(device=device, action=DeviceAction.EXCLUDED, matched_exclusion=matched)

        if device.last_seen is None:
            self.reporter.never_seen(device)
            return DeviceOutcome(device=device, action=DeviceAction.NEVER_SEEN)

        elapsed = now - device.last_seen
        if elapsed <= self.config.last_seen_timeout:
            return DeviceOutcome(device=device, action=DeviceAction.HEALTHY, elapsed=elapsed)

        self.reporter.disconnected(device, elapsed)

        if dry_run:
            self.reporter.dry_run_skipped(device)
            return DeviceOutcome(device=device, action=DeviceAction.WOULD_DELETE, elapsed=elapsed)

        success, error = self.deleter.delete_device(device)
        if not success:
            self.reporter.delete_failed(device, error)
            return DeviceOutcome(device=device, action=DeviceAction.FAILED, elapsed=elapsed, error=str(error))

        self.reporter.deleted(device)
        return DeviceOutcome(device=device, action=DeviceAction.DELETED, elapsed=elapsed)
