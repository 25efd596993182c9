"""Cleanup progress reporting.

Prints one line per decision as the cleaner makes it, followed by a run
summary.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Optional

from rich.console import Console
from rich.markup import escape

from ..models.cleanup_operation import CleanupOperation, OperationMode
from ..models.device import Device
from ..utils.duration import format_duration


class CleanupReporter:
    """Format and display cleanup decisions."""

    def __init__(self, console: Optional[Console] = None):
        """Initialize cleanup reporter.

        Args:
            console: Rich console instance (creates new one if not provided)
        """
        self.console = console or Console(soft_wrap=True)

    def excluded(self, device: Device, matched_exclusion: str) -> None:
        self.console.print(f"Skipping excluded device: {_label(device)}", style="yellow")

    def never_seen(self, device: Device) -> None:
        self.console.print(f"Device never seen; skipping: {_label(device)}", style="yellow")

    def disconnected(self, device: Device, elapsed: timedelta) -> None:
        self.console.print(
            f"Disconnected device found (last seen {format_duration(elapsed)} ago): {_label(device)}",
            style="bold",
        )

    def dry_run_skipped(self, device: Device) -> None:
        self.console.print("Dry run enabled; skipping deletion.", style="cyan")

    def deleted(self, device: Device) -> None:
        self.console.print(f"Deleted device: {escape(device.name)}", style="green")

    def delete_failed(self, device: Device, error: Exception) -> None:
        self.console.print(f"Failed to delete device {escape(device.name)}: {escape(str(error))}", style="red")

    def summary(self, operation: CleanupOperation) -> None:
        """Display the run summary line."""
        if operation.mode == OperationMode.DRY_RUN:
            action = f"{operation.would_delete_count} would be deleted"
        else:
            action = f"{operation.deleted_count} deleted, {operation.failed_count} failed"

        self.console.print(
            f"Processed {operation.total_devices} devices: {action}, {operation.excluded_count} excluded"
        )


def _label(device: Device) -> str:
    return f"{escape(device.name)} ({escape(device.id)})"
