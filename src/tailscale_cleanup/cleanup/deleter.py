"""Device deletion.

Wraps the API client so that a failed deletion is returned to the caller
instead of aborting the run.
"""

from __future__ import annotations

import logging
from typing import Optional

from ..api.client import TailscaleClient
from ..api.errors import TailscaleAPIError
from ..models.device import Device

logger = logging.getLogger(__name__)


class DeviceDeleter:
    """Tailscale device deletion.

    Issues exactly one DELETE request per call. Failures are not retried.
    """

    def __init__(self, client: TailscaleClient) -> None:
        """Initialize device deleter.

        Args:
            client: Shared API client
        """
        self.client = client

    def delete_device(self, device: Device) -> tuple[bool, Optional[TailscaleAPIError]]:
        """Delete a device from the tailnet.

        Args:
            device: Device to delete

        Returns:
            Tuple of (success: bool, error: Optional[TailscaleAPIError])
        """
        try:
            self.client.delete_device(device.id)
        except TailscaleAPIError as e:
            logger.warning(f"Failed to delete device {device}: {e}")
            return (False, e)

        logger.info(f"Successfully deleted device {device}")
        return (True, None)
