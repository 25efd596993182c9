"""Tailscale v2 REST API client.

Only the two calls needed for cleanup are implemented: listing the devices
of a tailnet and deleting a device. Pagination is not handled; only the
first page returned by the API is read.
"""

from __future__ import annotations

import logging
from typing import Optional
from urllib.parse import quote

import requests

from ..models.cleanup_config import CleanupConfig
from ..models.device import Device
from .errors import ErrorKind, TailscaleAPIError

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.tailscale.com/api/v2"


class TailscaleClient:
    """Tailscale API client.

    Authenticates with HTTP Basic auth (API key as username, empty password)
    and requests JSON responses. One session is reused for every call.

    Attributes:
        base_url: API base URL, without trailing slash
        timeout: Per-request timeout in seconds (None for no timeout)
        session: HTTP session shared by all calls
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize API client.

        Args:
            api_key: Tailscale API key
            base_url: API base URL (default: public Tailscale API)
            timeout: Per-request timeout in seconds (optional)
            session: Preconfigured session (a new one is created if omitted)
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.auth = (api_key, "")
        self.session.headers.update({"Accept": "application/json"})

    @classmethod
    def from_config(cls, config: CleanupConfig, session: Optional[requests.Session] = None) -> "TailscaleClient":
        """Create a client from a cleanup configuration."""
        return cls(
            api_key=config.api_key,
            base_url=config.base_url,
            timeout=config.timeout,
            session=session,
        )

    def list_devices(self, tailnet: str) -> list[Device]:
        """List all devices of a tailnet.

        Args:
            tailnet: Tailnet name

        Returns:
            Devices in the order returned by the API

        Raises:
            TailscaleAPIError: On transport failure, non-200 status or an
                undecodable response body
        """
        url = f"{self.base_url}/tailnet/{quote(tailnet, safe='@')}/devices"
        response = self._request("GET", url)

        try:
            payload = response.json()
        except ValueError as e:
            raise TailscaleAPIError(ErrorKind.DECODE, "failed to decode response", url=url) from e

        if not isinstance(payload, dict) or not isinstance(payload.get("devices"), list):
            raise TailscaleAPIError(
                ErrorKind.DECODE,
                "failed to decode response: expected an object with a 'devices' list",
                url=url,
            )

        try:
            devices = [Device.from_api(entry) for entry in payload["devices"]]
        except ValueError as e:
            raise TailscaleAPIError(ErrorKind.DECODE, "failed to decode response", url=url) from e

        logger.debug(f"Listed {len(devices)} devices in tailnet {tailnet}")
        return devices

    def delete_device(self, device_id: str) -> None:
        """Delete a device.

        Args:
            device_id: Device identifier

        Raises:
            TailscaleAPIError: On transport failure or non-200 status
        """
        url = f"{self.base_url}/device/{quote(device_id, safe='')}"
        self._request("DELETE", url)
        logger.debug(f"Deleted device {device_id}")

    def close(self) -> None:
        """Close the underlying session."""
        self.session.close()

    def __enter__(self) -> "TailscaleClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _request(self, method: str, url: str) -> requests.Response:
        """Send a single request and check for HTTP 200.

        Args:
            method: HTTP method
            url: Full request URL

        Returns:
            Response with status 200

        Raises:
            TailscaleAPIError: On transport failure or non-200 status
        """
        logger.debug(f"{method} {url}")

        try:
            response = self.session.request(method, url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TailscaleAPIError(ErrorKind.TRANSPORT, "failed to execute request", url=url) from e

        if response.status_code != 200:
            raise TailscaleAPIError(
                ErrorKind.STATUS,
                "unexpected status",
                url=url,
                status_code=response.status_code,
                body=response.text,
            )

        return response
