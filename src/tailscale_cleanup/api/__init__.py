"""Tailscale API access.

Classes:
    TailscaleClient: Lists and deletes tailnet devices over the v2 REST API
    TailscaleAPIError: Tagged error raised by client calls
    ErrorKind: Failure category carried by TailscaleAPIError
"""

from __future__ import annotations

from .client import DEFAULT_BASE_URL, TailscaleClient
from .errors import ErrorKind, TailscaleAPIError

__all__ = [
    "DEFAULT_BASE_URL",
    "TailscaleClient",
    "TailscaleAPIError",
    "ErrorKind",
]
