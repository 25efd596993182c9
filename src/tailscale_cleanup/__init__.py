"""Tailscale Cleanup - remove disconnected devices from a tailnet."""

__version__ = "0.1.0"
