"""Allow running as ``python -m tailscale_cleanup``."""

from .cli.main import cli_main

cli_main()
