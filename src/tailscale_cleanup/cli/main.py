"""Main CLI entry point using Typer."""

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from .. import __version__
from ..api.client import TailscaleClient
from ..api.errors import TailscaleAPIError
from ..cleanup.cleaner import DeviceCleaner
from ..cleanup.reporter import CleanupReporter
from ..models.cleanup_config import CleanupConfig
from ..utils.duration import parse_duration
from ..utils.logging import setup_logging
from .config import Config, ConfigError

logger = logging.getLogger(__name__)

# Create Typer app
app = typer.Typer(
    name="tailscale-cleanup",
    help="A utility to clean up disconnected Tailscale devices.",
    add_completion=False,
)

# Status lines go to stdout, errors to stderr
console = Console(soft_wrap=True)
error_console = Console(stderr=True, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Show version information and exit."""
    if value:
        console.print(f"tailscale-cleanup version {__version__}")
        raise typer.Exit()


@app.command()
def cleanup(
    api_key: str = typer.Option(
        ...,
        "--api-key",
        envvar="TAILSCALE_API_KEY",
        help="Tailscale API key",
        show_default=False,
    ),
    tailnet: str = typer.Option(
        ...,
        "--tailnet",
        envvar="TAILNET_NAME",
        help="Tailscale tailnet name",
        show_default=False,
    ),
    base_url: Optional[str] = typer.Option(
        None,
        "--base-url",
        help="Tailscale API base URL (default: https://api.tailscale.com/api/v2 or $TAILSCALE_BASE_URL)",
    ),
    last_seen_duration: Optional[str] = typer.Option(
        None,
        "--last-seen-duration",
        help="Duration to consider a device disconnected (e.g., 15m, 1h) [default: 15m]",
    ),
    exclude: Optional[List[str]] = typer.Option(
        None,
        "--exclude",
        "-e",
        help="Device names to exclude by partial match (can be specified multiple times)",
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Run without making destructive changes"),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Per-request timeout in seconds"),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML config file (default: $TAILSCALE_CLEANUP_CONFIG or ~/.tailscale-cleanup/config.yaml)",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress log output except errors"),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
):
    """Delete tailnet devices that have not been seen within the last-seen duration."""
    try:
        config = Config.load(config_path)
    except ConfigError as e:
        error_console.print(f"✗ Error: {escape(str(e))}", style="bold red")
        raise typer.Exit(code=2)

    # Setup logging
    log_level = "ERROR" if quiet else ("DEBUG" if verbose else config.log_level)
    setup_logging(level=log_level, verbose=verbose)

    duration_text = last_seen_duration or config.last_seen_duration
    try:
        last_seen_timeout = parse_duration(duration_text)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="'--last-seen-duration'")

    try:
        cleanup_config = CleanupConfig(
            api_key=api_key,
            base_url=base_url or config.base_url,
            tailnet=tailnet,
            last_seen_timeout=last_seen_timeout,
            exclude=tuple(config.exclude) + tuple(exclude or ()),
            dry_run=dry_run,
            timeout=timeout if timeout is not None else config.timeout,
        )
        cleanup_config.validate()
    except ValueError as e:
        error_console.print(f"✗ Error: {escape(str(e))}", style="bold red")
        raise typer.Exit(code=2)

    logger.debug(f"Running with {cleanup_config!r}")

    reporter = CleanupReporter(console)

    with TailscaleClient.from_config(cleanup_config) as client:
        cleaner = DeviceCleaner(cleanup_config, client, reporter=reporter)
        try:
            operation = cleaner.run()
        except TailscaleAPIError as e:
            error_console.print(f"Error: failed to list devices: {escape(str(e))}", style="bold red")
            raise typer.Exit(code=1)

    reporter.summary(operation)


def cli_main() -> None:
    """Console script entry point."""
    app()


if __name__ == "__main__":
    cli_main()
