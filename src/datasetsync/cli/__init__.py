"""Command-line interface for datasetsync.

Commands:
- configure: Save the API server URL and token
- sync-metadata: Restore or sync a dataset's metadata once
- status: Show a dataset's metadata status
"""

from __future__ import annotations

import logging

import click

from datasetsync.cli.config import (
    API_URL_KEY,
    KUBECTL_KEY,
    TOKEN_KEY,
    ConfigError,
    get_config_dir,
    get_config_file,
    load_config,
    save_config,
)
from datasetsync.cli.metadata import status, sync_metadata

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class ClickEchoHandler(logging.Handler):
    """Logging handler writing records to stderr through click.

    The stream is looked up on every record, so output follows whatever
    stderr click is currently bound to.
    """

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False) -> None:
    """Configure the datasetsync logger to output to stderr.

    Args:
        verbose: Log debug messages too.
    """
    root_logger = logging.getLogger("datasetsync")
    root_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = ClickEchoHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(handler)


@click.group()
@click.version_option(package_name="datasetsync")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """datasetsync - Keep Dataset status in sync with cache metadata."""
    setup_logging(verbose)


@cli.command()
@click.option("--api-url", required=True, help="Base URL of the API server.")
@click.option("--token", required=True, help="Bearer token for the API server.")
@click.option("--kubectl", default="kubectl", show_default=True, help="kubectl binary.")
def configure(api_url: str, token: str, kubectl: str) -> None:
    """Save the API server connection settings."""
    try:
        config = load_config()
    except ConfigError as e:
        click.echo(f"Warning: {e}, overwriting it", err=True)
        config = {}
    config.update({API_URL_KEY: api_url, TOKEN_KEY: token, KUBECTL_KEY: kubectl})
    save_config(config)
    click.echo(f"Configuration saved to {get_config_file()}")


cli.add_command(sync_metadata)
cli.add_command(status)


def main() -> None:
    """Main entry point."""
    cli()


__all__ = [
    "cli",
    "configure",
    "get_config_dir",
    "get_config_file",
    "load_config",
    "main",
    "save_config",
    "setup_logging",
    "status",
    "sync_metadata",
]
