"""
pihole-stats command.

Usage:
    pihole-stats                 # statistics summary
    pihole-stats enable          # or: e
    pihole-stats disable         # or: d
    pihole-stats --json
    pihole-stats --debug
"""

import asyncio
import json
from typing import Any

import click
import structlog
from rich.console import Console
from rich.markup import escape

from pihole_stats import __version__
from pihole_stats.api.client import APIClient
from pihole_stats.api.models import ServiceState
from pihole_stats.cli.render import (
    render_snapshot,
    render_toggle,
    snapshot_to_dict,
    toggle_to_dict,
)
from pihole_stats.core.config import PiholeConfig, load_pihole_config
from pihole_stats.core.exceptions import PiholeStatsError
from pihole_stats.core.logging import get_logger, setup_logging
from pihole_stats.services.reporter import ContentReporter, Snapshot
from pihole_stats.services.status import StatusController

logger = get_logger(__name__)

# "e" and "d" are the short forms accepted by earlier releases
ACTIONS: dict[str, ServiceState | None] = {
    "summary": None,
    "enable": ServiceState.ENABLED,
    "e": ServiceState.ENABLED,
    "disable": ServiceState.DISABLED,
    "d": ServiceState.DISABLED,
}


async def run_action(
    config: PiholeConfig,
    target: ServiceState | None,
) -> Any:
    """Run one action against Pi-hole and return its structured result."""
    async with APIClient(config) as client:
        if target is None:
            return await ContentReporter(client).get_snapshot()
        return await StatusController(client).toggle(target)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "action",
    required=False,
    default="summary",
    type=click.Choice(list(ACTIONS)),
)
@click.option("--url", default=None, help="Pi-hole admin URL (default: $PIHOLE_URL).")
@click.option("--auth", default=None, help="Pi-hole API token (default: $PIHOLE_AUTH).")
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a report.")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output (INFO level logging).")
@click.option("--debug", "-d", is_flag=True, help="Enable debug output (DEBUG level logging).")
@click.version_option(__version__, prog_name="pihole-stats")
def main(
    action: str,
    url: str | None,
    auth: str | None,
    as_json: bool,
    verbose: bool,
    debug: bool,
) -> None:
    """
    Pi-hole statistics for the command line.

    ACTION is one of summary (default), enable (e) or disable (d).
    """
    if debug:
        setup_logging(level="DEBUG")
    elif verbose:
        setup_logging(level="INFO")
    else:
        setup_logging(level="WARNING")

    structlog.contextvars.bind_contextvars(source="cli")

    config = load_pihole_config(url=url, auth=auth)
    if not config.base_url:
        raise click.UsageError("No Pi-hole URL configured. Set PIHOLE_URL or pass --url.")

    target = ACTIONS[action]
    logger.debug("Running action", action=action)

    console = Console()
    err_console = Console(stderr=True)

    try:
        result = asyncio.run(run_action(config, target))
    except PiholeStatsError as e:
        logger.debug("Action failed", action=action, code=e.code)
        err_console.print(f"[red]Error {escape(f'[{e.code}]')}:[/red] {escape(e.message)}")
        raise SystemExit(1)

    if isinstance(result, Snapshot):
        if as_json:
            click.echo(json.dumps(snapshot_to_dict(result), indent=2))
        else:
            render_snapshot(console, result, config.base_url)
    else:
        if as_json:
            click.echo(json.dumps(toggle_to_dict(result), indent=2))
        else:
            render_toggle(console, result)


if __name__ == "__main__":
    main()
