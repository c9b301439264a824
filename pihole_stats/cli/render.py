"""
Rendering for the CLI.

Turns snapshots and toggle results into rich console output or plain
JSON-ready dicts. No API access happens here.
"""

from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pihole_stats.api.models import GravityStatus, ServiceStatus, StatisticsSnapshot
from pihole_stats.core.logging import get_logger, log_with_source
from pihole_stats.services.reporter import Snapshot
from pihole_stats.services.status import ToggleResult

logger = get_logger(__name__)

MISSING = "-"

STATISTICS_LABELS = {
    "unique_clients": "Current unique clients",
    "clients_ever_seen": "Total clients ever seen",
    "domains_being_blocked": "Domains being blocked",
    "ads_blocked_today": "Ads blocked today",
    "ads_percentage_today": "Ads percentage today",
    "dns_queries_today": "DNS queries today",
    "queries_cached": "Queries cached today",
    "queries_forwarded": "Queries forwarded today",
    "unique_domains": "Unique domains today",
}


def format_status(status: ServiceStatus) -> str:
    if status.is_enabled:
        return "[green]Enabled[/green]"
    return "[red]Disabled[/red]"


def format_gravity(gravity: GravityStatus) -> str:
    """Describe gravity age; malformed age text degrades to 'unknown'."""
    if not gravity.file_exists or gravity.relative is None:
        return "Gravity has not been updated yet"

    try:
        days, hours, minutes = gravity.relative.as_ints()
    except ValueError:
        log_with_source(
            logger,
            "cli",
            "warning",
            "Unparseable gravity age",
            relative=gravity.relative.model_dump(),
        )
        return "Gravity last updated: unknown"
    return f"Gravity last updated: {days} days, {hours} hours, {minutes} minutes"


def statistics_table(statistics: StatisticsSnapshot) -> Table:
    table = Table(show_header=False, box=None, pad_edge=False)
    table.add_column("Statistic", style="bold")
    table.add_column("Value", justify="right")
    for field, label in STATISTICS_LABELS.items():
        value = getattr(statistics, field)
        # Values are server text, never markup
        table.add_row(label, escape(value) if value is not None else MISSING)
    return table


def render_snapshot(console: Console, snapshot: Snapshot, base_url: str) -> None:
    console.print("[bold underline red]Pi-hole Statistics[/bold underline red]")
    console.print()
    console.print(f"Pi-hole admin console: {escape(base_url)}", highlight=False)
    console.print(f"Status: {format_status(snapshot.status)}")
    console.print(format_gravity(snapshot.statistics.gravity_last_updated), highlight=False)
    console.print("[blue]---[/blue]")
    console.print(statistics_table(snapshot.statistics))
    console.print("[blue]---[/blue]")


def render_toggle(console: Console, result: ToggleResult) -> None:
    line = f"Pi-hole status: {result.current.status.value}"
    if not result.changed:
        line += f" (already {result.current.status.value})"
    console.print(line, highlight=False)


def snapshot_to_dict(snapshot: Snapshot) -> dict[str, Any]:
    return {
        "status": snapshot.status.status.value,
        "statistics": snapshot.statistics.model_dump(mode="json"),
    }


def toggle_to_dict(result: ToggleResult) -> dict[str, Any]:
    return {
        "action": result.action.value,
        "previous": result.previous.status.value,
        "status": result.current.status.value,
        "changed": result.changed,
    }
