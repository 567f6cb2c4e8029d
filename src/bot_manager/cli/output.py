"""CLI output formatters for Rich tables and panels.

All formatting goes through these functions so the menu and the CLI
commands stay clean. Each formatter renders to a string.
"""

import json
from datetime import UTC, datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bot_manager.models.bot import BotDTO, BotStatistics

console = Console()

BAR_WIDTH = 40


def format_timestamp(epoch_seconds: int | None) -> str:
    """Format epoch seconds as a UTC date/time, or "Never" for None."""
    if epoch_seconds is None:
        return "Never"
    return datetime.fromtimestamp(epoch_seconds, tz=UTC).strftime("%Y-%m-%d %H:%M")


def format_status(is_active: bool) -> str:
    return "[green]Active[/green]" if is_active else "[red]Inactive[/red]"


def _render(renderable: object) -> str:
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


def format_bot_table(bots: list[BotDTO]) -> str:
    """Format a list of bots as a Rich table.

    Args:
        bots: Bots to display.

    Returns:
        Rendered table, or a notice when there are no bots.
    """
    if not bots:
        return "No bots found."

    table = Table(title="Bots", show_lines=True)
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="white")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Last Active")

    for bot in bots:
        table.add_row(
            bot.id,
            bot.name,
            bot.type,
            format_status(bot.is_active),
            format_timestamp(bot.last_active),
        )
    return _render(table)


def format_bot_detail(bot: BotDTO) -> str:
    """Format a single bot as a Rich panel."""
    configuration = json.dumps(bot.configuration) if bot.configuration else "{}"
    lines = [
        f"[bold]ID:[/bold]            {bot.id}",
        f"[bold]Name:[/bold]          {bot.name}",
        f"[bold]Type:[/bold]          {bot.type}",
        f"[bold]Status:[/bold]        {format_status(bot.is_active)}",
        f"[bold]Created:[/bold]       {format_timestamp(bot.created_on)}",
        f"[bold]Last Active:[/bold]   {format_timestamp(bot.last_active)}",
        f"[bold]Description:[/bold]   {bot.description or 'N/A'}",
        f"[bold]Configuration:[/bold] {configuration}",
    ]
    if bot.integrations:
        lines.append("")
        lines.append("[bold]Integrations:[/bold]")
        for integration in bot.integrations:
            state = "enabled" if integration.is_enabled else "disabled"
            lines.append(f"  {integration.type.value} ({state})")

    panel = Panel("\n".join(lines), title=f"Bot Details: {bot.name}", border_style="blue")
    return _render(panel)


def _bar(count: int, total: int) -> str:
    if total == 0 or count == 0:
        return ""
    return "█" * max(1, round(BAR_WIDTH * count / total))


def format_statistics(stats: BotStatistics) -> str:
    """Format bot statistics as bar rows followed by a per-type table."""
    overview = Table(title="Bot Statistics", show_header=False, box=None)
    overview.add_column("Label", style="bold")
    overview.add_column("Count", justify="right")
    overview.add_column("Bar")
    overview.add_row(
        "Total Bots", str(stats.total), f"[blue]{_bar(stats.total, stats.total)}[/blue]"
    )
    overview.add_row(
        "Active Bots", str(stats.active), f"[green]{_bar(stats.active, stats.total)}[/green]"
    )
    overview.add_row(
        "Inactive Bots", str(stats.inactive), f"[red]{_bar(stats.inactive, stats.total)}[/red]"
    )

    by_type = Table(title="Bots by Type")
    by_type.add_column("Type")
    by_type.add_column("Count", justify="right")
    for bot_type, count in stats.by_type.items():
        by_type.add_row(bot_type, str(count))

    return _render(overview) + _render(by_type)
