"""Rich-based console output for chorething.

Renders cycle outcomes and user lists. ConsolePresenter stands in for the
tray icon when running headless.
"""

from __future__ import annotations

import logging
from datetime import datetime

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from chorething.models import CycleOutcome, User
from chorething.notify import DesktopNotifier

logger = logging.getLogger(__name__)


def outcome_table(outcome: CycleOutcome) -> Table:
    """Build a table summarising one cycle."""
    table = Table(title="Chore Check", show_header=False, border_style="green")
    table.add_column("Metric", style="dim")
    table.add_column("Value", style="bold")

    if outcome.failed:
        table.border_style = "red"
        table.add_row("Status", "[red]failed[/red]")
        table.add_row("Error", outcome.error)
        return table

    table.add_row("Status", "[red]overdue[/red]" if outcome.count else "[green]all done[/green]")
    table.add_row("Overdue", str(outcome.count))
    for name in outcome.overdue:
        table.add_row("", f"- {name}")
    return table


def print_outcome(outcome: CycleOutcome, console: Console | None = None) -> None:
    """Print the outcome of a cycle."""
    console = console or Console()
    console.print()
    console.print(outcome_table(outcome))


def print_users(users: list[User], console: Console | None = None) -> None:
    """Print Grocy users as a table."""
    console = console or Console()

    table = Table(title="Grocy Users", border_style="cyan")
    table.add_column("ID", justify="right")
    table.add_column("Username", style="bold")
    table.add_column("Display Name")
    table.add_column("Created", style="dim")

    for user in users:
        table.add_row(str(user.id), user.username, user.display_name, user.row_created_timestamp)

    if not users:
        table.add_row("", "[dim]No users[/dim]", "", "")

    console.print(table)


class ConsolePresenter:
    """Prints status changes and notifications to the console.

    Optionally forwards notifications to the desktop as well.
    """

    def __init__(self, console: Console | None = None, notifier: DesktopNotifier | None = None):
        self.console = console or Console()
        self.notifier = notifier
        self.warning = False

    def set_icon(self, warning: bool) -> None:
        self.warning = warning
        ts = datetime.now().strftime("%H:%M:%S")
        status = "[bold red]● overdue[/bold red]" if warning else "[bold green]● ok[/bold green]"
        self.console.print(f"[dim]{ts}[/dim] {status}")

    def notify(self, title: str, message: str) -> None:
        self.console.print(Panel(message, title=f"[bold]{title}[/bold]", border_style="yellow"))
        if self.notifier is not None:
            try:
                self.notifier.notify(title, message)
            except Exception as e:
                logger.error("Error sending notification: %s", e)
