#!/usr/bin/env python3
"""
Overdue Report

Prints every user's overdue chores from a Grocy instance, using the
chorething client and evaluator directly instead of the poller.

Usage:
    GROCY_URL=http://localhost:8080/api GROCY_API_KEY=... python main.py
"""

import asyncio
import os
from datetime import datetime

from rich.console import Console
from rich.table import Table

import chorething


async def main():
    client = chorething.GrocyClient(
        os.environ.get("GROCY_URL", "http://localhost:8080/api"),
        os.environ["GROCY_API_KEY"],
    )

    users, chores = await asyncio.gather(client.fetch_users(), client.fetch_chores())
    now = datetime.now()

    table = Table(title="Overdue Chores")
    table.add_column("User", style="bold")
    table.add_column("Overdue", justify="right")
    table.add_column("Chores")

    for user in users:
        result = chorething.evaluate(chores, user.username, now)
        table.add_row(
            user.display_name or user.username,
            str(result.count),
            ", ".join(result.overdue) or "[dim]-[/dim]",
        )

    Console().print(table)


if __name__ == "__main__":
    asyncio.run(main())
