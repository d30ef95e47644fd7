#!/usr/bin/env python3
"""
chore-thing: Get nagged about overdue Grocy chores.

Usage:
    chore-thing                  # tray icon
    chore-thing --no-tray        # headless, prints to the console
    chore-thing --once           # single check, then exit
    chore-thing --list-users
"""

from __future__ import annotations

import argparse
import asyncio
import functools
import logging
import signal
import sys
from pathlib import Path
from typing import Callable

from rich.console import Console

from chorething.config import Config, default_config_path, load_config
from chorething.errors import ChoreThingError
from chorething.grocy import GrocyClient
from chorething.notify import DesktopNotifier
from chorething.poller import Poller
from chorething_tray.display import ConsolePresenter, print_outcome, print_users
from chorething_tray.first_run import NoConfigNotice
from chorething_tray.shell import open_path


def configure_logging(verbose: bool = False) -> None:
    """Send chorething logs to stderr."""
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    for name in ("chorething", "chorething_tray"):
        lib_logger = logging.getLogger(name)
        lib_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
        lib_logger.addHandler(handler)


def config_loader(config_path: Path, presenter: ConsolePresenter) -> Callable[[], Config]:
    """Loader that announces a freshly created default config."""
    notice = NoConfigNotice(presenter.notify, open_folder=open_path)
    return functools.partial(load_config, config_path, on_created=notice)


def console_presenter(console: Console | None = None, notify: bool = True) -> ConsolePresenter:
    return ConsolePresenter(console, notifier=DesktopNotifier() if notify else None)


async def run_once(config_path: Path, console: Console | None = None, notify: bool = True) -> int:
    """Run a single cycle and print the outcome. Returns an exit code."""
    presenter = console_presenter(console, notify)
    poller = Poller(config_loader(config_path, presenter))
    outcome = await poller.run_cycle()
    print_outcome(outcome, console)
    return 1 if outcome.failed else 0


async def list_users(config_path: Path, console: Console | None = None, notify: bool = True) -> int:
    """Print the users known to Grocy. Returns an exit code."""
    load = config_loader(config_path, console_presenter(console, notify))
    try:
        config = await asyncio.to_thread(load)
        users = await GrocyClient(config.grocy_url, config.api_key).fetch_users()
    except ChoreThingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print_users(users, console)
    return 0


async def run_headless(config_path: Path, notify: bool = True) -> None:
    """Poll until SIGINT/SIGTERM, printing each outcome."""
    loop = asyncio.get_running_loop()
    stop_event = asyncio.Event()

    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    presenter = console_presenter(notify=notify)
    poller = Poller(config_loader(config_path, presenter), presenter=presenter)

    poller.start()
    try:
        await stop_event.wait()
    finally:
        await poller.stop()


def main():
    parser = argparse.ArgumentParser(
        description="chore-thing - desktop reminders for overdue Grocy chores",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  chore-thing
  chore-thing --no-tray --no-notify
  chore-thing --once --config ./config.json
  chore-thing --list-users
        """,
    )

    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Config file (default: {default_config_path()})",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Check once, print the result and exit",
    )
    parser.add_argument(
        "--no-tray",
        action="store_true",
        help="Run without a tray icon, printing results to the console",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="In console modes, don't send desktop notifications",
    )
    parser.add_argument(
        "--list-users",
        action="store_true",
        help="List Grocy users and exit",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Debug logging",
    )

    args = parser.parse_args()

    configure_logging(verbose=args.verbose)
    config_path = args.config or default_config_path()

    if args.list_users:
        sys.exit(asyncio.run(list_users(config_path, notify=not args.no_notify)))

    if args.once:
        sys.exit(asyncio.run(run_once(config_path, notify=not args.no_notify)))

    if args.no_tray:
        try:
            asyncio.run(run_headless(config_path, notify=not args.no_notify))
        except KeyboardInterrupt:
            pass
        print("\nExiting...")
        return

    # Imported here so console modes work without a display server
    from chorething_tray.tray import TrayApp

    TrayApp(config_path).run()
    print("Exiting...")


if __name__ == "__main__":
    main()
