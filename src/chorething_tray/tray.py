"""System tray front end.

pystray owns the main thread. The poller and a command dispatcher run on an
asyncio loop in a background thread; menu clicks are posted to that loop as
commands.
"""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from pathlib import Path

import pystray

from chorething.config import load_config
from chorething.errors import ChoreThingError
from chorething.models import AutoCheck
from chorething.notify import APP_TITLE, DesktopNotifier
from chorething.poller import Poller
from chorething_tray.commands import Command, CommandChannel
from chorething_tray.first_run import NoConfigNotice
from chorething_tray.icons import make_icon
from chorething_tray.shell import open_path, open_url

logger = logging.getLogger(__name__)


class TrayApp:
    """
    Tray icon with the chore menu.

    Implements the presenter interface: the poller calls set_icon() and
    notify() from the asyncio thread.

    Usage:
        TrayApp(config_path).run()  # blocks until Quit
    """

    def __init__(self, config_path: Path, notifier: DesktopNotifier | None = None):
        self.config_path = config_path
        self.notifier = notifier or DesktopNotifier()

        self._normal_icon = make_icon(False)
        self._warning_icon = make_icon(True)

        self._loop = asyncio.new_event_loop()
        self._commands = CommandChannel(self._loop)
        self._poller: Poller | None = None

        self._icon = pystray.Icon(
            "chore_thing",
            self._normal_icon,
            f"{APP_TITLE} - Track your chores",
            menu=self._build_menu(),
        )

    # --- Presenter ---

    def set_icon(self, warning: bool) -> None:
        self._icon.icon = self._warning_icon if warning else self._normal_icon

    def notify(self, title: str, message: str) -> None:
        self.notifier.notify(title, message)

    # --- Menu ---

    def _build_menu(self) -> pystray.Menu:
        return pystray.Menu(
            pystray.MenuItem("Check Chores", self._poster(Command.CHECK)),
            pystray.MenuItem(self._auto_check_title, self._poster(Command.TOGGLE_AUTO_CHECK)),
            pystray.MenuItem("Open Web Overview", self._poster(Command.OPEN_WEB)),
            pystray.MenuItem("Settings", self._poster(Command.SETTINGS)),
            pystray.Menu.SEPARATOR,
            pystray.MenuItem("Quit", self._poster(Command.QUIT)),
        )

    def _auto_check_title(self, item) -> str:
        enabled = self._poller is None or self._poller.auto_check is AutoCheck.ENABLED
        return f"Auto Check: {'ON' if enabled else 'OFF'}"

    def _poster(self, command: Command):
        def on_click(icon, item):
            self._commands.post(command)
        return on_click

    # --- Lifecycle ---

    def run(self) -> None:
        """Start the poller thread and block in the tray loop until Quit."""
        thread = threading.Thread(target=self._run_loop, name="chorething-loop", daemon=True)
        thread.start()
        self._icon.run()
        thread.join(timeout=5)

    def _run_loop(self) -> None:
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._main())
        finally:
            self._loop.close()

    async def _main(self) -> None:
        self._commands.open()
        loader = functools.partial(load_config, self.config_path, on_created=NoConfigNotice(self.notify))
        self._poller = Poller(loader, presenter=self)
        self._poller.start()

        while True:
            command = await self._commands.get()
            if command is Command.QUIT:
                logger.info("Quit requested")
                break
            await self._dispatch(command)

        await self._poller.stop()
        self._icon.stop()

    async def _dispatch(self, command: Command) -> None:
        if command is Command.CHECK:
            logger.info("Manually checking chores...")
            self._poller.check_now()

        elif command is Command.TOGGLE_AUTO_CHECK:
            self._poller.toggle_auto_check()
            self._icon.update_menu()

        elif command is Command.OPEN_WEB:
            try:
                url = await self._poller.overview_url()
            except ChoreThingError as e:
                logger.error("Error loading configuration: %s", e)
                return
            logger.info("Opening Grocy web interface: %s", url)
            try:
                open_url(url)
            except OSError as e:
                logger.error("Error opening browser: %s", e)

        elif command is Command.SETTINGS:
            try:
                open_path(self.config_path)
            except OSError as e:
                logger.error("Error opening file browser: %s", e)
