"""Commands passed from the tray menu thread to the asyncio loop."""

from __future__ import annotations

import asyncio
import logging
import threading
from enum import Enum

logger = logging.getLogger(__name__)


class Command(str, Enum):
    """User actions coming from the tray menu."""

    CHECK = "check"
    TOGGLE_AUTO_CHECK = "toggle_auto_check"
    OPEN_WEB = "open_web"
    SETTINGS = "settings"
    QUIT = "quit"


class CommandChannel:
    """
    Thread-safe hand-off of commands into an asyncio loop.

    post() may be called from any thread; get() is awaited on the loop.
    Commands posted after the loop has closed are dropped.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop) -> None:
        self._loop = loop
        self._ready = threading.Event()
        self._queue: asyncio.Queue[Command] | None = None

    def open(self) -> None:
        """Create the queue. Call on the loop's thread before posting."""
        self._queue = asyncio.Queue()
        self._ready.set()

    def post(self, command: Command) -> bool:
        """Queue a command. Returns False if the loop is already gone."""
        self._ready.wait()
        if self._loop.is_closed():
            logger.debug("Dropping %s, loop is closed", command.value)
            return False
        try:
            self._loop.call_soon_threadsafe(self._queue.put_nowait, command)
        except RuntimeError:
            # Closed between the check and the call
            logger.debug("Dropping %s, loop is closed", command.value)
            return False
        return True

    async def get(self) -> Command:
        return await self._queue.get()
