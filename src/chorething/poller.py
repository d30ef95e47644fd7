"""Polling controller: timer, auto-check state and cycle orchestration."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable

from chorething.config import Config
from chorething.errors import ChoreThingError
from chorething.evaluator import evaluate
from chorething.grocy import GrocyClient, overview_url
from chorething.models import AutoCheck, CycleOutcome, EngineState
from chorething.notify import APP_TITLE, Presenter, format_message

logger = logging.getLogger(__name__)


class Poller:
    """
    Periodically checks Grocy for overdue chores.

    The config is re-read at the start of every cycle, so edits to the
    config file take effect without a restart. A failed cycle leaves the
    last known state alone and sends no notification.

    Example:
        poller = Poller(load_config, presenter=tray)
        poller.start()              # initial check, then every N minutes
        poller.toggle_auto_check()  # pause the timer
        poller.check_now()          # manual check, timer untouched
        await poller.stop()
    """

    def __init__(
        self,
        config_loader: Callable[[], Config],
        presenter: Presenter | None = None,
        *,
        client_factory: Callable[[str, str], GrocyClient] = GrocyClient,
        clock: Callable[[], datetime] = datetime.now,
        minute: float = 60.0,
    ) -> None:
        self._load_config = config_loader
        self._presenter = presenter
        self._client_factory = client_factory
        self._clock = clock
        self._minute = minute  # Seconds per configured minute

        self._state = EngineState()
        self._auto_check = AutoCheck.DISABLED
        self._interval: float | None = None

        # At most one cycle in flight
        self._cycle_lock = asyncio.Lock()
        self._timer_task: asyncio.Task | None = None
        self._check_tasks: set[asyncio.Task] = set()

    # --- State accessors ---

    @property
    def state(self) -> EngineState:
        """Last known results, for the presentation layer."""
        return self._state

    @property
    def auto_check(self) -> AutoCheck:
        return self._auto_check

    @property
    def interval(self) -> float | None:
        """Seconds between automatic checks, None while the timer is stopped."""
        return self._interval

    async def overview_url(self) -> str:
        """Web link to the chores overview for the last seen user."""
        config = await asyncio.to_thread(self._load_config)
        return overview_url(config.grocy_url, self._state.user_id)

    # --- Cycles ---

    async def run_cycle(self) -> CycleOutcome:
        """
        Fetch, evaluate and record one cycle.

        Never raises for fetch, decode or config problems: those are logged
        and an empty outcome with ``error`` set is returned.
        """
        async with self._cycle_lock:
            try:
                config = await asyncio.to_thread(self._load_config)
            except ChoreThingError as e:
                logger.error("Error loading configuration: %s", e)
                return CycleOutcome(error=str(e))

            client = self._client_factory(config.grocy_url, config.api_key)
            try:
                chores = await client.fetch_chores()
            except ChoreThingError as e:
                logger.error("Error fetching chores: %s", e)
                return CycleOutcome(error=str(e))

            result = evaluate(chores, config.username, self._clock())

            self._state.has_overdue = result.count > 0
            self._state.user_id = result.user_id

            if result.count:
                logger.info("%d overdue chores: %s", result.count, ", ".join(result.overdue))
            else:
                logger.info("No chores are currently overdue. Great job!")

            return CycleOutcome(overdue=result.overdue, user_id=result.user_id)

    async def check(self) -> CycleOutcome:
        """Run a cycle and hand the outcome to the presenter."""
        outcome = await self.run_cycle()
        if not outcome.failed:
            self._present(outcome)
        return outcome

    def _present(self, outcome: CycleOutcome) -> None:
        if self._presenter is None:
            return

        try:
            self._presenter.set_icon(self._state.has_overdue)
        except Exception as e:
            logger.error("Error updating icon: %s", e)

        if outcome.count:
            try:
                self._presenter.notify(APP_TITLE, format_message(outcome.overdue))
            except Exception as e:
                logger.error("Error sending notification: %s", e)

    def check_now(self) -> asyncio.Task:
        """Start a check in the background. Does not touch the timer."""
        task = asyncio.create_task(self.check())
        self._check_tasks.add(task)
        task.add_done_callback(self._check_tasks.discard)
        return task

    # --- Auto-check timer ---

    def _current_interval(self) -> float | None:
        """Interval from the current config, or None if it can't be loaded."""
        try:
            config = self._load_config()
        except ChoreThingError as e:
            logger.error("Error loading configuration: %s", e)
            return None
        return config.check_timeout * self._minute

    async def _reload_interval(self) -> float | None:
        return await asyncio.to_thread(self._current_interval)

    def _arm_timer(self, interval: float) -> None:
        if self._timer_task is not None:
            self._timer_task.cancel()
        self._interval = interval
        self._timer_task = asyncio.create_task(self._run_timer())

    async def _run_timer(self) -> None:
        """Sleep for the current interval, re-read it, then start a check."""
        while self._auto_check is AutoCheck.ENABLED:
            await asyncio.sleep(self._interval)
            if self._auto_check is not AutoCheck.ENABLED:
                return

            logger.info("Automatically checking chores...")
            interval = await self._reload_interval()
            if self._auto_check is not AutoCheck.ENABLED:
                return
            if interval is not None:
                self._interval = interval
            self.check_now()

    def enable_auto_check(self) -> None:
        """Arm the timer with the interval configured right now."""
        interval = self._current_interval()
        if interval is None:
            interval = Config().check_timeout * self._minute
        self._auto_check = AutoCheck.ENABLED
        self._arm_timer(interval)
        logger.info("Automatic checking enabled (every %.0fs)", interval)

    def disable_auto_check(self) -> None:
        self._auto_check = AutoCheck.DISABLED
        if self._timer_task is not None:
            self._timer_task.cancel()
            self._timer_task = None
        self._interval = None
        logger.info("Automatic checking disabled")

    def toggle_auto_check(self) -> AutoCheck:
        """Flip auto-check and return the new state."""
        if self._auto_check is AutoCheck.ENABLED:
            self.disable_auto_check()
        else:
            self.enable_auto_check()
        return self._auto_check

    # --- Lifecycle ---

    def start(self) -> None:
        """
        Check right away and arm the timer.

        Non-blocking - both run as background asyncio tasks.
        """
        if self._auto_check is AutoCheck.ENABLED:
            return
        self.check_now()
        self.enable_auto_check()

    async def stop(self) -> None:
        """Stop the timer and wait for in-flight checks to finish."""
        self._auto_check = AutoCheck.DISABLED
        if self._timer_task is not None:
            self._timer_task.cancel()
            try:
                await self._timer_task
            except asyncio.CancelledError:
                pass
            self._timer_task = None
        self._interval = None

        if self._check_tasks:
            await asyncio.gather(*self._check_tasks, return_exceptions=True)
        self._check_tasks.clear()
