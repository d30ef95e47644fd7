"""What to do when a default config file had to be created."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from chorething_tray.shell import open_path

logger = logging.getLogger(__name__)

NO_CONFIG_TITLE = "No Config"
NO_CONFIG_MESSAGE = "Created default config, please edit it with your actual values"


class NoConfigNotice:
    """
    Tell the user a default config was written and show them where.

    Pass as ``on_created`` to load_config. Both steps are best effort:
    failures are logged.
    """

    def __init__(
        self,
        notify: Callable[[str, str], None],
        open_folder: Callable[[Path], None] = open_path,
    ) -> None:
        self._notify = notify
        self._open_folder = open_folder

    def __call__(self, path: Path) -> None:
        try:
            self._notify(NO_CONFIG_TITLE, NO_CONFIG_MESSAGE)
        except Exception as e:
            logger.error("Error sending notification: %s", e)
        try:
            self._open_folder(path.parent)
        except OSError as e:
            logger.error("Error opening file browser: %s", e)
