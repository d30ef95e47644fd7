"""Opening URLs and folders with the desktop's default handlers."""

from __future__ import annotations

import subprocess
import sys
import webbrowser
from pathlib import Path


def open_url(url: str) -> None:
    """Open a URL in the default browser."""
    if not webbrowser.open(url):
        raise OSError(f"no browser available to open {url}")


def file_browser_command(path: Path | str, platform: str = sys.platform) -> list[str]:
    """Command that shows ``path`` in the platform's file browser."""
    if platform.startswith("win"):
        return ["explorer", str(path)]
    if platform == "darwin":
        return ["open", str(path)]
    if platform.startswith("linux") or "bsd" in platform:
        return ["xdg-open", str(path)]
    raise OSError(f"unsupported platform: {platform}")


def open_path(path: Path | str) -> None:
    """Show a file or folder in the file browser without waiting for it."""
    subprocess.Popen(file_browser_command(path))
