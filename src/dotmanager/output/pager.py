"""Pipe styled text into an external pager."""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from rich.console import Console
from rich.text import Text

logger = logging.getLogger(__name__)


class PagerError(Exception):
    """Raised when the pager cannot be started or fails."""


def render_ansi(text: Text) -> str:
    """Render *text* to a string with ANSI colour codes."""
    console = Console(force_terminal=True, color_system="standard", width=10_000, soft_wrap=True)
    with console.capture() as capture:
        console.print(text, end="")
    return capture.get()


def page(text: Text, command: Sequence[str]) -> None:
    """Send *text* to the pager's stdin and block until it exits."""
    content = render_ansi(text)
    if not content.endswith("\n"):
        content += "\n"
    logger.debug("paging %d bytes through %s", len(content), list(command))
    try:
        result = subprocess.run(list(command), input=content, text=True)
    except FileNotFoundError as exc:
        raise PagerError(f"pager not found: {command[0]}") from exc
    if result.returncode != 0:
        raise PagerError(f"{command[0]} exited with status {result.returncode}")
