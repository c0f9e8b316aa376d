"""Raw-mode lifecycle for the selection screen."""

from __future__ import annotations

import os
import termios
import tty

HIDE_CURSOR = b"\x1b[?25l"
SHOW_CURSOR = b"\x1b[?25h"


class RawTerminal:
    """Context manager: raw input and hidden cursor inside, cooked mode after.

    Restoration runs on every exit from the ``with`` block, including
    exceptions, so the shell never inherits a raw terminal.
    """

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_tty_state = None

    @property
    def active(self) -> bool:
        return self._saved_tty_state is not None

    def enable(self) -> None:
        self._saved_tty_state = termios.tcgetattr(self.stdin_fd)
        os.write(self.stdout_fd, HIDE_CURSOR)
        tty.setraw(self.stdin_fd, termios.TCSANOW)

    def restore(self) -> None:
        if self._saved_tty_state is None:
            return
        try:
            termios.tcsetattr(self.stdin_fd, termios.TCSADRAIN, self._saved_tty_state)
        finally:
            self._saved_tty_state = None
            os.write(self.stdout_fd, SHOW_CURSOR)

    def __enter__(self) -> "RawTerminal":
        try:
            self.enable()
        except BaseException:
            self.restore()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
