"""Keyboard selection over a printed status table.

The table is already on screen when the navigator starts, with the cursor
on the line just below its bottom border. Selecting a row only rewrites
that row's path cell and the marker after the table; nothing is reprinted.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import Callable, ContextManager, Optional, Sequence, TextIO

from dotmanager.git.models import StatusEntry
from dotmanager.interactive import keys
from dotmanager.output.terminal import STATUS_HEADERS, status_rows

NEXT_KEYS = frozenset({keys.TAB, keys.DOWN})
PREVIOUS_KEYS = frozenset({keys.BACKTAB, keys.UP})
CONFIRM_KEYS = frozenset({keys.ENTER})

MARKER = "❮"

_CYAN = "\x1b[36m"
_GREEN = "\x1b[32m"
_DIM = "\x1b[2m"
_RESET = "\x1b[0m"


@dataclass
class NavigatorState:
    entries: Sequence[StatusEntry]
    selected_index: int = 0

    @property
    def selected(self) -> StatusEntry:
        return self.entries[self.selected_index]

    def move(self, step: int) -> None:
        self.selected_index = (self.selected_index + step) % len(self.entries)


class RowPainter:
    """Highlight or clear one row of the status table in place."""

    def __init__(self, entries: Sequence[StatusEntry], stream: TextIO) -> None:
        rows = status_rows(entries)
        self._paths = [path for _, path in rows]
        self._kind_width = max([len(STATUS_HEADERS[0])] + [len(label) for label, _ in rows])
        self._path_width = max([len(STATUS_HEADERS[1])] + [len(p) for p in self._paths])
        self._stream = stream

    def paint(self, index: int, selected: bool) -> None:
        path = self._paths[index]
        lines_up = len(self._paths) - index + 1
        # "│ <kind> │ <path>": the path cell starts 6 columns past the kind text
        column = self._kind_width + 6
        gap = self._path_width - len(path) + 3

        cell = f"{_DIM}/{_RESET}{path[1:]}"
        if selected:
            cell = f"{_CYAN}{path}{_RESET}"
        marker = f"{_GREEN}{MARKER}{_RESET}" if selected else " "

        self._stream.write(
            f"\x1b7\x1b[{lines_up}F\x1b[{column}G{cell}\x1b[{gap}C{marker}\x1b8"
        )
        self._stream.flush()


class Navigator:
    """Cycle through status entries until a non-navigation key is pressed.

    *on_confirm* runs synchronously on Enter; the loop resumes on the same
    row once it returns.
    """

    def __init__(
        self,
        entries: Sequence[StatusEntry],
        *,
        read_key: Callable[[], str],
        on_confirm: Callable[[StatusEntry], None],
        painter: RowPainter,
        terminal: Optional[ContextManager] = None,
    ) -> None:
        self.state = NavigatorState(entries=entries)
        self._read_key = read_key
        self._on_confirm = on_confirm
        self._painter = painter
        self._terminal = terminal if terminal is not None else contextlib.nullcontext()

    def _step(self, step: int) -> None:
        self._painter.paint(self.state.selected_index, False)
        self.state.move(step)
        self._painter.paint(self.state.selected_index, True)

    def run(self) -> None:
        if not self.state.entries:
            return
        with self._terminal:
            self._painter.paint(self.state.selected_index, True)
            while True:
                key = self._read_key()
                if key in NEXT_KEYS:
                    self._step(1)
                elif key in PREVIOUS_KEYS:
                    self._step(-1)
                elif key in CONFIRM_KEYS:
                    self._on_confirm(self.state.selected)
                else:
                    self._painter.paint(self.state.selected_index, False)
                    return
