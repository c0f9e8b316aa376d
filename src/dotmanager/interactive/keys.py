"""Decode raw stdin bytes into key tokens."""

from __future__ import annotations

import os
import select
from typing import Optional

ESC_SEQUENCE_TIMEOUT_MS = 25

TAB = "TAB"
BACKTAB = "BACKTAB"
UP = "UP"
DOWN = "DOWN"
LEFT = "LEFT"
RIGHT = "RIGHT"
ENTER = "ENTER"
ESC = "ESC"

_CSI_FINAL = {
    b"A": UP,
    b"B": DOWN,
    b"C": RIGHT,
    b"D": LEFT,
    b"Z": BACKTAB,
}


def _read_ready_byte(fd: int, timeout_ms: int) -> Optional[bytes]:
    ready, _, _ = select.select([fd], [], [], max(0.0, timeout_ms / 1000.0))
    if not ready:
        return None
    ch = os.read(fd, 1)
    if not ch:
        return None
    return ch


def read_key(fd: int) -> str:
    """Block for one key press and return its token.

    Printable input comes back as the character itself; an empty string
    means stdin reached EOF.
    """
    ch = os.read(fd, 1)
    if not ch:
        return ""

    if ch == b"\t":
        return TAB
    if ch in {b"\r", b"\n"}:
        return ENTER
    if ch != b"\x1b":
        return ch.decode("utf-8", errors="replace")

    seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
    if seq != b"[":
        return ESC
    # CSI: parameter/intermediate bytes, then one final byte in "@".."~"
    params = b""
    while True:
        seq = _read_ready_byte(fd, ESC_SEQUENCE_TIMEOUT_MS)
        if seq is None:
            return ESC
        if 0x40 <= seq[0] <= 0x7E:
            break
        params += seq
    if params:
        return ESC
    return _CSI_FINAL.get(seq, ESC)
