"""Tracking list — the curated set of paths staged into the dotfile repo.

The list lives in a single newline-delimited file. Entries never overlap:
no entry equals, contains, or sits inside another one. Adding a folder
absorbs any tracked paths beneath it; adding something beneath a tracked
folder is refused.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)


class TrackingError(Exception):
    """Base class for tracking list failures. Carries the offending path."""

    message = "tracking list error"

    def __init__(self, path: str, message: Optional[str] = None) -> None:
        self.path = path
        if message is not None:
            self.message = message
        super().__init__(f"'{path}': {self.message}")


class PathNotFoundError(TrackingError):
    message = "did not match any files or folders"


class AlreadyTrackedError(TrackingError):
    message = "is already in the tracking list"


class ConflictError(TrackingError):
    def __init__(self, path: str, ancestor: str) -> None:
        self.ancestor = ancestor
        super().__init__(path, f"entry exists at lower depth: '{ancestor}'")


class NotTrackedError(TrackingError):
    message = "did not match any files or folders in the tracking list"


class TrackingListIOError(TrackingError):
    message = "could not access the tracking list"


def normalize_path(path: str) -> str:
    """Expand ``~``, make absolute, and strip trailing separators."""
    expanded = os.path.expanduser(path)
    absolute = os.path.abspath(expanded)
    return absolute.rstrip(os.sep) or os.sep


def is_within(path: str, ancestor: str) -> bool:
    """True if *path* lies strictly below *ancestor*, compared by component."""
    if ancestor == os.sep:
        return path != os.sep
    return path.startswith(ancestor + os.sep)


class TrackingList:
    """Ordered, overlap-free list of tracked absolute paths on disk."""

    def __init__(self, list_file: Path) -> None:
        self.list_file = Path(list_file)

    # ---- persistence ----

    def load(self) -> List[str]:
        try:
            text = self.list_file.read_text(encoding="utf-8")
        except OSError as exc:
            raise TrackingListIOError(str(self.list_file), f"could not read tracking list: {exc.strerror}") from exc
        return [line.strip() for line in text.splitlines() if line.strip()]

    def _write(self, paths: List[str]) -> None:
        content = "\n".join(paths) + ("\n" if paths else "")
        directory = self.list_file.parent
        try:
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=".list-", text=True)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(content)
                os.replace(tmp_name, self.list_file)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise TrackingListIOError(str(self.list_file), f"could not write tracking list: {exc.strerror}") from exc
        logger.debug("rewrote %s with %d entries", self.list_file, len(paths))

    def replace(self, paths: List[str]) -> None:
        """Overwrite the record with *paths* as given."""
        self._write(list(paths))

    def create(self) -> None:
        """Create an empty list file if none exists."""
        if not self.list_file.exists():
            self.list_file.parent.mkdir(parents=True, exist_ok=True)
            self._write([])

    # ---- mutations ----

    def add(self, path: str) -> str:
        """Track *path*. Returns the normalized path that was stored."""
        path = normalize_path(path)
        if not os.path.exists(path):
            raise PathNotFoundError(path)

        paths = self.load()
        for existing in paths:
            if existing == path:
                raise AlreadyTrackedError(path)
            if is_within(path, existing):
                raise ConflictError(path, existing)

        absorbed = [p for p in paths if is_within(p, path)]
        if absorbed:
            logger.debug("%s absorbs %s", path, absorbed)
        paths = [p for p in paths if not is_within(p, path)]
        paths.append(path)
        self._write(paths)
        return path

    def remove(self, path: str) -> str:
        """Untrack an exact entry. Ancestors and descendants are not matched."""
        path = normalize_path(path)
        paths = self.load()
        remaining = [p for p in paths if p != path]
        if len(remaining) == len(paths):
            raise NotTrackedError(path)
        self._write(remaining)
        return path

    def reconcile(self) -> List[str]:
        """Drop entries whose target is gone. Returns the surviving entries."""
        paths = self.load()
        alive = [p for p in paths if os.path.exists(p)]
        if len(alive) != len(paths):
            logger.debug("dropping stale entries: %s", sorted(set(paths) - set(alive)))
            self._write(alive)
        return alive
