"""Data models for status parsing and diff extraction."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple


class ChangeKind(str, Enum):
    ADDED = "added"
    DELETED = "deleted"
    MODIFIED = "modified"


class LineType(str, Enum):
    HEADER = "header"
    HUNK_HEADER = "hunk_header"
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


@dataclass(frozen=True, slots=True)
class StatusEntry:
    """One classified line of ``git status --porcelain``."""

    kind: ChangeKind
    path: str


@dataclass(frozen=True)
class StatusSummary:
    added: int = 0
    deleted: int = 0
    modified: int = 0

    def count(self, kind: ChangeKind) -> int:
        return getattr(self, kind.value)

    @property
    def total(self) -> int:
        return self.added + self.deleted + self.modified


@dataclass(frozen=True)
class StatusReport:
    """Immutable result of one status parse pass."""

    lines: Tuple[str, ...] = ()
    entries: Tuple[StatusEntry, ...] = ()
    summary: StatusSummary = field(default_factory=StatusSummary)
    unclassified: Tuple[str, ...] = ()  # codes matching no kind (renames, copies, ...)

    @property
    def up_to_date(self) -> bool:
        return not self.lines


@dataclass(frozen=True)
class DiffHunk:
    """Segment of a combined ``diff --cached`` belonging to one file."""

    path: str
    text: str
