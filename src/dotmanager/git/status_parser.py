"""Porcelain status parser.

Classification tests whether a kind's letter appears anywhere in the two
character status code, so ``AM`` is an addition and ``MM`` a modification.
Codes containing none of ``A``/``D``/``M`` (renames, copies, untracked
markers) are left out of every kind and kept in
:attr:`StatusReport.unclassified`.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from dotmanager.git.models import ChangeKind, StatusEntry, StatusReport, StatusSummary

# Priority order decides the kind of a code that could match more than one.
KIND_CODES: Tuple[Tuple[ChangeKind, str], ...] = (
    (ChangeKind.ADDED, "A"),
    (ChangeKind.DELETED, "D"),
    (ChangeKind.MODIFIED, "M"),
)


def classify(code: str) -> Optional[ChangeKind]:
    """Return the first kind whose letter is contained in *code*."""
    for kind, letter in KIND_CODES:
        if letter in code:
            return kind
    return None


def line_path(line: str) -> str:
    """Return the token after the last space (paths with spaces are unsupported)."""
    return line.rsplit(" ", 1)[-1]


def count_kinds(lines: List[str]) -> StatusSummary:
    """Count each kind independently over the status codes of *lines*."""
    counts = {kind: sum(1 for line in lines if letter in line[:2]) for kind, letter in KIND_CODES}
    return StatusSummary(
        added=counts[ChangeKind.ADDED],
        deleted=counts[ChangeKind.DELETED],
        modified=counts[ChangeKind.MODIFIED],
    )


class StatusParser:
    """Parse ``git status --porcelain`` text into a :class:`StatusReport`.

    Usage::

        report = StatusParser(git.status_porcelain()).parse()
        if report.up_to_date:
            ...
    """

    def __init__(self, status_text: str) -> None:
        self._lines = [line.rstrip("\r") for line in status_text.splitlines() if line.strip()]

    def parse(self) -> StatusReport:
        entries: List[StatusEntry] = []
        unclassified: List[str] = []

        for line in self._lines:
            kind = classify(line[:2])
            if kind is None:
                unclassified.append(line)
                continue
            entries.append(StatusEntry(kind=kind, path=line_path(line)))

        return StatusReport(
            lines=tuple(self._lines),
            entries=tuple(entries),
            summary=count_kinds(self._lines),
            unclassified=tuple(unclassified),
        )
