"""Git interface layer."""

from dotmanager.git.adapter import GitError, GitRunner
from dotmanager.git.diff_extractor import (
    DiffNotFoundError,
    classify_lines,
    colorize,
    extract_hunk,
    strip_root,
)
from dotmanager.git.models import (
    ChangeKind,
    DiffHunk,
    LineType,
    StatusEntry,
    StatusReport,
    StatusSummary,
)
from dotmanager.git.status_parser import StatusParser

__all__ = [
    "ChangeKind",
    "DiffHunk",
    "DiffNotFoundError",
    "GitError",
    "GitRunner",
    "LineType",
    "StatusEntry",
    "StatusParser",
    "StatusReport",
    "StatusSummary",
    "classify_lines",
    "colorize",
    "extract_hunk",
    "strip_root",
]
