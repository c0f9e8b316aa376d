"""Rich terminal views for status and the tracking list."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

from rich import box
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from dotmanager.git.models import ChangeKind, StatusEntry, StatusReport, StatusSummary

STATUS_HEADERS = ("status", "path")

KIND_LABEL = {
    ChangeKind.ADDED: "new file",
    ChangeKind.DELETED: "deleted",
    ChangeKind.MODIFIED: "modified",
}

_KIND_STYLE = {
    ChangeKind.ADDED: "blue",
    ChangeKind.DELETED: "red",
    ChangeKind.MODIFIED: "green",
}

_SUMMARY_LABEL = {
    ChangeKind.ADDED: "new files",
    ChangeKind.DELETED: "deleted",
    ChangeKind.MODIFIED: "modified",
}

_SUMMARY_SYMBOL = {
    ChangeKind.ADDED: "+",
    ChangeKind.DELETED: "-",
    ChangeKind.MODIFIED: "~",
}

_KIND_ORDER = (ChangeKind.ADDED, ChangeKind.DELETED, ChangeKind.MODIFIED)


def display_path(path: str) -> str:
    return f"/{path}"


def status_rows(entries: Iterable[StatusEntry]) -> List[Tuple[str, str]]:
    """Plain ``(label, path)`` rows in entry order."""
    return [(KIND_LABEL[e.kind], display_path(e.path)) for e in entries]


def new_table(*headers: str) -> Table:
    table = Table(box=box.SQUARE, header_style="bold cyan", padding=(0, 1))
    for header in headers:
        table.add_column(header, no_wrap=True)
    return table


def build_status_table(report: StatusReport) -> Table:
    table = new_table(*STATUS_HEADERS)
    for entry in report.entries:
        path = Text("/", style="dim")
        path.append(entry.path)
        table.add_row(Text(KIND_LABEL[entry.kind], style=_KIND_STYLE[entry.kind]), path)
    return table


def _nonzero_counts(summary: StatusSummary) -> List[Tuple[ChangeKind, int]]:
    return [(kind, summary.count(kind)) for kind in _KIND_ORDER if summary.count(kind) > 0]


def summary_long(summary: StatusSummary) -> List[str]:
    """One ``"> <label>: <count>"`` line per non-zero kind."""
    return [f"> {_SUMMARY_LABEL[kind]}: {count}" for kind, count in _nonzero_counts(summary)]


def summary_long_text(summary: StatusSummary) -> Text:
    """Styled :func:`summary_long`, one indented line per kind."""
    text = Text()
    for kind, count in _nonzero_counts(summary):
        if text:
            text.append("\n")
        text.append(" > ", style="dim")
        text.append(f"{_SUMMARY_LABEL[kind]}: ")
        text.append(str(count), style=_KIND_STYLE[kind])
    return text


def summary_short(summary: StatusSummary) -> str:
    """Compact ``+N -N ~N `` form; every token is followed by a space."""
    return "".join(f"{_SUMMARY_SYMBOL[kind]}{count} " for kind, count in _nonzero_counts(summary))


def status_header(report: StatusReport, work_tree: Path, remote_url: str) -> List[str]:
    """Rich-markup header lines shown above the status table."""
    lines = [
        f" [bold]Work-tree:[/bold]\t[cyan]{escape(str(work_tree))}/[/cyan]",
        f" [bold]Remote-URL:[/bold]\t[cyan]{escape(remote_url)}[/cyan]",
    ]
    if report.up_to_date:
        lines.append(" [bold]Git status:\t[green]Up to date[/green][/bold]")
    else:
        lines.append(" [bold]Git status:[/bold]")
    return lines


def _relative(path: str, home: Path) -> str:
    prefix = str(home).rstrip("/") + "/"
    return path[len(prefix):] if path.startswith(prefix) else path


def split_tracked(paths: Sequence[str], home: Path) -> Tuple[List[str], List[str]]:
    """Return sorted ``(folders, files)`` relative to *home*."""
    folders: List[str] = []
    files: List[str] = []
    for path in paths:
        target = folders if os.path.isdir(path) else files
        target.append(_relative(path, home))
    return sorted(folders), sorted(files)


def build_tracking_table(paths: Sequence[str], home: Path) -> Table:
    folders, files = split_tracked(paths, home)
    table = Table(box=box.SQUARE, header_style="bold cyan", padding=(0, 1))
    table.add_column("#", justify="right", style="bold green")
    table.add_column("folders", no_wrap=True)
    table.add_column("files", no_wrap=True)
    for i in range(max(len(folders), len(files))):
        folder = Text()
        file = Text()
        if i < len(folders):
            folder.append("/", style="dim")
            folder.append(folders[i], style="blue")
        if i < len(files):
            file.append("/", style="dim")
            file.append(files[i])
        table.add_row(str(i + 1), folder, file)
    return table
