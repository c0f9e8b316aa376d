"""Per-file hunk lookup in a combined ``git diff --cached`` blob.

The combined diff is split on the ``diff --git `` boundary; segment 0 is the
text before the first boundary and is discarded, so the file at position *i*
of ``diff --cached --name-only`` owns segment *i + 1*.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from rich.text import Text

from dotmanager.git.models import DiffHunk, LineType

DIFF_BOUNDARY = "diff --git "
HUNK_PREFIX = "@@ "

_LINE_STYLE = {
    LineType.HEADER: "bold",
    LineType.ADDED: "green",
    LineType.REMOVED: "red",
    LineType.CONTEXT: "",
}


class DiffNotFoundError(Exception):
    """Raised when a path has no entry among the staged changes."""

    def __init__(self, path: str) -> None:
        super().__init__(f"no staged changes for {path}")
        self.path = path


def strip_root(target: str, root: Union[str, Path, None]) -> str:
    """Drop a leading ``<root>/`` from *target* if present."""
    if root is None:
        return target
    prefix = str(root).rstrip("/") + "/"
    if target.startswith(prefix):
        return target[len(prefix):]
    return target


def extract_hunk(
    target: str,
    cached_diff: str,
    changed_names: Sequence[str],
    root: Union[str, Path, None] = None,
) -> DiffHunk:
    """Return the diff segment of *target*. Raises DiffNotFoundError."""
    path = strip_root(target, root)
    try:
        index = list(changed_names).index(path)
    except ValueError:
        raise DiffNotFoundError(path) from None

    segments = cached_diff.split(DIFF_BOUNDARY)
    if index + 1 >= len(segments):
        raise DiffNotFoundError(path)
    return DiffHunk(path=path, text=segments[index + 1])


def classify_lines(hunk: DiffHunk) -> List[Tuple[LineType, str]]:
    """Tag each line of *hunk*, boundary header included."""
    classified: List[Tuple[LineType, str]] = []
    seen_hunk = False
    for line in (DIFF_BOUNDARY + hunk.text).splitlines():
        if line.startswith(HUNK_PREFIX):
            seen_hunk = True
            classified.append((LineType.HUNK_HEADER, line))
        elif not seen_hunk:
            classified.append((LineType.HEADER, line))
        elif line.startswith("+"):
            classified.append((LineType.ADDED, line))
        elif line.startswith("-"):
            classified.append((LineType.REMOVED, line))
        else:
            classified.append((LineType.CONTEXT, line))
    return classified


def _hunk_header(line: str) -> Text:
    # "@@ -1,2 +1,3 @@ section" -> cyan range, plain section heading
    parts = line.split("@@", 2)
    if len(parts) < 3:
        return Text(line, style="cyan")
    text = Text()
    text.append(f"@@{parts[1]}@@", style="cyan")
    text.append(parts[2])
    return text


def colorize(hunk: DiffHunk, lines: Optional[List[Tuple[LineType, str]]] = None) -> Text:
    """Build the styled text handed to the pager."""
    out = Text()
    for line_type, line in lines if lines is not None else classify_lines(hunk):
        if line_type == LineType.HUNK_HEADER:
            out.append_text(_hunk_header(line))
        else:
            out.append(line, style=_LINE_STYLE[line_type])
        out.append("\n")
    return out
