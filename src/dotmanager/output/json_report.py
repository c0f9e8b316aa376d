"""JSON reporter for scripting (status bars, prompts)."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from dotmanager.git.models import StatusReport
from dotmanager.output.terminal import summary_short


def to_dict(report: StatusReport, *, work_tree: Path, remote_url: str) -> Dict[str, Any]:
    """Convert StatusReport to a JSON-serialisable dict."""
    entries: List[Dict[str, Any]] = [
        {"kind": e.kind.value, "path": e.path} for e in report.entries
    ]
    return {
        "work_tree": str(work_tree),
        "remote_url": remote_url,
        "up_to_date": report.up_to_date,
        "summary": {
            "added": report.summary.added,
            "deleted": report.summary.deleted,
            "modified": report.summary.modified,
            "short": summary_short(report.summary).strip(),
        },
        "entries": entries,
        "unclassified": list(report.unclassified),
    }


def render(report: StatusReport, *, work_tree: Path, remote_url: str) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(report, work_tree=work_tree, remote_url=remote_url), indent=2)
