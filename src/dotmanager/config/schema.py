"""Configuration schema — dataclasses for every config section."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Literal, Optional

OutputFormat = Literal["terminal", "json"]


@dataclass
class PathsConfig:
    home: Optional[str] = None  # work-tree root; defaults to $HOME
    data_dir: Optional[str] = None  # holds the bare repo and the tracking list


@dataclass
class GitConfig:
    binary: str = "git"
    remote: str = "origin"
    branch: str = "main"


@dataclass
class PagerConfig:
    command: List[str] = field(default_factory=lambda: ["less", "-R", "-~"])


@dataclass
class OutputConfig:
    format: OutputFormat = "terminal"


@dataclass
class DotManagerConfig:
    paths: PathsConfig = field(default_factory=PathsConfig)
    git: GitConfig = field(default_factory=GitConfig)
    pager: PagerConfig = field(default_factory=PagerConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @property
    def home(self) -> Path:
        return Path(self.paths.home) if self.paths.home else Path.home()

    @property
    def data_dir(self) -> Path:
        if self.paths.data_dir:
            return Path(self.paths.data_dir)
        return default_data_dir()

    @property
    def git_dir(self) -> Path:
        return self.data_dir / "git"

    @property
    def list_file(self) -> Path:
        return self.data_dir / "list"


def default_data_dir() -> Path:
    """Return ``$XDG_DATA_HOME/dotmanager`` (or ``~/.local/share/dotmanager``)."""
    base = os.environ.get("XDG_DATA_HOME")
    root = Path(base) if base else Path.home() / ".local" / "share"
    return root / "dotmanager"
