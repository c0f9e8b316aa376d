"""Dotfile workflow tying the tracking list, git and the status parser together.

Every command that reads repository state first stages the tracking list,
so status and diffs always describe what the next commit would contain.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from dotmanager.config.schema import DotManagerConfig
from dotmanager.git.adapter import GitError, GitRunner
from dotmanager.git.diff_extractor import DiffNotFoundError, extract_hunk
from dotmanager.git.models import DiffHunk, StatusReport
from dotmanager.git.status_parser import StatusParser
from dotmanager.tracking.store import TrackingList

logger = logging.getLogger(__name__)

README_RELATIVE = Path(".github") / "README.md"


class DotManager:
    """High-level operations behind each CLI command."""

    def __init__(
        self,
        config: DotManagerConfig,
        git: Optional[GitRunner] = None,
        tracking: Optional[TrackingList] = None,
    ) -> None:
        self.config = config
        self.git = git or GitRunner(config.git_dir, config.home, binary=config.git.binary)
        self.tracking = tracking or TrackingList(config.list_file)

    @property
    def home(self) -> Path:
        return self.config.home

    # ---- staging ----

    def stage_all(self) -> List[str]:
        """Drop stale entries, then ``git add`` every tracked path."""
        paths = self.tracking.reconcile()
        for path in paths:
            self.git.run_interactive(["add", path])
        return paths

    def track(self, path: str) -> str:
        """Record *path*, then stage it. A failed ``git add`` undoes the record."""
        before = self.tracking.load()
        stored = self.tracking.add(path)
        try:
            self.git.run_interactive(["add", stored])
        except GitError:
            logger.debug("git add failed, restoring tracking list")
            self.tracking.replace(before)
            raise
        return stored

    def untrack(self, path: str) -> str:
        before = self.tracking.load()
        removed = self.tracking.remove(path)
        try:
            self.git.run_interactive(["rm", "-r", "--cached", "--quiet", "--ignore-unmatch", removed])
        except GitError:
            self.tracking.replace(before)
            raise
        return removed

    # ---- queries ----

    def status(self) -> StatusReport:
        return StatusParser(self.git.status_porcelain()).parse()

    def remote_url(self) -> str:
        return self.git.remote_url(self.config.git.remote)

    def changed_names(self) -> List[str]:
        return self.git.cached_names()

    def hunk_for(self, target: str) -> DiffHunk:
        """Return the staged diff of *target*. Raises DiffNotFoundError."""
        names = self.git.cached_names()
        if not names:
            raise DiffNotFoundError(target)
        return extract_hunk(target, self.git.cached_diff(), names, root=self.home)

    # ---- publishing ----

    def commit_and_push(self, message: str) -> None:
        self.git.run_interactive(["commit", "-m", message])
        self.git.run_interactive(["push"])

    def initialize(self, remote_url: str) -> Path:
        """Create the bare repository and publish an initial commit.

        Returns the README path committed as the first file.
        """
        cfg = self.config
        cfg.git_dir.mkdir(parents=True, exist_ok=True)
        self.tracking.create()

        readme = self.home / README_RELATIVE
        readme.parent.mkdir(parents=True, exist_ok=True)
        if not readme.exists():
            readme.touch()

        logger.debug("initializing bare repository at %s", cfg.git_dir)
        self.git.init_bare()
        self.git.capture(["config", "--local", "status.showUntrackedFiles", "no"])
        self.git.capture(["branch", "-M", cfg.git.branch])
        self.git.capture(["remote", "add", cfg.git.remote, remote_url])
        self.git.run_interactive(["add", str(readme)])
        self.git.run_interactive(["commit", "-m", "Initial commit"])
        self.git.run_interactive(["push", "-u", cfg.git.remote, cfg.git.branch])
        return readme
