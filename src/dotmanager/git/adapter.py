"""Git subprocess wrapper bound to the bare dotfile repository."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


class GitRunner:
    """Run git against ``--git-dir=<git_dir> --work-tree=<work_tree>``.

    Two call styles are offered: :meth:`capture` collects stdout, while
    :meth:`run_interactive` lets git talk to the terminal directly (editor,
    credential prompts, push progress).
    """

    def __init__(self, git_dir: Path, work_tree: Path, binary: str = "git") -> None:
        self.git_dir = Path(git_dir)
        self.work_tree = Path(work_tree)
        self.binary = binary

    def _argv(self, args: Sequence[str]) -> list[str]:
        return [
            self.binary,
            f"--git-dir={self.git_dir}",
            f"--work-tree={self.work_tree}",
            *args,
        ]

    def capture(self, args: Sequence[str], timeout: Optional[int] = None) -> str:
        """Run a git command and return stdout. Raises GitError on failure."""
        argv = self._argv(args)
        logger.debug("git capture: %s", argv)
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=timeout,
                encoding="utf-8",
                errors="replace",
            )
        except FileNotFoundError as exc:
            raise GitError(f"{self.binary} is not installed or not on PATH") from exc
        except subprocess.TimeoutExpired as exc:
            raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}") from exc

        if result.returncode != 0:
            stderr = result.stderr.strip()
            # Non-fatal failures (e.g. missing remote) yield their stdout
            if not stderr or "fatal" not in stderr.lower():
                return result.stdout
            raise GitError(f"git error: {stderr}")
        return result.stdout

    def run_interactive(self, args: Sequence[str]) -> None:
        """Run a git command attached to the terminal and wait for it."""
        argv = self._argv(args)
        logger.debug("git spawn: %s", argv)
        try:
            result = subprocess.run(argv)
        except FileNotFoundError as exc:
            raise GitError(f"{self.binary} is not installed or not on PATH") from exc
        if result.returncode != 0:
            raise GitError(f"git {' '.join(args)} exited with status {result.returncode}")

    def init_bare(self) -> None:
        """Create the bare repository at :attr:`git_dir`."""
        argv = [self.binary, "init", "--bare", str(self.git_dir)]
        logger.debug("git init: %s", argv)
        try:
            result = subprocess.run(argv, capture_output=True, text=True)
        except FileNotFoundError as exc:
            raise GitError(f"{self.binary} is not installed or not on PATH") from exc
        if result.returncode != 0:
            raise GitError(f"git error: {result.stderr.strip()}")

    # ---- porcelain queries ----

    def status_porcelain(self) -> str:
        return self.capture(["status", "--porcelain"])

    def cached_diff(self) -> str:
        return self.capture(["diff", "--cached", "--no-color"])

    def cached_names(self) -> list[str]:
        """Return list of staged file paths."""
        output = self.capture(["diff", "--cached", "--name-only", "--no-color"])
        return [line for line in output.splitlines() if line.strip()]

    def remote_url(self, remote: str = "origin") -> str:
        return self.capture(["remote", "get-url", "--all", remote]).strip()
