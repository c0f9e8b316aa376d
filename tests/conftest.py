"""Shared test fixtures: sample git output, a fake home and temp dotfile repos."""

from __future__ import annotations

import subprocess
import textwrap
from dataclasses import dataclass
from pathlib import Path

import pytest

from dotmanager.tracking.store import TrackingList


@pytest.fixture
def sample_status() -> str:
    """One addition, one deletion, one modification."""
    return "A  file1\nD  file2\nM  file3\n"


@pytest.fixture
def sample_cached_diff() -> str:
    """Combined ``git diff --cached`` covering two files."""
    return textwrap.dedent("""\
        diff --git a/.bashrc b/.bashrc
        index 1234567..abcdef0 100644
        --- a/.bashrc
        +++ b/.bashrc
        @@ -1,3 +1,3 @@ # shell setup
         export EDITOR=vim
        -alias ll='ls -l'
        +alias ll='ls -la'
         export PATH=$HOME/bin:$PATH
        diff --git a/.config/nvim/init.lua b/.config/nvim/init.lua
        new file mode 100644
        index 0000000..e69de29
        --- /dev/null
        +++ b/.config/nvim/init.lua
        @@ -0,0 +1,2 @@
        +vim.opt.number = true
        +vim.opt.relativenumber = true
    """)


@pytest.fixture
def sample_cached_names() -> list[str]:
    return [".bashrc", ".config/nvim/init.lua"]


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """A fake home directory with a few dotfiles."""
    root = tmp_path / "home"
    (root / ".config" / "nvim").mkdir(parents=True)
    (root / ".config" / "nvim" / "init.lua").write_text("vim.opt.number = true\n")
    (root / ".config" / "git").mkdir(parents=True)
    (root / ".config" / "git" / "config").write_text("[user]\n")
    (root / ".bashrc").write_text("export EDITOR=vim\n")
    (root / ".vimrc").write_text("set number\n")
    (root / ".vim").mkdir()
    return root


@pytest.fixture
def tracking(tmp_path: Path) -> TrackingList:
    """An empty tracking list on disk."""
    store = TrackingList(tmp_path / "data" / "list")
    store.create()
    return store


@dataclass
class DotRepo:
    home: Path
    data_dir: Path

    @property
    def git_dir(self) -> Path:
        return self.data_dir / "git"

    @property
    def list_file(self) -> Path:
        return self.data_dir / "list"

    def git(self, *args: str) -> str:
        result = subprocess.run(
            ["git", f"--git-dir={self.git_dir}", f"--work-tree={self.home}", *args],
            capture_output=True, text=True, check=True,
        )
        return result.stdout


@pytest.fixture
def dot_repo(tmp_path: Path, home: Path, monkeypatch) -> DotRepo:
    """A bare repository over *home* with an empty tracking list, wired via env vars."""
    data_dir = tmp_path / "data"
    data_dir.mkdir(exist_ok=True)
    repo = DotRepo(home=home, data_dir=data_dir)

    subprocess.run(["git", "init", "--bare", str(repo.git_dir)], capture_output=True, check=True)
    repo.git("config", "--local", "status.showUntrackedFiles", "no")
    repo.git("config", "user.email", "test@test.com")
    repo.git("config", "user.name", "Test")
    repo.list_file.write_text("")

    monkeypatch.setenv("DOTMANAGER_HOME", str(home))
    monkeypatch.setenv("DOTMANAGER_DATA_DIR", str(data_dir))
    monkeypatch.setenv("DOTMANAGER_PAGER", "true")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg-config"))
    monkeypatch.delenv("DOTMANAGER_FORMAT", raising=False)
    monkeypatch.delenv("DOTMANAGER_GIT", raising=False)
    return repo
