"""Tests for the CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from dotmanager.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def in_home(home, monkeypatch):
    monkeypatch.chdir(home)


def _track(dot_repo, name=".bashrc"):
    result = runner.invoke(app, ["add", str(dot_repo.home / name)])
    assert result.exit_code == 0, result.output
    return result


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "dotmanager" in result.output

    def test_bad_config_override(self, dot_repo):
        result = runner.invoke(app, ["--config", "/nonexistent/config.toml", "status"])
        assert result.exit_code == 2
        assert "Config error" in result.output


class TestAddRemove:
    def test_add_records_path(self, dot_repo):
        _track(dot_repo)
        assert dot_repo.list_file.read_text() == f"{dot_repo.home / '.bashrc'}\n"
        assert ".bashrc" in dot_repo.git("diff", "--cached", "--name-only")

    def test_add_twice_warns(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["add", str(dot_repo.home / ".bashrc")])
        assert result.exit_code == 2
        assert "already in the tracking list" in result.output

    def test_add_inside_tracked_folder(self, dot_repo):
        _track(dot_repo, ".config")
        result = runner.invoke(app, ["add", str(dot_repo.home / ".config" / "nvim")])
        assert result.exit_code == 2
        assert "lower depth" in result.output

    def test_add_missing_path(self, dot_repo):
        result = runner.invoke(app, ["add", str(dot_repo.home / ".zshrc")])
        assert result.exit_code == 2
        assert "did not match any files or folders" in result.output

    def test_remove_after_add(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["remove", str(dot_repo.home / ".bashrc")])
        assert result.exit_code == 0, result.output
        assert dot_repo.list_file.read_text() == ""
        assert (dot_repo.home / ".bashrc").exists()
        assert dot_repo.git("diff", "--cached", "--name-only") == ""

    def test_add_ignored_path_is_not_recorded(self, dot_repo):
        (dot_repo.home / ".gitignore").write_text(".vimrc\n")
        result = runner.invoke(app, ["add", str(dot_repo.home / ".vimrc")])
        assert result.exit_code == 2
        assert "Git error" in result.output
        assert dot_repo.list_file.read_text() == ""

        status = runner.invoke(app, ["status"])
        assert status.exit_code == 0, status.output
        assert "Up to date" in status.output

    def test_remove_empty_folder(self, dot_repo):
        _track(dot_repo, ".vim")
        result = runner.invoke(app, ["remove", str(dot_repo.home / ".vim")])
        assert result.exit_code == 0, result.output
        assert dot_repo.list_file.read_text() == ""

    def test_remove_untracked(self, dot_repo):
        result = runner.invoke(app, ["remove", str(dot_repo.home / ".vimrc")])
        assert result.exit_code == 2
        assert "in the tracking list" in result.output


class TestStatus:
    def test_up_to_date(self, dot_repo):
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0, result.output
        assert "Up to date" in result.output

    def test_new_file(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0, result.output
        assert "new file" in result.output
        assert "/.bashrc" in result.output
        assert "new files: 1" in result.output

    def test_json(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["status", "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["entries"] == [{"kind": "added", "path": ".bashrc"}]
        assert data["summary"]["short"] == "+1"

    def test_invalid_format(self, dot_repo):
        result = runner.invoke(app, ["status", "--format", "xml"])
        assert result.exit_code == 2

    def test_summary(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["status-summary"])
        assert result.exit_code == 0
        assert result.stdout == "+1 \n"

    def test_summary_when_clean(self, dot_repo):
        result = runner.invoke(app, ["status-summary"])
        assert result.exit_code == 0
        assert result.stdout == ""

    def test_missing_tracking_list(self, dot_repo):
        dot_repo.list_file.unlink()
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 2
        assert "Error" in result.output

    def test_stale_entry_dropped(self, dot_repo):
        _track(dot_repo)
        _track(dot_repo, ".vimrc")
        (dot_repo.home / ".vimrc").unlink()
        result = runner.invoke(app, ["status"])
        assert result.exit_code == 0, result.output
        assert dot_repo.list_file.read_text() == f"{dot_repo.home / '.bashrc'}\n"


class TestList:
    def test_lists_folders_and_files(self, dot_repo):
        _track(dot_repo)
        _track(dot_repo, ".config")
        result = runner.invoke(app, ["list"])
        assert result.exit_code == 0, result.output
        assert "Tracking" in result.output
        assert "/.bashrc" in result.output
        assert "/.config" in result.output


class TestDiff:
    def test_file_without_changes(self, dot_repo, monkeypatch):
        monkeypatch.setenv("DOTMANAGER_PAGER", "false")
        result = runner.invoke(app, ["diff", str(dot_repo.home / ".bashrc")])
        assert result.exit_code == 0
        assert "did not find any changes" in result.output

    def test_file_with_changes_is_paged(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["diff", str(dot_repo.home / ".bashrc")])
        assert result.exit_code == 0, result.output

    def test_pick_when_clean(self, dot_repo):
        result = runner.invoke(app, ["diff"])
        assert result.exit_code == 0
        assert "There are no modified files" in result.output

    def test_pick_needs_terminal(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["diff"])
        assert result.exit_code == 2
        assert "interactive terminal" in result.output

    def test_pager_failure(self, dot_repo, monkeypatch):
        monkeypatch.setenv("DOTMANAGER_PAGER", "false")
        _track(dot_repo)
        result = runner.invoke(app, ["diff", str(dot_repo.home / ".bashrc")])
        assert result.exit_code == 2
        assert "Pager error" in result.output


class TestUpdate:
    def test_nothing_to_do(self, dot_repo):
        result = runner.invoke(app, ["update"])
        assert result.exit_code == 0
        assert "Up to date" in result.output

    def test_exit_choice(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["update"], input="exit\n")
        assert result.exit_code == 2
        assert "Terminating." in result.output

    def test_commit_then_push_without_remote(self, dot_repo):
        _track(dot_repo)
        result = runner.invoke(app, ["update"], input="commit\ntrack bashrc\n")
        assert "track bashrc" in dot_repo.git("log", "--format=%s")
        assert result.exit_code == 2
        assert "Git error" in result.output


class TestInit:
    def test_refuses_existing_repository(self, dot_repo):
        result = runner.invoke(app, ["init", "git@example.com:me/dots.git"])
        assert result.exit_code == 1
        assert "already exists" in result.output
