"""dotmanager CLI — Typer application for the ``dm`` command."""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from dataclasses import dataclass
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from dotmanager import __version__
from dotmanager.config.schema import DotManagerConfig
from dotmanager.git.models import StatusReport

app = typer.Typer(
    name="dm",
    help="Maintain a bare git repository of your dotfiles.",
    add_completion=False,
    no_args_is_help=True,
)

console = Console(stderr=True)
out = Console(highlight=False)

NEXT_STEPS = ["commit", "diff", "exit"]


@dataclass
class AppContext:
    config: DotManagerConfig
    verbose: bool = False


def _path_message(level: str, path: str, message: str) -> None:
    """Print ``level: 'path': message`` the way every path problem is reported."""
    color = "red" if level == "error" else "yellow"
    console.print(
        f"[bold {color}]{level}[/bold {color}][bold]:[/bold] '{escape(path)}': {escape(message)}",
        soft_wrap=True,
    )


@contextlib.contextmanager
def _handle_errors() -> Iterator[None]:
    """Turn library errors into a labelled message and exit code 2."""
    from dotmanager.git.adapter import GitError
    from dotmanager.output.pager import PagerError
    from dotmanager.tracking.store import (
        AlreadyTrackedError,
        ConflictError,
        TrackingError,
        TrackingListIOError,
    )

    try:
        yield
    except TrackingListIOError as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(exc.message)} ({escape(exc.path)})")
        console.print("[dim]Run 'dm init <url>' to create the repository and tracking list.[/dim]")
        raise typer.Exit(code=2) from exc
    except (AlreadyTrackedError, ConflictError) as exc:
        _path_message("warn", exc.path, exc.message)
        raise typer.Exit(code=2) from exc
    except TrackingError as exc:
        _path_message("error", exc.path, exc.message)
        raise typer.Exit(code=2) from exc
    except GitError as exc:
        console.print(f"[bold red]Git error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc
    except PagerError as exc:
        console.print(f"[bold red]Pager error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


def _app(ctx: typer.Context) -> AppContext:
    return ctx.obj


def _manager(ctx: typer.Context):
    from dotmanager.manager import DotManager

    return DotManager(_app(ctx).config)


def _stage(ctx: typer.Context, manager) -> None:
    paths = manager.stage_all()
    if _app(ctx).verbose:
        console.print(f"[dim]Staged {len(paths)} tracked path(s)[/dim]")


def _status(ctx: typer.Context, manager) -> StatusReport:
    report = manager.status()
    if _app(ctx).verbose and report.unclassified:
        console.print(f"[dim]Unclassified status lines: {len(report.unclassified)}[/dim]")
        for line in report.unclassified:
            console.print(f"[dim]  {escape(line)}[/dim]")
    return report


def _print_status(manager, report: StatusReport) -> None:
    from dotmanager.output import terminal

    out.print()
    for line in terminal.status_header(report, manager.home, manager.remote_url()):
        out.print(line)


def _page_diff(manager, target: str) -> None:
    """Page one file's staged diff; a file without changes is only a warning."""
    from dotmanager.git.diff_extractor import DiffNotFoundError, colorize
    from dotmanager.output.pager import page

    try:
        hunk = manager.hunk_for(target)
    except DiffNotFoundError as exc:
        _path_message("warn", exc.path, "did not find any changes")
        raise typer.Exit(code=0) from exc
    page(colorize(hunk), manager.config.pager.command)


def _select_diff(manager, report: StatusReport) -> None:
    """Let the user walk the printed status table and page diffs with Enter."""
    from dotmanager.git.diff_extractor import DiffNotFoundError, colorize
    from dotmanager.interactive.keys import read_key
    from dotmanager.interactive.navigator import Navigator, RowPainter
    from dotmanager.interactive.terminal import RawTerminal
    from dotmanager.output.pager import page

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        console.print("[bold red]Error:[/bold red] diff selection needs an interactive terminal")
        raise typer.Exit(code=2)

    def show(entry) -> None:
        try:
            hunk = manager.hunk_for(entry.path)
        except DiffNotFoundError:
            return
        page(colorize(hunk), manager.config.pager.command)

    stdin_fd = sys.stdin.fileno()
    navigator = Navigator(
        report.entries,
        read_key=lambda: read_key(stdin_fd),
        on_confirm=show,
        painter=RowPainter(report.entries, sys.stdout),
        terminal=RawTerminal(stdin_fd, sys.stdout.fileno()),
    )
    navigator.run()


def _clear_prompt_line() -> None:
    if out.is_terminal:
        out.file.write("\x1b[1F\x1b[2K")
        out.file.flush()


# ── status ────────────────────────────────────────────────────────────────────


@app.command()
def status(
    ctx: typer.Context,
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json"),
) -> None:
    """Show the status of the dotfile repository."""
    from dotmanager.output import json_report, terminal

    cfg = _app(ctx).config
    fmt = format or cfg.output.format
    if fmt not in ("terminal", "json"):
        console.print(f"[bold red]Invalid format:[/bold red] {escape(fmt)}")
        raise typer.Exit(code=2)

    manager = _manager(ctx)
    with _handle_errors():
        _stage(ctx, manager)
        report = _status(ctx, manager)

        if fmt == "json":
            print(json_report.render(report, work_tree=manager.home, remote_url=manager.remote_url()))
            raise typer.Exit(code=0)

        _print_status(manager, report)
    if not report.up_to_date:
        out.print(terminal.build_status_table(report))
        out.print(terminal.summary_long_text(report.summary))


# ── status-summary ────────────────────────────────────────────────────────────


@app.command("status-summary")
def status_summary(ctx: typer.Context) -> None:
    """Print a one-line change summary such as '+1 -2 ~3'."""
    from dotmanager.output import terminal

    manager = _manager(ctx)
    with _handle_errors():
        _stage(ctx, manager)
        report = _status(ctx, manager)
    if not report.up_to_date:
        print(terminal.summary_short(report.summary))


# ── list ──────────────────────────────────────────────────────────────────────


@app.command("list")
def list_tracked(ctx: typer.Context) -> None:
    """Show the tracking list."""
    from dotmanager.output import terminal

    manager = _manager(ctx)
    with _handle_errors():
        _stage(ctx, manager)
        paths = manager.tracking.load()
    out.print()
    out.print("[bold] Tracking:[/bold]")
    out.print(terminal.build_tracking_table(paths, manager.home))
    out.print()


# ── update ────────────────────────────────────────────────────────────────────


@app.command()
def update(ctx: typer.Context) -> None:
    """Stage every tracked path, then offer commit & push or a diff."""
    from dotmanager.output import terminal

    manager = _manager(ctx)
    with _handle_errors():
        _stage(ctx, manager)
        report = _status(ctx, manager)
        _print_status(manager, report)
        if report.up_to_date:
            return
        out.print(terminal.build_status_table(report))

        while True:
            step = Prompt.ask("Proceed to", choices=NEXT_STEPS, default=NEXT_STEPS[0], console=out)
            _clear_prompt_line()
            if step == "commit":
                message = Prompt.ask("Add commit message", console=out)
                manager.commit_and_push(message)
                return
            if step == "diff":
                _select_diff(manager, report)
                continue
            console.print("Terminating.")
            raise typer.Exit(code=2)


# ── diff ──────────────────────────────────────────────────────────────────────


@app.command()
def diff(
    ctx: typer.Context,
    file: Optional[str] = typer.Argument(None, help="File to diff; omit to pick from a list"),
) -> None:
    """Page the staged diff of a file, or pick one from the status table."""
    from dotmanager.output import terminal

    manager = _manager(ctx)
    with _handle_errors():
        _stage(ctx, manager)
        if file:
            _page_diff(manager, os.path.expanduser(file))
            return

        if not manager.changed_names():
            out.print("There are no modified files. Git appears to be up to date")
            out.print("Terminating")
            raise typer.Exit(code=0)

        report = _status(ctx, manager)
        out.print(terminal.build_status_table(report))
        _select_diff(manager, report)


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init(
    ctx: typer.Context,
    url: str = typer.Argument(..., help="Remote URL to push the dotfile repository to"),
) -> None:
    """Create the bare repository, commit a README and push to URL."""
    manager = _manager(ctx)
    cfg = manager.config
    if (cfg.git_dir / "HEAD").exists():
        console.print(f"[yellow]⚠[/yellow]  A repository already exists at {escape(str(cfg.git_dir))}")
        raise typer.Exit(code=1)

    with _handle_errors():
        try:
            manager.initialize(url)
        except OSError as exc:
            console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
            raise typer.Exit(code=2) from exc
    console.print(f"[green]✓[/green] Initialized {escape(str(cfg.git_dir))}")


# ── add / remove ──────────────────────────────────────────────────────────────


@app.command()
def add(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="File or folder to track"),
) -> None:
    """Add a file or folder to the tracking list and stage it."""
    manager = _manager(ctx)
    with _handle_errors():
        stored = manager.track(path)
    if _app(ctx).verbose:
        console.print(f"[dim]Tracking {escape(stored)}[/dim]")


@app.command()
def remove(
    ctx: typer.Context,
    path: str = typer.Argument(..., help="Tracked file or folder to stop tracking"),
) -> None:
    """Remove a path from the tracking list and unstage it (the file is kept)."""
    from dotmanager.tracking.store import PathNotFoundError, normalize_path

    manager = _manager(ctx)
    with _handle_errors():
        target = normalize_path(path)
        if not os.path.exists(target):
            raise PathNotFoundError(target)
        removed = manager.untrack(target)
    if _app(ctx).verbose:
        console.print(f"[dim]No longer tracking {escape(removed)}[/dim]")


# ── version / global options ──────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"dotmanager {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to config.toml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    debug: bool = typer.Option(False, "--debug", help="Debug logging on stderr"),
) -> None:
    """dotmanager — keep your dotfiles in a bare git repository."""
    from dotmanager.config.loader import ConfigError, load_config

    if debug:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )

    try:
        cfg = load_config(config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    ctx.obj = AppContext(config=cfg, verbose=verbose or debug)
    if verbose or debug:
        console.print(f"[dim]Work-tree: {escape(str(cfg.home))}[/dim]")
        console.print(f"[dim]Git dir: {escape(str(cfg.git_dir))}[/dim]")
        console.print(f"[dim]Tracking list: {escape(str(cfg.list_file))}[/dim]")
