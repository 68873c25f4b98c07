"""Main CLI interface for git-scrub."""

import re
from pathlib import Path
from typing import Optional

import click
import git as gitpython
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from git_scrub import __version__
from git_scrub.cli.log_setup import setup_logging
from git_scrub.core.config import load_settings
from git_scrub.core.coordinator import CheckoutCoordinator
from git_scrub.core.errors import ScrubError
from git_scrub.core.log_reader import CommitLogReader
from git_scrub.core.navigator import HistoryNavigator
from git_scrub.core.runner import SubprocessRunner
from git_scrub.models.commit import CommitHistory
from git_scrub.models.settings import ScrubSettings

console = Console()

SCRUB_HELP = (
    "[bold]n[/bold] older  [bold]p[/bold] newer  [bold]<index>[/bold] jump  "
    "[bold]@<position>[/bold] slider position  [bold]<hash>[/bold] select commit  "
    "[bold]r[/bold] reload  [bold]q[/bold] quit"
)

INDEX_PATTERN = re.compile(r"-?[0-9]+")


def _find_repo_root(repo_path: Optional[str]) -> Path:
    """Find the working tree containing ``repo_path`` (default: cwd) or exit."""
    start = Path(repo_path).resolve() if repo_path else Path.cwd()
    try:
        repo = gitpython.Repo(start, search_parent_directories=True)
    except (gitpython.InvalidGitRepositoryError, gitpython.NoSuchPathError) as e:
        console.print(f"[red]Error: Not a git repository: {start}[/red]")
        raise click.Abort() from e

    if repo.working_tree_dir is None:
        console.print(f"[red]Error: {start} is a bare repository[/red]")
        raise click.Abort()
    return Path(repo.working_tree_dir)


def _settings(ctx: click.Context) -> ScrubSettings:
    """Settings for this invocation, loaded on first use."""
    if "settings" not in ctx.obj:
        options = ctx.obj["options"]
        try:
            ctx.obj["settings"] = load_settings(
                options["config_file"], options["overrides"]
            )
        except ScrubError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
            raise click.Abort() from e
    return ctx.obj["settings"]


def _repo_path(ctx: click.Context) -> Path:
    """Repository for this invocation, found on first use."""
    if "repo_path" not in ctx.obj:
        ctx.obj["repo_path"] = _find_repo_root(ctx.obj["options"]["repo_path"])
    return ctx.obj["repo_path"]


def _make_navigator(ctx: click.Context) -> HistoryNavigator:
    settings = _settings(ctx)
    runner = ctx.obj["runner"]
    return HistoryNavigator(
        _repo_path(ctx),
        CommitLogReader(settings, runner),
        CheckoutCoordinator(settings, runner),
    )


def _load_or_exit(navigator: HistoryNavigator) -> CommitHistory:
    try:
        return navigator.load()
    except ScrubError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise click.Abort() from e


def _head_sha(repo_path: Path) -> Optional[str]:
    repo = gitpython.Repo(repo_path)
    if not repo.head.is_valid():
        return None
    return repo.head.commit.hexsha


def _describe_head(repo: gitpython.Repo) -> str:
    if not repo.head.is_valid():
        return "(no commits)"
    if repo.head.is_detached:
        return f"detached at {repo.head.commit.hexsha[:7]}"
    return repo.active_branch.name


def _show_selection(navigator: HistoryNavigator) -> None:
    commit = navigator.selected_commit
    if commit is None:
        console.print("[yellow]No commits to show[/yellow]")
        return

    last = len(navigator.history) - 1
    # No checkout happens until the selection changes, so HEAD may be elsewhere
    repo = gitpython.Repo(navigator.repo_path)
    head = _describe_head(repo)
    if not repo.head.is_valid() or repo.head.commit.hexsha != commit.id:
        head += " [yellow](not the selected commit)[/yellow]"
    body = (
        f"[bold]Commit:[/bold] {commit.id}\n"
        f"[bold]Author:[/bold] {escape(commit.author)}\n"
        f"[bold]Date:[/bold]   {commit.date:%Y-%m-%d %H:%M:%S %z} ({commit.age()})\n"
        f"[bold]HEAD:[/bold] {head}\n"
        f"[bold]Position:[/bold] {navigator.selected_index} / {last}"
    )
    console.print(Panel(body, title=escape(navigator.title), expand=False))


def _apply_scrub_command(navigator: HistoryNavigator, text: str) -> bool:
    """Apply one line of scrub input; return False when the user wants to quit.

    Raises ScrubError if a fetch or checkout fails and ValueError for a
    malformed slider position.
    """
    text = text.strip()
    if not text:
        return True
    if text in ("q", "quit", "exit"):
        return False

    if text in ("n", "next"):
        navigator.step(1)
    elif text in ("p", "prev"):
        navigator.step(-1)
    elif text in ("r", "reload"):
        navigator.load()
    elif text.startswith("@"):
        navigator.set_position(float(text[1:]))
    elif INDEX_PATTERN.fullmatch(text):
        navigator.set_index(int(text))
    elif not navigator.select_commit(text):
        console.print(f"[yellow]No commit matches {escape(repr(text))}[/yellow]")
    return True


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--repo",
    "repo_path",
    type=click.Path(exists=True, file_okay=False),
    help="Path to the repository (default: the one containing the current directory)",
)
@click.option("--branch", help="Default branch checked out for the newest commit")
@click.option(
    "--limit", type=click.IntRange(min=1), help="Maximum number of commits to read"
)
@click.option(
    "--timeout", type=click.FloatRange(min=0, min_open=True), help="Seconds to wait for git"
)
@click.option(
    "--config",
    "config_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON settings file",
)
@click.option("--verbose", "-v", count=True, help="Increase log verbosity")
@click.pass_context
def main(
    ctx: click.Context,
    repo_path: Optional[str],
    branch: Optional[str],
    limit: Optional[int],
    timeout: Optional[float],
    config_file: Optional[str],
    verbose: int,
):
    """git-scrub - step through a repository's history one checkout at a time."""
    setup_logging(verbose)

    # Repository and settings are resolved by the commands that need them,
    # so subcommand --help works anywhere
    ctx.ensure_object(dict)
    ctx.obj.setdefault("runner", SubprocessRunner())
    ctx.obj["options"] = {
        "repo_path": repo_path,
        "config_file": Path(config_file) if config_file else None,
        "overrides": {
            "default_branch": branch,
            "history_limit": limit,
            "timeout": timeout,
        },
    }


@main.command()
@click.pass_context
def log(ctx: click.Context):
    """List the commits that can be scrubbed through."""
    navigator = _make_navigator(ctx)
    history = _load_or_exit(navigator)

    head = _head_sha(navigator.repo_path)
    table = Table(title=escape(str(navigator.repo_path)))
    table.add_column("#", justify="right")
    table.add_column("Commit", style="yellow")
    table.add_column("Message")
    table.add_column("Author", style="cyan")
    table.add_column("Date", style="dim")

    for index, commit in enumerate(history):
        marker = "*" if commit.id == head else ""
        table.add_row(
            f"{marker}{index}",
            commit.short_id,
            escape(commit.message),
            escape(commit.author),
            commit.age(),
        )

    console.print(table)
    console.print(f"[bold]Total commits:[/bold] {len(history)}")


@main.command()
@click.argument("index", type=int)
@click.pass_context
def checkout(ctx: click.Context, index: int):
    """Check out the commit at INDEX (0 is the newest, on the default branch)."""
    navigator = _make_navigator(ctx)
    history = _load_or_exit(navigator)
    if not history:
        console.print("[yellow]No commits to check out[/yellow]")
        return

    target = history.clamp(index)
    try:
        ref = navigator.coordinator.reconcile(navigator.repo_path, history, target)
    except ScrubError as e:
        console.print(f"[red]Checkout failed: {escape(str(e))}[/red]")
        raise click.Abort() from e

    commit = history[target]
    console.print(
        f"[green]Checked out {ref}[/green] (index {target}): {escape(commit.message)}"
    )


@main.command()
@click.pass_context
def scrub(ctx: click.Context):
    """Interactively step through history, checking out each selected commit."""
    navigator = _make_navigator(ctx)
    _load_or_exit(navigator)
    console.print(SCRUB_HELP)

    while True:
        _show_selection(navigator)
        try:
            text = click.prompt("scrub", default="", show_default=False)
        except click.Abort:
            break

        try:
            if not _apply_scrub_command(navigator, text):
                break
        except ScrubError as e:
            console.print(f"[red]Error: {escape(str(e))}[/red]")
        except ValueError:
            position = text.strip()[1:]
            console.print(
                f"[yellow]Not a slider position: {escape(repr(position))}[/yellow]"
            )


@main.command()
@click.pass_context
def status(ctx: click.Context):
    """Show where the repository's HEAD is and how much history there is."""
    settings = _settings(ctx)
    repo_path = _repo_path(ctx)
    repo = gitpython.Repo(repo_path)
    head = _describe_head(repo)

    console.print(f"[bold]Repository:[/bold] {escape(str(repo_path))}")
    console.print(f"[bold]HEAD:[/bold] {head}")
    console.print(f"[bold]Default branch:[/bold] {settings.default_branch}")

    dirty = repo.is_dirty()
    console.print(f"[bold]Uncommitted changes:[/bold] {'Yes' if dirty else 'No'}")
    if dirty:
        console.print(
            "[yellow]Uncommitted changes may be overwritten or block checkouts[/yellow]"
        )

    navigator = _make_navigator(ctx)
    try:
        history = navigator.load()
    except ScrubError as e:
        console.print(f"[bold]Total commits:[/bold] unknown ({escape(str(e))})")
        return
    console.print(f"[bold]Total commits:[/bold] {len(history)}")


if __name__ == "__main__":
    main()
