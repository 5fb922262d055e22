"""Command line interface for git-smart-clean."""

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Annotated, Optional

import questionary
import typer
from loguru import logger
from rich import print
from rich.console import Console
from rich.markup import escape

from git_smart_clean import __version__
from git_smart_clean.age import AgeBand
from git_smart_clean.config import DEFAULT_EXCLUDE, DEFAULT_WORKERS, CleanConfig, parse_exclude
from git_smart_clean.deletion import DeletionOutcome, delete_all, summarize
from git_smart_clean.git import GitError, GitRepo
from git_smart_clean.pipeline import BranchCandidate, Selection, SelectionStatus, select_candidates

app = typer.Typer(help="Smart cleanup tool for merged git branches")
console = Console()

NAME_WIDTH = 40

BAND_COLORS = {
    AgeBand.FRESH: "green",
    AgeBand.AGING: "yellow",
    AgeBand.STALE: "red",
}

BAND_PROMPT_STYLES = {
    AgeBand.FRESH: "fg:ansigreen",
    AgeBand.AGING: "fg:ansiyellow",
    AgeBand.STALE: "fg:ansired",
}


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, debug level when verbose."""
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def get_repo(path: Path) -> GitRepo:
    """Get git repository instance."""
    if not GitRepo.is_repository(path):
        print("[red]✗ Not a git repository[/red]")
        raise typer.Exit(code=1)
    return GitRepo(path)


def age_text(candidate: BranchCandidate) -> str:
    """Parenthesised age shown next to a branch name."""
    if candidate.age_known:
        return f"(committed {candidate.age_label})"
    return f"({candidate.age_label})"


def gather(repo: GitRepo, config: CleanConfig, now: datetime) -> Selection:
    """Run the selection pipeline against the repository."""
    return select_candidates(
        repo.merged_branches(),
        repo.current_branch(),
        config.exclude,
        config.older_than,
        now,
        repo.last_commit_date,
        max_workers=config.workers,
    )


def show_dry_run(candidates: tuple[BranchCandidate, ...]) -> None:
    """Print the branches that would be deleted."""
    console.print("\n[yellow]🔍 DRY RUN - No branches will be deleted[/yellow]\n")
    for candidate in candidates:
        color = BAND_COLORS[candidate.age_band]
        console.print(
            f"  • [bright_black]{escape(candidate.name.ljust(NAME_WIDTH))}[/bright_black] "
            f"[{color}]{escape(age_text(candidate))}[/{color}]"
        )
    console.print(f"\n[yellow]Would delete {len(candidates)} branches[/yellow]")


def choose(candidates: tuple[BranchCandidate, ...]) -> list[BranchCandidate]:
    """Let the user pick branches, all pre-selected. Keeps pipeline order."""
    choices = [
        questionary.Choice(
            title=[
                ("", f"{candidate.name.ljust(NAME_WIDTH)} "),
                (BAND_PROMPT_STYLES[candidate.age_band], age_text(candidate)),
            ],
            value=candidate.name,
            checked=True,
        )
        for candidate in candidates
    ]
    picked = questionary.checkbox(
        "Select branches to delete (Space to select, Enter to confirm):",
        choices=choices,
    ).ask()
    if not picked:
        return []
    picked_names = set(picked)
    return [candidate for candidate in candidates if candidate.name in picked_names]


def confirm_deletion(count: int) -> bool:
    """Ask before deleting, defaulting to no."""
    return bool(questionary.confirm(f"Delete {count} branches?", default=False).ask())


def report_deletions(outcomes: list[DeletionOutcome]) -> None:
    """Print per-branch results and a summary."""
    for outcome in outcomes:
        if outcome.success:
            console.print(f"[green]  ✓ Deleted {escape(outcome.name)}[/green]")
        else:
            console.print(f"[red]  ✗ Failed to delete {escape(outcome.name)}: {escape(outcome.message or '')}[/red]")

    succeeded, failed = summarize(outcomes)
    console.print()
    if succeeded:
        console.print(f"[bold green]✓ Successfully cleaned up {succeeded} branches![/bold green]")
    if failed:
        console.print(f"[bold red]✗ {failed} branch(es) could not be deleted[/bold red]")
    console.print()


def run(config: CleanConfig) -> None:
    """Scan, select and delete merged branches."""
    repo = get_repo(config.path)
    now = datetime.now(timezone.utc)

    with console.status("Scanning branches...", spinner="dots"):
        try:
            selection = gather(repo, config, now)
        except GitError as err:
            print(f"[red]Error:[/red] {escape(str(err))}")
            raise typer.Exit(code=1) from err

    if selection.status == SelectionStatus.NO_BRANCHES_ELIGIBLE:
        console.print("[green]✓ No merged branches to clean up![/green]")
        return

    if selection.filtered_count > 0:
        console.print(
            f"\n[bright_black]Filtered out {selection.filtered_count} branch(es) "
            f"newer than {config.older_than} days[/bright_black]\n"
        )

    if selection.status == SelectionStatus.NO_BRANCHES_OLDER_THAN_THRESHOLD:
        console.print(f"[green]✓ No merged branches older than {config.older_than} days![/green]")
        return

    candidates = selection.candidates
    console.print(f"[green]✓[/green] Found [bold]{len(candidates)}[/bold] merged branches{config.threshold_suffix}")

    if config.dry_run:
        show_dry_run(candidates)
        return

    if config.interactive:
        selected = choose(candidates)
        if not selected:
            console.print("[yellow]No branches selected. Exiting.[/yellow]")
            return
        if not confirm_deletion(len(selected)):
            console.print("[yellow]Cancelled. No branches deleted.[/yellow]")
            return
    else:
        selected = list(candidates)

    console.print()
    with console.status("Deleting branches...", spinner="dots"):
        outcomes = delete_all(selected, repo.delete_local_branch)
    report_deletions(outcomes)


def version_callback(value: bool) -> None:
    if value:
        print(f"git-smart-clean {__version__}")
        raise typer.Exit()


@app.command()
def clean(
    path: Annotated[Path, typer.Option(help="Path to git repository")] = Path("."),
    dry_run: bool = typer.Option(False, "--dry-run", "-d", help="Preview without deleting"),
    older_than: Optional[int] = typer.Option(
        None, "--older-than", min=0, metavar="DAYS", help="Only branches older than DAYS days"
    ),
    exclude: str = typer.Option(
        DEFAULT_EXCLUDE,
        "--exclude",
        envvar="GIT_SMART_CLEAN_EXCLUDE",
        help="Branches to exclude (comma-separated)",
    ),
    workers: int = typer.Option(
        DEFAULT_WORKERS,
        "--workers",
        min=1,
        envvar="GIT_SMART_CLEAN_WORKERS",
        help="Parallel commit date lookups",
    ),
    no_interactive: bool = typer.Option(
        False, "--no-interactive", "-y", help="Delete every candidate without prompting"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Clean up local branches merged into the current branch."""
    configure_logging(verbose)
    config = CleanConfig(
        path=path,
        dry_run=dry_run,
        older_than=older_than,
        exclude=parse_exclude(exclude),
        workers=workers,
        interactive=not no_interactive,
        verbose=verbose,
    )
    logger.debug(f"Running with {config}")
    try:
        run(config)
    except typer.Exit:
        raise
    except Exception as err:
        logger.opt(exception=err).debug("Unexpected failure")
        print(f"[red]Error:[/red] {escape(str(err))}")
        raise typer.Exit(code=1) from err


if __name__ == "__main__":
    app()
