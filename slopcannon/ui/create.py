"""Interactive worktree creation."""

from typing import Optional

from rich.console import Console
from rich.prompt import Confirm, Prompt
from rich.table import Table

from slopcannon.constants import APP_NAME
from slopcannon.core.workflow import WorktreeWorkflow
from slopcannon.exceptions import ExternalCommandError
from slopcannon.logging_config import get_logger
from slopcannon.models.repository import BranchEntry, RepositoryInfo

logger = get_logger(__name__)


def _branch_table(info: RepositoryInfo) -> Table:
    table = Table(show_header=False, box=None, padding=(0, 1))
    table.add_column(justify="right", style="dim")
    table.add_column()
    table.add_column(style="dim")
    for index, entry in enumerate(info.branches, start=1):
        if entry.name == info.default_branch:
            hint = "default"
        elif entry.is_remote:
            hint = entry.ref
        else:
            hint = ""
        table.add_row(str(index), entry.name, hint)
    return table


def resolve_branch_choice(info: RepositoryInfo, answer: str) -> Optional[BranchEntry]:
    """Match a typed answer (list number or branch name) to a branch."""
    answer = answer.strip()
    if answer.isdigit():
        index = int(answer)
        if 1 <= index <= len(info.branches):
            return info.branches[index - 1]
    return info.find_branch(answer)


def choose_base_branch(console: Console, info: RepositoryInfo) -> BranchEntry:
    """Ask for the base branch until a known one is given."""
    console.print(_branch_table(info))
    while True:
        answer = Prompt.ask("Base branch", default=info.default_branch, console=console)
        entry = resolve_branch_choice(info, answer)
        if entry is not None:
            return entry
        # The default branch may not exist yet (fresh repository)
        if answer == info.default_branch:
            return BranchEntry(name=answer, ref=answer)
        console.print(f"[red]Unknown branch: {answer}[/red]")


def ask_branch_name(console: Console, workflow: WorktreeWorkflow, info: RepositoryInfo) -> str:
    """Ask for the new branch name until it passes validation."""
    while True:
        name = Prompt.ask("New branch name [dim](e.g. feat/my-feature)[/dim]", console=console).strip()
        reason = workflow.validate_branch_name(info, name)
        if reason is None:
            return name
        console.print(f"[red]{reason}[/red]")


def run_create_flow(workflow: WorktreeWorkflow, console: Optional[Console] = None) -> Optional[str]:
    """
    Walk the user through creating a worktree.

    Args:
        workflow: Workflow bound to the current directory
        console: Console to talk to

    Returns:
        Path of the new worktree, or None if cancelled or creation failed

    Raises:
        NotARepositoryError: if not run inside a repository
    """
    console = console or Console()
    console.rule(f"[bold]{APP_NAME}[/bold]")

    info = workflow.inspect()
    remote = f" [dim]({info.remote_url})[/dim]" if info.remote_url else ""
    console.print(f"[bold]{info.repo_name}[/bold]{remote}")

    try:
        base = choose_base_branch(console, info)
        branch = ask_branch_name(console, workflow, info)
        console.print(f"[cyan]$ {workflow.create_command(info, base.ref, branch)}[/cyan]")
        if not Confirm.ask("Create worktree?", default=True, console=console):
            console.print("[yellow]Cancelled.[/yellow]")
            return None
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Cancelled.[/yellow]")
        return None

    with console.status("Creating worktree..."):
        try:
            path = workflow.create_worktree(info, base.ref, branch)
        except ExternalCommandError as e:
            logger.error(f"Worktree creation failed: {e}")
            console.print(f"[red]{e}[/red]")
            console.print("Worktree creation failed.")
            return None

    console.print(f"[green]Ready:[/green] {path}")
    return path
