"""Interactive worktree cleanup."""

from typing import Callable, List, Optional

from rich.console import Console

from slopcannon.constants import APP_NAME
from slopcannon.core.workflow import WorktreeWorkflow
from slopcannon.exceptions import ExternalCommandError
from slopcannon.formatters import pluralize
from slopcannon.logging_config import get_logger
from slopcannon.models.worktree import CleanupCandidate, ReclaimResult

logger = get_logger(__name__)

Selector = Callable[[List[CleanupCandidate]], Optional[List[CleanupCandidate]]]


def run_cleanup_flow(
    workflow: WorktreeWorkflow,
    console: Optional[Console] = None,
    selector: Optional[Selector] = None,
) -> Optional[ReclaimResult]:
    """
    Scan linked worktrees, let the user pick some, and remove them.

    Args:
        workflow: Workflow bound to the current directory
        console: Console to talk to
        selector: Picks the candidates to remove; defaults to the TUI picker

    Returns:
        The reclaim result, or None if nothing was removed

    Raises:
        NotARepositoryError: if not run inside a repository
    """
    console = console or Console()
    if selector is None:
        from slopcannon.ui.cleanup_app import select_candidates

        selector = select_candidates

    console.rule(f"[bold]{APP_NAME} cleanup[/bold]")
    info = workflow.inspect()

    if not workflow.github_service(info).enabled:
        console.print("[yellow]ℹ gh CLI not found and no GitHub token - PR detection disabled[/yellow]")

    with console.status("Scanning worktrees..."):
        try:
            candidates = workflow.scan_worktrees(info)
        except ExternalCommandError as e:
            console.print(f"[red]Could not list worktrees: {e}[/red]")
            console.print("Cleanup failed.")
            return None

    if not candidates:
        console.print("No linked worktrees found.")
        console.print("Nothing to clean up.")
        return None

    console.print(f"Found {pluralize(len(candidates), 'linked worktree')}.")

    selected = selector(candidates)
    if selected is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return None
    if not selected:
        console.print("Nothing selected.")
        return None

    with console.status("Removing worktrees..."):
        result = workflow.reclaim(info, selected)

    console.print(f"[green]Removed {pluralize(result.removed, 'worktree')}.[/green]")
    for error in result.errors:
        console.print(f"[red]{error}[/red]")

    console.print("Done.")
    return result
