"""Launch banner shown before the assistant starts."""

import time
from typing import Optional

from rich.console import Console
from rich.live import Live
from rich.text import Text

from slopcannon.constants import ACTIVATION_CANNON, ACTIVATION_TYPEWRITER

CANNON = "▄█▀"
SHOT = "●"
BLAST = "✸"


def _launch_message(worktree_path: str) -> str:
    return f"Launching Claude Code in {worktree_path}"


def fire_cannon(console: Console, worktree_path: str, width: int = 32, delay: float = 0.02) -> None:
    with Live(console=console, transient=True, refresh_per_second=60) as live:
        for step in range(width):
            frame = Text(CANNON, style="bold")
            frame.append(" " * step)
            frame.append(SHOT, style="bold red")
            live.update(frame)
            time.sleep(delay)
    console.print(Text.assemble((CANNON, "bold"), (" " * width), (BLAST, "bold yellow")))
    console.print(f"[bold green]{_launch_message(worktree_path)}[/bold green]")


def type_out(console: Console, worktree_path: str, delay: float = 0.02) -> None:
    for char in _launch_message(worktree_path):
        console.print(char, end="", style="bold green", highlight=False)
        time.sleep(delay)
    console.print()


def play_activation(style: str, worktree_path: str, console: Optional[Console] = None) -> None:
    """Show the configured activation style; plain text off a terminal."""
    console = console or Console()
    if style == ACTIVATION_CANNON and console.is_terminal:
        fire_cannon(console, worktree_path)
    elif style == ACTIVATION_TYPEWRITER and console.is_terminal:
        type_out(console, worktree_path)
    elif style in (ACTIVATION_CANNON, ACTIVATION_TYPEWRITER):
        console.print(_launch_message(worktree_path))
