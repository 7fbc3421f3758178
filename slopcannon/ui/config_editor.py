"""Interactive config editor."""

import shlex
from dataclasses import replace
from typing import Optional

from rich.console import Console
from rich.prompt import Prompt

from slopcannon.config import Config, save_config
from slopcannon.constants import ACTIVATION_STYLES, APP_NAME
from slopcannon.exceptions import ValidationError


def _ask_valid(console: Console, config: Config, field_name: str, label: str, default: str, convert=str):
    """Prompt until the answer passes Config validation; returns the converted value."""
    while True:
        answer = Prompt.ask(label, default=default, console=console)
        try:
            value = convert(answer)
            replace(config, **{field_name: value})
        except (ValidationError, ValueError) as e:
            console.print(f"[red]{e}[/red]")
            continue
        return value


def run_config_editor(config: Config, console: Optional[Console] = None) -> bool:
    """Ask for each editable setting and save. Returns False if cancelled."""
    console = console or Console()
    console.rule(f"[bold]{APP_NAME} config[/bold]")

    for value, label in ACTIVATION_STYLES.items():
        console.print(f"  [cyan]{value}[/cyan] [dim]{label}[/dim]")

    try:
        activation_style = Prompt.ask(
            "Activation style",
            choices=list(ACTIVATION_STYLES),
            default=config.activation_style,
            console=console,
        )
        remote = _ask_valid(console, config, "remote", "Remote", config.remote)
        assistant_command = _ask_valid(
            console,
            config,
            "assistant_command",
            "Assistant command",
            shlex.join(config.assistant_command),
            convert=shlex.split,
        )
        # Blank keeps the current token; "-" clears it
        token = Prompt.ask(
            "GitHub token [dim](blank to keep, - to clear)[/dim]",
            default="",
            password=True,
            show_default=False,
            console=console,
        ).strip()
    except (KeyboardInterrupt, EOFError):
        console.print("\n[yellow]Cancelled.[/yellow]")
        return False

    config.activation_style = activation_style
    config.remote = remote.strip()
    config.assistant_command = assistant_command
    if token == "-":
        config.github_token = None
    elif token:
        config.github_token = token

    path = save_config(config)
    console.print(f"Config saved to {path}")
    return True
