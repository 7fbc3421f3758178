"""Command-line entry point for slopcannon"""

import sys

from rich.console import Console

from slopcannon.cli.args import parse_args
from slopcannon.config import load_config
from slopcannon.constants import ASSISTANT_INSTALL_HINT
from slopcannon.core.workflow import WorktreeWorkflow
from slopcannon.exceptions import MissingDependencyError, NotARepositoryError
from slopcannon.logging_config import get_logger, setup_logging
from slopcannon.services.launcher import launch_assistant, require_executable, write_path_file
from slopcannon.ui import play_activation, run_cleanup_flow, run_config_editor, run_create_flow

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def run(args) -> int:
    """Dispatch the parsed command; returns the process exit code."""
    config = load_config()
    config.verbose = args.verbose
    config.debug = args.debug

    if args.command == "config":
        run_config_editor(config, console)
        return EXIT_OK

    require_executable("git", "Install git: https://git-scm.com/downloads")
    workflow = WorktreeWorkflow(config)

    if args.command == "cleanup":
        run_cleanup_flow(workflow, console)
        return EXIT_OK

    # Only needed when it will actually be launched
    if not args.path_file:
        require_executable(config.assistant_command[0], ASSISTANT_INSTALL_HINT)

    worktree_path = run_create_flow(workflow, console)
    if not worktree_path:
        return EXIT_OK

    if args.path_file:
        write_path_file(args.path_file, worktree_path)
        return EXIT_OK

    play_activation(config.activation_style, worktree_path, console)
    return launch_assistant(config.assistant_command, worktree_path)


def main(argv=None) -> int:
    """Main entry point for the application."""
    args = parse_args(argv)

    # The cleanup picker owns the terminal, so its logs go to the file
    setup_logging(verbose=args.verbose, debug=args.debug, tui_mode=args.command == "cleanup")
    for option in args.ignored_options:
        logger.warning(f"Ignoring unknown option {option}")

    try:
        return run(args)
    except KeyboardInterrupt:
        console.print("\n[yellow]Cancelled.[/yellow]")
        return EXIT_OK
    except NotARepositoryError as e:
        logger.debug(str(e))
        err_console.print("[red]Not inside a git repository.[/red]")
        err_console.print("Run this from inside a git repo.")
        return EXIT_FAILURE
    except MissingDependencyError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        return EXIT_FAILURE
    except Exception as e:
        err_console.print(f"[red]Error: {e}[/red]")
        if args.debug:
            err_console.print_exception()
        return EXIT_FAILURE


if __name__ == "__main__":
    sys.exit(main())
