"""Command-line argument parsing for slopcannon."""

import argparse
import sys

from slopcannon.__version__ import __version__
from slopcannon.constants import APP_NAME, TAGLINE

EXIT_USAGE = 1

# Accepted command words and what they run
COMMANDS = {
    "cleanup": "cleanup",
    "clean": "cleanup",
    "config": "config",
}

EPILOG = f"""\
commands:
  (none)              interactive worktree creation, then launch Claude Code
  cleanup, clean      clean up merged/stale worktrees
  config              configure settings

what it does:
  git worktree add -b <branch> ../repo-branch origin/main
  claude --dangerously-skip-permissions
"""


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(EXIT_USAGE, f"{self.prog}: error: {message}\n")


def build_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog=APP_NAME,
        description=f"{APP_NAME} - {TAGLINE}",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("command", nargs="?", metavar="command", help="cleanup|clean|config")
    parser.add_argument(
        "-v", "-V", "--version", action="version", version=f"{APP_NAME} {__version__}"
    )
    parser.add_argument(
        "--path-file",
        metavar="PATH",
        help="Write the worktree path to PATH instead of launching Claude Code (for shell functions)",
    )
    parser.add_argument("--verbose", action="store_true", help="Show verbose output")
    parser.add_argument(
        "--debug", action="store_true", help="Show debug information and write a log file"
    )
    return parser


def parse_args(argv=None):
    """Parse command-line arguments.

    Unknown positional words are a usage error; unknown options are kept in
    ``ignored_options``.
    """
    parser = build_parser()
    args, extras = parser.parse_known_args(argv)

    unknown = [word for word in extras if not word.startswith("-")]
    if args.command is not None and args.command not in COMMANDS:
        unknown.insert(0, args.command)
    if unknown:
        parser.error(f"Unknown command: {unknown[0]}\nRun '{APP_NAME} --help' for usage.")

    args.command = COMMANDS.get(args.command) if args.command else None
    args.ignored_options = [word for word in extras if word.startswith("-")]
    return args
