"""Starts the coding assistant inside a new worktree."""

import shutil
import signal
import subprocess
from pathlib import Path
from typing import List, Union

from slopcannon.constants import ASSISTANT_INSTALL_HINT
from slopcannon.exceptions import MissingDependencyError
from slopcannon.logging_config import get_logger

logger = get_logger(__name__)


def require_executable(name: str, hint: str = "") -> str:
    """Resolve an executable on PATH.

    Raises:
        MissingDependencyError: if it is not installed
    """
    resolved = shutil.which(name)
    if resolved is None:
        raise MissingDependencyError(name, hint or None)
    return resolved


def launch_assistant(command: List[str], cwd: str) -> int:
    """Run the assistant in cwd with the terminal attached; return its exit code.

    Raises:
        MissingDependencyError: if the assistant executable is not installed
    """
    require_executable(command[0], ASSISTANT_INSTALL_HINT)
    logger.info(f"Launching {' '.join(command)} in {cwd}")
    # Ctrl-C goes to the assistant while it runs (not SIG_IGN, which the child inherits)
    previous = signal.signal(signal.SIGINT, lambda signum, frame: None)
    try:
        completed = subprocess.run(command, cwd=cwd)
    finally:
        signal.signal(signal.SIGINT, previous)
    logger.debug(f"{command[0]} exited with {completed.returncode}")
    return completed.returncode


def write_path_file(path_file: Union[str, Path], worktree_path: str) -> None:
    """Hand the worktree path to a calling shell function."""
    Path(path_file).write_bytes(worktree_path.encode("utf-8"))
    logger.debug(f"Wrote {worktree_path} to {path_file}")
