"""External command runner for slopcannon."""

from typing import Optional, Sequence

import git

from slopcannon.exceptions import ExternalCommandError
from slopcannon.logging_config import get_logger

logger = get_logger(__name__)

EXIT_NOT_FOUND = 127


class CommandRunner:
    """Runs one external program synchronously.

    :meth:`run` raises :class:`ExternalCommandError` on a nonzero exit.
    :meth:`probe` turns the exit status into a boolean and never raises for it.
    """

    def __init__(self, program: str = "git", cwd: Optional[str] = None):
        """Initialize the runner.

        Args:
            program: Executable to run (``git`` or ``gh``)
            cwd: Default working directory for commands
        """
        self.program = program
        self.cwd = cwd

    def _execute(self, args: Sequence[str], cwd: Optional[str]) -> tuple[int, str, str]:
        """Run the command and return (status, stdout, stderr)."""
        command = [self.program, *args]
        logger.debug(f"$ {' '.join(command)}")
        try:
            status, stdout, stderr = git.Git(cwd or self.cwd).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
            )
        except git.exc.GitCommandNotFound as e:
            raise ExternalCommandError(self._verb(args), str(e.stderr or e).strip(), EXIT_NOT_FOUND)
        return status, stdout, stderr

    def _verb(self, args: Sequence[str]) -> str:
        return f"{self.program} {args[0]}" if args else self.program

    def run(self, args: Sequence[str], cwd: Optional[str] = None) -> str:
        """Run a command and return its trimmed stdout.

        Raises:
            ExternalCommandError: if the command exits with a nonzero status
        """
        status, stdout, stderr = self._execute(args, cwd)
        if status != 0:
            stderr = (stderr or "").strip()
            logger.debug(f"{self._verb(args)} exited {status}: {stderr}")
            raise ExternalCommandError(self._verb(args), stderr, status)
        return (stdout or "").strip()

    def probe(self, args: Sequence[str], cwd: Optional[str] = None) -> bool:
        """Run a check command; True iff it exits with status 0."""
        try:
            status, _, _ = self._execute(args, cwd)
        except ExternalCommandError as e:
            logger.debug(f"Probe {e.verb} could not run: {e.stderr}")
            return False
        return status == 0

    def run_optional(self, args: Sequence[str], cwd: Optional[str] = None) -> Optional[str]:
        """Run a lookup command; its trimmed stdout, or None on failure."""
        try:
            return self.run(args, cwd)
        except ExternalCommandError:
            return None
