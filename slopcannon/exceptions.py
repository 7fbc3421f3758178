"""Custom exceptions for slopcannon"""

from typing import Optional


class SlopcannonError(Exception):
    """Base exception for all slopcannon errors."""
    pass


class NotARepositoryError(SlopcannonError):
    """Raised when the working directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None, message: Optional[str] = None):
        self.path = path
        self.message = message

        error_msg = "Not inside a git repository"
        if path:
            error_msg += f": {path}"
        if message:
            error_msg += f" ({message})"

        super().__init__(error_msg)


class ExternalCommandError(SlopcannonError):
    """Raised when an external command exits with a nonzero status."""

    def __init__(self, verb: str, stderr: str = "", exit_code: Optional[int] = None):
        self.verb = verb
        self.stderr = stderr
        self.exit_code = exit_code

        error_msg = f"{verb} failed"
        if stderr:
            error_msg += f": {stderr}"
        elif exit_code is not None:
            error_msg += f" with exit code {exit_code}"

        super().__init__(error_msg)


class ValidationError(SlopcannonError, ValueError):
    """Raised when a configuration value is rejected."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid {field}: {message}")


class MissingDependencyError(SlopcannonError):
    """Raised when a required executable is not on PATH."""

    def __init__(self, name: str, hint: Optional[str] = None):
        self.name = name
        self.hint = hint

        error_msg = f"{name} is not installed."
        if hint:
            error_msg += f"\n{hint}"

        super().__init__(error_msg)
