"""Configuration handling for slopcannon"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from slopcannon.constants import (
    ACTIVATION_CANNON,
    ACTIVATION_STYLES,
    CONFIG_DIR_NAME,
    CONFIG_FILE_NAME,
    DEFAULT_ASSISTANT_COMMAND,
    DEFAULT_REMOTE,
)
from slopcannon.exceptions import ValidationError
from slopcannon.logging_config import get_logger

logger = get_logger(__name__)

# Keys written to the config file; verbose/debug only live on the command line
PERSISTED_FIELDS = ("activation_style", "remote", "assistant_command", "github_token")


@dataclass
class Config:
    """Configuration for slopcannon with validation."""

    # Shown after the worktree is created
    activation_style: str = ACTIVATION_CANNON

    # Remote used for default branch detection and remote-gone checks
    remote: str = DEFAULT_REMOTE

    # Command started inside the new worktree
    assistant_command: List[str] = field(default_factory=lambda: list(DEFAULT_ASSISTANT_COMMAND))

    # GitHub integration (falls back to GITHUB_TOKEN)
    github_token: Optional[str] = None

    # Execution modes
    verbose: bool = False
    debug: bool = False

    def __post_init__(self):
        """Validate configuration after initialization."""
        self._validate_activation_style()
        self._validate_remote()
        self._validate_assistant_command()
        self._validate_github_token()

    def _validate_activation_style(self):
        """Validate activation_style is one of the known styles."""
        if self.activation_style not in ACTIVATION_STYLES:
            allowed = list(ACTIVATION_STYLES)
            raise ValidationError(
                "activation_style", f"must be one of {allowed}, got '{self.activation_style}'"
            )

    def _validate_remote(self):
        """Validate remote is a non-empty name."""
        if not isinstance(self.remote, str) or not self.remote.strip():
            raise ValidationError("remote", "cannot be empty")
        self.remote = self.remote.strip()

    def _validate_assistant_command(self):
        """Validate assistant_command is a non-empty list of strings."""
        if (
            not isinstance(self.assistant_command, list)
            or not self.assistant_command
            or not all(isinstance(part, str) and part for part in self.assistant_command)
        ):
            raise ValidationError("assistant_command", "must be a non-empty list of strings")

    def _validate_github_token(self):
        """Validate github_token is a string when set."""
        if self.github_token is not None and not isinstance(self.github_token, str):
            raise ValidationError("github_token", "must be a string")

    @property
    def token(self) -> Optional[str]:
        """GitHub token from config or environment."""
        return self.github_token or os.environ.get("GITHUB_TOKEN")

    def to_dict(self) -> dict:
        """Persisted settings as a dictionary."""
        return {key: getattr(self, key) for key in PERSISTED_FIELDS}

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary, ignoring unknown keys."""
        known_fields = set(PERSISTED_FIELDS) | {"verbose", "debug"}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def get_config_path() -> Path:
    """Path of the on-disk config file."""
    return Path.home() / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> Config:
    """Load the config file.

    Never fails: a missing or unreadable file gives the defaults, and each
    invalid value falls back to its default on its own.
    """
    path = path or get_config_path()
    raw: dict = {}
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            raw = data
        else:
            logger.warning(f"Ignoring config file {path}: expected a JSON object")
    except FileNotFoundError:
        logger.debug(f"No config file at {path}, using defaults")
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read config file {path}: {e}")

    defaults = Config()
    values = {}
    for key in PERSISTED_FIELDS:
        if key not in raw:
            continue
        try:
            Config(**{key: raw[key]})
        except (ValidationError, TypeError) as e:
            logger.warning(f"Ignoring config value for {key}: {e}")
            continue
        values[key] = raw[key]

    return Config.from_dict({**defaults.to_dict(), **values})


def save_config(config: Config, path: Optional[Path] = None) -> Path:
    """Write the persisted settings to disk and return the path."""
    path = path or get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")
    logger.info(f"Saved config to {path}")
    return path
