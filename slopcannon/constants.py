"""Shared constants for slopcannon."""

from typing import Dict, List

APP_NAME = "slopcannon"
TAGLINE = "Create a git worktree. Launch Claude Code. Ship slop."

CONFIG_DIR_NAME = ".slopcannon"
CONFIG_FILE_NAME = "config.json"

DEFAULT_REMOTE = "origin"
FALLBACK_DEFAULT_BRANCH = "main"
DEFAULT_BRANCH_CANDIDATES: List[str] = ["main", "master"]

HEADS_PREFIX = "refs/heads/"
REMOTES_PREFIX = "refs/remotes/"
SYMBOLIC_HEAD = "HEAD"

DEFAULT_ASSISTANT_COMMAND: List[str] = ["claude", "--dangerously-skip-permissions"]
ASSISTANT_INSTALL_HINT = "Install: https://docs.anthropic.com/en/docs/claude-code"

# Review request state that marks a branch as landed
REVIEW_STATE_MERGED = "MERGED"

# Activation styles
ACTIVATION_CANNON = "cannon"
ACTIVATION_TYPEWRITER = "typewriter"
ACTIVATION_OFF = "off"

ACTIVATION_STYLES: Dict[str, str] = {
    ACTIVATION_CANNON: "Cannon fire",
    ACTIVATION_TYPEWRITER: "Typewriter",
    ACTIVATION_OFF: "Off",
}

# Label for worktrees without a branch
SYMBOL_DETACHED = "(detached)"
