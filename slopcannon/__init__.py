"""
slopcannon - Create a git worktree. Launch Claude Code. Ship slop.
"""

from .__version__ import __version__
from .core import WorktreeWorkflow
from .cli.main import main

__all__ = ["WorktreeWorkflow", "main", "__version__"]
