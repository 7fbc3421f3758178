"""Core functionality for slopcannon."""

from .workflow import WorktreeWorkflow

__all__ = ["WorktreeWorkflow"]
