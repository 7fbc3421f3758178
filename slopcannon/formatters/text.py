"""Text helpers."""


def pluralize(count: int, noun: str) -> str:
    """``1 worktree``, ``2 worktrees``."""
    return f"{count} {noun}{'' if count == 1 else 's'}"
