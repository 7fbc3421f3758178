"""Interactive front end for slopcannon."""

from .create import run_create_flow
from .cleanup import run_cleanup_flow
from .config_editor import run_config_editor
from .activation import play_activation

__all__ = [
    "run_create_flow",
    "run_cleanup_flow",
    "run_config_editor",
    "play_activation",
]
