"""Version information for slopcannon."""

__version__ = "0.4.0"
