"""Formatting utilities for slopcannon.

- candidate: cleanup candidate labels and tags
- text: small text helpers
"""

from .candidate import format_candidate, format_candidate_tags, format_review_request
from .text import pluralize

__all__ = [
    "format_candidate",
    "format_candidate_tags",
    "format_review_request",
    "pluralize",
]
