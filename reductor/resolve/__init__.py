"""
Binding resolution: reducer handlers -> action shapes.
"""

from .resolver import (
    ResolvedBinding,
    ResolutionResult,
    resolve_handler,
    resolve_reducer,
    find_duplicate_tags,
)

__all__ = [
    "ResolvedBinding",
    "ResolutionResult",
    "resolve_handler",
    "resolve_reducer",
    "find_duplicate_tags",
]
