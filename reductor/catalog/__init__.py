"""
Shape catalog: the action shapes every visible action-creator contract offers.
"""

from .model import ActionShape, ShapeCatalog
from .builder import build_catalog

__all__ = [
    "ActionShape",
    "ShapeCatalog",
    "build_catalog",
]
