"""
Dispatcher generation: resolved bindings -> generated definitions.

Provides:
- generate_reducer: dispatcher + constructor + mirrored builder ops
- generate_builder: builder implementation for an action-creator contract
- select_constructor: constructor selection heuristic
- render_*: deterministic Python source for generated definitions
"""

from .model import DispatchCase, BuilderOp, GeneratedReducer, GeneratedBuilder
from .constructor import select_constructor
from .dispatcher import generate_reducer, generate_builder
from .render import render_module, render_reducer, render_builder

__all__ = [
    "DispatchCase",
    "BuilderOp",
    "GeneratedReducer",
    "GeneratedBuilder",
    "select_constructor",
    "generate_reducer",
    "generate_builder",
    "render_module",
    "render_reducer",
    "render_builder",
]
