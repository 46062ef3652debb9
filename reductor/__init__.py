"""
reductor

Generates verified dispatchers for reducers from declared action creators.
Mismatched tags, argument lists and duplicate handlers are reported at
generation time instead of surfacing as runtime surprises.
"""

__version__ = "0.1.0"

from .core import ActionValue, Reducer, GenerationError, ActionCreatorError
from .annotations import action_creator, action, auto_reducer, handles, initial_state
from .runtime import builder_for, generated_builder, reducer_impl, create_reducer

__all__ = [
    "ActionValue",
    "Reducer",
    "GenerationError",
    "ActionCreatorError",
    "action_creator",
    "action",
    "auto_reducer",
    "handles",
    "initial_state",
    "builder_for",
    "generated_builder",
    "reducer_impl",
    "create_reducer",
]
