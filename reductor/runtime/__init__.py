"""
Runtime support: action builders and materialized reducers.
"""

from .actions import SynthesizedBuilder, builder_for, clear_builder_cache, generated_builder, synthesize_builder
from .materialize import materialize, reducer_impl, create_reducer

__all__ = [
    "SynthesizedBuilder",
    "builder_for",
    "clear_builder_cache",
    "generated_builder",
    "synthesize_builder",
    "materialize",
    "reducer_impl",
    "create_reducer",
]
