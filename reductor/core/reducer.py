"""
Reducer: pure state transition over actions.

A reducer must be:
- Pure (no side effects, no I/O)
- Deterministic (same state and action -> same new state)
- Total (unknown actions return the state unchanged)
"""

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from .action import ActionValue

S = TypeVar("S")


class Reducer(ABC, Generic[S]):
    """
    Base class of hand-written and generated reducers.

    Usage:
        @auto_reducer
        class CounterReducer(Reducer[int]):
            @handles("INC")
            def inc(self, state: int, by: int) -> int:
                return state + by

        reducer = reducer_impl(CounterReducer)()
        new_state = reducer.reduce(0, ActionValue.create("INC", 2))
    """

    @abstractmethod
    def reduce(self, state: S, action: ActionValue) -> S:
        """
        Apply action to state.

        Returns:
            New state, or state unchanged when the action is not handled
        """
        ...
