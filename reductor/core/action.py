"""
Action model for generated dispatchers.

Actions are immutable, tagged records with positional values. Builders
construct them, dispatchers consume them.
"""

from dataclasses import dataclass, field
from typing import Any, Tuple


@dataclass(frozen=True)
class ActionValue:
    """
    Immutable action record.

    Fields:
        type: Action tag (e.g., "ADD_TODO", "ACTION_1")
        values: Positional arguments in declared order

    Equality is structural over (type, values).
    """
    type: str
    values: Tuple[Any, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

    @staticmethod
    def create(action_type: str, *values: Any) -> "ActionValue":
        return ActionValue(type=action_type, values=values)

    def get_value(self, index: int) -> Any:
        """
        Get positional value.

        Raises:
            IndexError: If action carries fewer than index + 1 values
        """
        return self.values[index]
