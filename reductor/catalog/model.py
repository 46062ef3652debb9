"""
Shape catalog model.

A shape is what one action-creator operation produces: a tag plus the
ordered argument types, remembered together with the contract it came from.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional, Tuple

from ..core.types import ParameterType, SourceLocation


@dataclass(frozen=True)
class ActionShape:
    """
    Immutable action shape.

    Fields:
        tag: Action tag
        params: Argument types, mirroring the operation's declared parameters
        origin: Contract identity the shape was declared in
        operation: Name of the declaring operation
    """
    tag: str
    params: Tuple[ParameterType, ...]
    origin: str
    operation: str = ""

    def matches(self, tag: str, params: Tuple[ParameterType, ...]) -> bool:
        return self.tag == tag and self.params == params


@dataclass(frozen=True)
class ShapeCatalog:
    """
    Read-only mapping of tag -> shapes, in contract declaration order.

    Fields:
        shapes: tag -> shapes declared under that tag
        unmarked: contract identity -> location, for visible contracts that
            lack the action-creator marker and therefore contribute no shapes
    """
    shapes: Dict[str, Tuple[ActionShape, ...]] = field(default_factory=dict)
    unmarked: Dict[str, SourceLocation] = field(default_factory=dict)

    def by_tag(self, tag: str) -> Tuple[ActionShape, ...]:
        return self.shapes.get(tag, ())

    def all_shapes(self) -> Iterator[ActionShape]:
        for shapes in self.shapes.values():
            yield from shapes

    def from_contract(self, contract: str) -> Tuple[ActionShape, ...]:
        return tuple(s for s in self.all_shapes() if s.origin == contract)

    def unmarked_location(self, contract: str) -> Optional[SourceLocation]:
        return self.unmarked.get(contract)

    @property
    def size(self) -> int:
        return sum(len(v) for v in self.shapes.values())
