"""
Constructor selection for generated reducer classes.
"""

from typing import Optional

from ..core.declarations import ConstructorDecl, ReducerDecl
from ..core.errors import GenerationError
from ..core.messages import no_accessible_constructor
from ..core.types import Diagnostic


def select_constructor(reducer: ReducerDecl) -> Optional[ConstructorDecl]:
    """
    Pick the base constructor the generated class forwards to.

    Priority:
    1. No declared constructors: implicit no-arg constructor (returns None)
    2. Most specific usable (non-private) constructor, i.e. the one with the
       most parameters; the earliest declared wins ties
    3. A usable no-arg constructor means nothing needs forwarding (returns None)

    Raises:
        GenerationError: If constructors are declared but none is usable
    """
    if not reducer.constructors:
        return None

    usable = [c for c in reducer.constructors if c.visibility.usable]
    if not usable:
        raise GenerationError(
            [Diagnostic.fatal(no_accessible_constructor(reducer.qualified_name), reducer.location)]
        )

    best = usable[0]
    for candidate in usable[1:]:
        if len(candidate.params) > len(best.params):
            best = candidate

    if not best.params:
        return None
    return best
