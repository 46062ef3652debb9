"""
Materialization: generated definitions -> live Python classes.

The materialized class is what rendered source would define, built in
memory so reducers work without a separate emission step.
"""

import inspect
import sys
from typing import Any, Dict, List, Tuple, Type, TypeVar

from ..annotations import is_action_creator, qualified_name
from ..config import DEFAULT_CONFIG, GenerationConfig
from ..core.action import ActionValue
from ..core.declarations import ConstructorDecl, Param, ParamKind
from ..discovery import Discovered, module_classes
from ..generate.model import GeneratedReducer
from ..logging_config import get_logger
from ..pipeline import generate_one
from .actions import action_function

T = TypeVar("T")

_POSITIONAL = inspect.Parameter.POSITIONAL_OR_KEYWORD

_KINDS = {
    ParamKind.POSITIONAL_ONLY: inspect.Parameter.POSITIONAL_ONLY,
    ParamKind.POSITIONAL: _POSITIONAL,
    ParamKind.KEYWORD_ONLY: inspect.Parameter.KEYWORD_ONLY,
}

# (reducer class, config) -> materialized implementation class
_impls: Dict[Tuple[type, GenerationConfig], type] = {}


class _SourceDefault:
    """Stands for a base constructor default in a forwarding signature."""

    def __init__(self, text: str) -> None:
        self.text = text

    def __repr__(self) -> str:
        return self.text


def _signature(params: List[Param]) -> inspect.Signature:
    return inspect.Signature([inspect.Parameter(p.name, _POSITIONAL) for p in params])


def _action_creator_class(generated: GeneratedReducer) -> type:
    namespace: Dict[str, Any] = {"__qualname__": f"{generated.name}.ActionCreator"}
    for op in generated.builder_ops:
        namespace[op.name] = staticmethod(action_function(op.name, op.tag, _signature(list(op.params))))
    return type("ActionCreator", (), namespace)


def _reduce_method(generated: GeneratedReducer) -> Any:
    table = {case.tag: case for case in generated.cases}
    producer = generated.initial_state

    def reduce(self: Any, state: Any, action: ActionValue) -> Any:
        if producer is not None and state is None:
            state = getattr(self, producer)()
        case = table.get(action.type)
        if case is None:
            return state
        values = [action.get_value(i) for i in range(case.arity)]
        return getattr(self, case.handler)(state, *values)

    return reduce


def _constructor_signature(constructor: ConstructorDecl) -> inspect.Signature:
    return inspect.Signature([
        inspect.Parameter(
            p.name,
            _KINDS[p.kind],
            default=inspect.Parameter.empty if p.required else _SourceDefault(p.default),
        )
        for p in constructor.params
    ])


def _forwarding_init(impl: type, constructor: ConstructorDecl) -> Any:
    """
    __init__ forwarding every argument to the base constructor.

    Defaults are not applied here: omitted arguments are left to the base
    constructor so its own defaults take effect.
    """
    sig = _constructor_signature(constructor)

    def __init__(self: Any, *args: Any, **kwargs: Any) -> None:
        bound = sig.bind(*args, **kwargs)
        super(impl, self).__init__(*bound.args, **bound.kwargs)

    self_param = inspect.Parameter("self", _POSITIONAL)
    __init__.__signature__ = sig.replace(parameters=[self_param, *sig.parameters.values()])  # type: ignore[attr-defined]
    return __init__


def materialize(generated: GeneratedReducer, base: Type[T]) -> Type[T]:
    """
    Build the live implementation class of a generated reducer.

    Args:
        generated: Generated definition
        base: Reducer class the definition was generated from

    Returns:
        Subclass of base implementing reduce(), with a nested ActionCreator
        and, when a constructor was selected, a forwarding __init__
    """
    namespace = {
        "__module__": base.__module__,
        "__qualname__": generated.name,
        "reduce": _reduce_method(generated),
        "ActionCreator": _action_creator_class(generated),
    }
    impl = type(base)(generated.name, (base,), namespace)
    if generated.constructor is not None:
        impl.__init__ = _forwarding_init(impl, generated.constructor)  # type: ignore[misc]
    return impl


def reducer_impl(cls: Type[T], config: GenerationConfig = DEFAULT_CONFIG) -> Type[T]:
    """
    Generate and materialize the implementation of an auto-reducer class.

    Contracts visible to the reducer are the marked ones defined in its
    module plus every contract its handlers name. Implementations are cached
    per (class, config).

    Raises:
        GenerationError: With every diagnostic of the reducer
    """
    key = (cls, config)
    impl = _impls.get(key)
    if impl is not None:
        return impl

    discovered = Discovered()
    module = sys.modules.get(cls.__module__)
    if module is not None:
        for candidate in module_classes(module):
            if is_action_creator(candidate):
                discovered.add_contract(candidate)
    reducer = discovered.add_reducer(cls)

    generated = generate_one(discovered.contracts, reducer, config)
    impl = _impls.setdefault(key, materialize(generated, cls))
    get_logger(__name__, trace_id=qualified_name(cls)).debug("Materialized %s", generated.name)
    return impl


def create_reducer(cls: Type[T], *args: Any, **kwargs: Any) -> T:
    """Instantiate the implementation of an auto-reducer class."""
    return reducer_impl(cls)(*args, **kwargs)
