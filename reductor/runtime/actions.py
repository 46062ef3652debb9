"""
Runtime action builders.

builder_for(contract) returns an object implementing every operation of an
action-creator contract. A generated builder (registered with
@generated_builder, or named <Contract>_AutoImpl in the contract's module)
is preferred; otherwise one is synthesized from the contract's declared tags.

Builders are cached process-wide, one per contract and config. Entries are never
replaced or torn down once stored.
"""

import functools
import inspect
import sys
import types
from typing import Any, Callable, Dict, Optional, Tuple, Type, TypeVar

from ..annotations import action_tag, is_action_creator, operations, qualified_name
from ..config import DEFAULT_CONFIG, GenerationConfig
from ..core.action import ActionValue
from ..core.errors import ActionCreatorError
from ..core.messages import (
    contract_not_annotated,
    keyword_only_argument,
    operation_not_annotated,
    variable_arguments,
)
from ..logging_config import get_logger

T = TypeVar("T")

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

# (contract class, config) -> builder instance
_builders: Dict[Tuple[type, GenerationConfig], Any] = {}

# contract class -> generated builder class registered by a generated module
_generated: Dict[type, type] = {}


def bind_values(signature: inspect.Signature, args: Tuple[Any, ...], kwargs: Dict[str, Any]) -> Tuple[Any, ...]:
    """
    Bind a call against a declared signature and return its values in order.

    Keyword arguments are moved to their declared position and defaults are
    applied, so name(1, s="x") and name(1, "x") build the same action.

    Raises:
        TypeError: If the call does not fit the signature
    """
    bound = signature.bind(*args, **kwargs)
    bound.apply_defaults()
    return tuple(bound.arguments.values())


def action_function(name: str, tag: str, signature: inspect.Signature) -> Callable[..., ActionValue]:
    """Plain function name(*params) -> ActionValue(tag, params)."""
    def build(*args: Any, **kwargs: Any) -> ActionValue:
        return ActionValue(tag, bind_values(signature, args, kwargs))

    build.__name__ = name
    build.__qualname__ = name
    build.__signature__ = signature  # type: ignore[attr-defined]
    return build


class SynthesizedBuilder:
    """
    Table-driven builder: operation name -> tag, plus one generic build().

    Concrete subclasses are created per contract by synthesize_builder();
    each contract operation simply forwards to build().
    """

    _contract: type
    _tags: Dict[str, str]
    _signatures: Dict[str, inspect.Signature]

    def build(self, operation: str, *args: Any, **kwargs: Any) -> ActionValue:
        values = bind_values(self._signatures[operation], args, kwargs)
        return ActionValue(self._tags[operation], values)

    def __repr__(self) -> str:
        return f"<SynthesizedBuilder for {qualified_name(self._contract)}>"


def _forwarding_operation(name: str, fn: Any) -> Callable[..., ActionValue]:
    @functools.wraps(fn)
    def operation(self: SynthesizedBuilder, *args: Any, **kwargs: Any) -> ActionValue:
        return self.build(name, *args, **kwargs)

    # wraps() copies the abstract flag of the contract method
    operation.__isabstractmethod__ = False  # type: ignore[attr-defined]
    return operation


def synthesize_builder(contract: Type[T]) -> T:
    """
    Synthesize a builder instance for a contract with no generated builder.

    Raises:
        ActionCreatorError: If the contract is not marked, an operation has
            no tag, or an operation declares variable or keyword-only arguments
    """
    name = qualified_name(contract)
    if not is_action_creator(contract):
        raise ActionCreatorError(contract_not_annotated(name))

    tags: Dict[str, str] = {}
    signatures: Dict[str, inspect.Signature] = {}
    namespace: Dict[str, Any] = {}
    for op_name, fn in operations(contract):
        tag = action_tag(fn)
        if tag is None:
            raise ActionCreatorError(operation_not_annotated(name, op_name))
        sig = inspect.signature(fn)
        params = list(sig.parameters.values())
        if not isinstance(inspect.getattr_static(contract, op_name), staticmethod):
            params = params[1:]
        if any(p.kind in _VARIADIC for p in params):
            raise ActionCreatorError(variable_arguments(name, op_name))
        for p in params:
            if p.kind is inspect.Parameter.KEYWORD_ONLY:
                raise ActionCreatorError(keyword_only_argument(name, op_name, p.name))
        tags[op_name] = tag
        signatures[op_name] = sig.replace(parameters=params)
        namespace[op_name] = _forwarding_operation(op_name, fn)

    namespace.update(_contract=contract, _tags=tags, _signatures=signatures)
    cls = types.new_class(
        f"{contract.__name__}_Synthesized",
        (SynthesizedBuilder, contract),
        exec_body=lambda ns: ns.update(namespace),
    )
    get_logger(__name__, trace_id=name).debug("Synthesized builder with %d operations", len(tags))
    return cls()


def generated_builder(contract: type) -> Callable[[Type[T]], Type[T]]:
    """
    Register the decorated class as the generated builder of contract.

    Rendered modules apply this to every builder they define, so builders
    written to a separate module are found once that module is imported.
    Register before the first builder_for() call for the contract; cached
    builders are never replaced.
    """
    def register(cls: Type[T]) -> Type[T]:
        if not issubclass(cls, contract):
            raise TypeError(f"{cls.__name__} does not implement {qualified_name(contract)}")
        _generated[contract] = cls
        return cls
    return register


def find_generated_builder(contract: type, config: GenerationConfig = DEFAULT_CONFIG) -> Optional[type]:
    """
    Generated builder class for a contract.

    Registered builders win; otherwise the contract's module is searched for
    a class named by the builder naming convention.
    """
    registered = _generated.get(contract)
    if registered is not None:
        return registered
    module = sys.modules.get(contract.__module__)
    if module is None:
        return None
    generated = getattr(module, config.builder_name(contract.__qualname__), None)
    if isinstance(generated, type) and issubclass(generated, contract):
        return generated
    return None


def _create_builder(contract: type, config: GenerationConfig) -> Any:
    generated = find_generated_builder(contract, config)
    if generated is not None:
        get_logger(__name__, trace_id=qualified_name(contract)).debug("Using generated builder %s", generated.__name__)
        return generated()
    return synthesize_builder(contract)


def builder_for(contract: Type[T], config: GenerationConfig = DEFAULT_CONFIG) -> T:
    """
    Get the builder instance for an action-creator contract.

    Cheap to call repeatedly: the first call creates the builder, later calls
    return the cached one. Builders are cached per (contract, config).
    Concurrent first calls may each create a builder; the first one stored
    wins and every caller converges on it afterwards.

    Raises:
        ActionCreatorError: On the first call for a contract that cannot be
            synthesized
    """
    key = (contract, config)
    builder = _builders.get(key)
    if builder is None:
        builder = _builders.setdefault(key, _create_builder(contract, config))
    return builder


def clear_builder_cache() -> None:
    """Forget every cached builder (tests only)."""
    _builders.clear()
