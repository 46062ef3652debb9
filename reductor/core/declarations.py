"""
Declaration records consumed by the generation engine.

These are plain descriptors produced by discovery. The engine never inspects
live classes; it only reads these records.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from .types import ParameterType, SourceLocation, UNKNOWN_LOCATION


class ParamKind(str, Enum):
    POSITIONAL_ONLY = "positional_only"
    POSITIONAL = "positional"
    KEYWORD_ONLY = "keyword_only"


@dataclass(frozen=True)
class Param:
    """
    Named, typed parameter (receiver and state parameters excluded).

    Fields:
        name: Parameter name
        type: Declared type
        kind: How callers pass it; action values are always positional
        default: Source text of the default value, None when required
    """
    name: str
    type: ParameterType
    kind: ParamKind = ParamKind.POSITIONAL
    default: Optional[str] = None

    @property
    def required(self) -> bool:
        return self.default is None


def param_types(params: Tuple[Param, ...]) -> Tuple[ParameterType, ...]:
    return tuple(p.type for p in params)


@dataclass(frozen=True)
class OperationDecl:
    """
    Single operation of an action-creator contract.

    Fields:
        name: Operation name
        tag: Action tag, or None when the operation carries no tag
        params: Declared parameters in order
        location: Where the operation is declared
    """
    name: str
    tag: Optional[str]
    params: Tuple[Param, ...] = ()
    location: SourceLocation = UNKNOWN_LOCATION

    @property
    def param_types(self) -> Tuple[ParameterType, ...]:
        return param_types(self.params)


@dataclass(frozen=True)
class ContractDecl:
    """
    Action-creator contract.

    Fields:
        name: Fully-qualified contract identity (module.QualName)
        marked: True if the contract carries the action-creator marker
        operations: Declared operations in order
        location: Where the contract is declared
        module: Module part of name ("" when unknown)
    """
    name: str
    marked: bool
    operations: Tuple[OperationDecl, ...] = ()
    location: SourceLocation = UNKNOWN_LOCATION
    module: str = ""

    @property
    def qualname(self) -> str:
        if self.module and self.name.startswith(self.module + "."):
            return self.name[len(self.module) + 1:]
        return self.name


@dataclass(frozen=True)
class HandlerDecl:
    """
    Reducer handler before resolution.

    Fields:
        name: Handler method name
        tag: Action tag the handler reacts to
        params: Declared non-state parameters in order
        source: Contract the handler is restricted to, if any
        location: Where the handler is declared
    """
    name: str
    tag: str
    params: Tuple[Param, ...] = ()
    source: Optional[str] = None
    location: SourceLocation = UNKNOWN_LOCATION

    @property
    def param_types(self) -> Tuple[ParameterType, ...]:
        return param_types(self.params)


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PACKAGE = "package"
    PRIVATE = "private"

    @property
    def usable(self) -> bool:
        """Whether generated subclasses may call a constructor with this exposure."""
        return self is not Visibility.PRIVATE


@dataclass(frozen=True)
class ConstructorDecl:
    params: Tuple[Param, ...] = ()
    visibility: Visibility = Visibility.PUBLIC


@dataclass(frozen=True)
class ReducerDecl:
    """
    Reducer definition.

    Fields:
        name: Reducer class qualname inside its module
        module: Module the reducer lives in
        state_type: State type descriptor
        constructors: Declared constructors (empty = implicit no-arg)
        initial_state: Name of the initial-state producer, if any
        handlers: Handlers in declaration order
        location: Where the reducer is declared
    """
    name: str
    module: str = ""
    state_type: ParameterType = field(default_factory=lambda: ParameterType("Any"))
    constructors: Tuple[ConstructorDecl, ...] = ()
    initial_state: Optional[str] = None
    handlers: Tuple[HandlerDecl, ...] = ()
    location: SourceLocation = UNKNOWN_LOCATION

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}" if self.module else self.name
