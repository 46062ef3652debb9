"""
Declaration decorators.

Usage:
    @action_creator
    class TodoActions:
        @action("ADD_TODO")
        def add(self, text: str) -> ActionValue: ...

    @auto_reducer
    class TodoReducer(Reducer[list]):
        @initial_state
        def empty(self) -> list:
            return []

        @handles("ADD_TODO", source=TodoActions)
        def on_add(self, state: list, text: str) -> list:
            return state + [text]

The decorators only attach metadata; discovery reads it back.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar, Union

T = TypeVar("T")

ACTION_CREATOR_ATTR = "__reductor_action_creator__"
AUTO_REDUCER_ATTR = "__reductor_auto_reducer__"
ACTION_TAG_ATTR = "__reductor_action__"
HANDLER_ATTR = "__reductor_handler__"
INITIAL_STATE_ATTR = "__reductor_initial_state__"

# Classes from these modules never contribute operations or handlers
_FRAMEWORK_MODULES = {"builtins", "abc", "typing", "typing_extensions"}


@dataclass(frozen=True)
class HandlerSpec:
    tag: str
    source: Optional[Union[type, str]] = None


def action_creator(cls: T) -> T:
    """Mark a class as an action-creator contract."""
    setattr(cls, ACTION_CREATOR_ATTR, True)
    return cls


def auto_reducer(cls: T) -> T:
    """Mark a reducer class for dispatcher generation."""
    setattr(cls, AUTO_REDUCER_ATTR, True)
    return cls


def action(tag: str) -> Callable[[T], T]:
    """Tag an action-creator operation."""
    def decorate(fn: T) -> T:
        setattr(fn, ACTION_TAG_ATTR, tag)
        return fn
    return decorate


def handles(tag: str, source: Optional[Union[type, str]] = None) -> Callable[[T], T]:
    """
    Bind a reducer method to an action tag.

    Args:
        tag: Action tag to handle
        source: Contract (class or qualified name) the action must come from;
            None means any visible contract
    """
    def decorate(fn: T) -> T:
        setattr(_unwrap(fn), HANDLER_ATTR, HandlerSpec(tag=tag, source=source))
        return fn
    return decorate


def initial_state(fn: T) -> T:
    """Mark the producer of the state used when the current state is None."""
    setattr(_unwrap(fn), INITIAL_STATE_ATTR, True)
    return fn


def _unwrap(member: Any) -> Any:
    if isinstance(member, (staticmethod, classmethod)):
        return member.__func__
    return member


def is_action_creator(cls: type) -> bool:
    return bool(cls.__dict__.get(ACTION_CREATOR_ATTR, False))


def is_auto_reducer(cls: type) -> bool:
    return bool(cls.__dict__.get(AUTO_REDUCER_ATTR, False))


def action_tag(fn: Any) -> Optional[str]:
    return getattr(_unwrap(fn), ACTION_TAG_ATTR, None)


def handler_spec(fn: Any) -> Optional[HandlerSpec]:
    return getattr(_unwrap(fn), HANDLER_ATTR, None)


def is_initial_state(fn: Any) -> bool:
    return bool(getattr(_unwrap(fn), INITIAL_STATE_ATTR, False))


def qualified_name(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


def members(cls: type) -> List[Tuple[str, Any]]:
    """
    Functions defined on cls and its bases, in first-definition order.

    Overrides keep the position of the member they override. Framework
    classes (object, ABC, Generic, Protocol) are skipped.
    """
    found: Dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass.__module__ in _FRAMEWORK_MODULES:
            continue
        for name, member in klass.__dict__.items():
            fn = _unwrap(member)
            if inspect.isfunction(fn):
                found[name] = member
    return list(found.items())


def operations(cls: type) -> List[Tuple[str, Any]]:
    """Public functions of a contract, the candidates for action operations."""
    return [(name, _unwrap(m)) for name, m in members(cls) if not name.startswith("_")]
