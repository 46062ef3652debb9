"""
Diagnostic message formats.

The not-annotated and not-found formats are matched verbatim by callers and
tests; change them only together.
"""

from typing import Iterable, Optional, Sequence

from .types import ParameterType

ACTION_CREATOR_MARKER = "@action_creator"
ACTION_MARKER = "@action"
ANY_SCOPE = "any"


def contract_not_annotated(contract: str) -> str:
    return f"Action creator {contract} should be annotated with {ACTION_CREATOR_MARKER}"


def operation_not_annotated(contract: str, operation: str) -> str:
    return f"Operation {contract}.{operation} should be annotated with {ACTION_MARKER}"


def format_types(types: Iterable[ParameterType]) -> str:
    return "[" + ", ".join(str(t) for t in types) + "]"


def cannot_find_action_creator(
    tag: str, types: Sequence[ParameterType], contract: Optional[str]
) -> str:
    scope = contract if contract is not None else ANY_SCOPE
    return f'Cannot find action creator for action "{tag}" and args {format_types(types)} in {scope}'


def ambiguous_action_creator(tag: str, types: Sequence[ParameterType], contracts: Sequence[str]) -> str:
    return (
        f'Ambiguous action creator for action "{tag}" and args {format_types(types)}: '
        f"candidates {', '.join(contracts)}"
    )


def duplicate_operation(contract: str, first: str, second: str, tag: str) -> str:
    return (
        f'Operations {contract}.{first} and {contract}.{second} both create action "{tag}" '
        f"with the same args"
    )


def duplicate_handler(reducer: str, first: str, second: str, tag: str) -> str:
    return f'Handlers {reducer}.{first} and {reducer}.{second} both handle action "{tag}"'


def no_accessible_constructor(reducer: str) -> str:
    return f"No accessible constructor found for reducer {reducer}"


def missing_type_annotation(owner: str, member: str, param: str) -> str:
    return f"Parameter {param} of {owner}.{member} needs a type annotation"


def variable_arguments(owner: str, member: str) -> str:
    return f"{owner}.{member} declares variable arguments, actions have fixed arity"


def missing_state_parameter(reducer: str, handler: str) -> str:
    return f"Handler {reducer}.{handler} must accept the state as its first parameter"


def keyword_only_argument(owner: str, member: str, param: str) -> str:
    return f"Parameter {param} of {owner}.{member} is keyword-only, action values are passed by position"


def non_literal_default(owner: str, member: str, param: str) -> str:
    return f"Default of parameter {param} of {owner}.{member} must be a literal"
