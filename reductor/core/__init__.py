"""
Core primitives for reducer generation.

This module provides the foundational records shared by every stage:
- ActionValue: Tagged, positional action record
- Reducer: Base class of generated dispatchers
- ParameterType: Exact-match argument type descriptor
- Declarations: Contract, operation, handler and reducer descriptors
- Diagnostic: Generation-time findings
- Canonical: Deterministic serialization and fingerprints
"""

from .action import ActionValue
from .reducer import Reducer
from .types import ParameterType, SourceLocation, Severity, Diagnostic, UNKNOWN_LOCATION
from .declarations import (
    Param,
    ParamKind,
    OperationDecl,
    ContractDecl,
    HandlerDecl,
    ConstructorDecl,
    ReducerDecl,
    Visibility,
)
from .canonical import canonicalize, canonical_json_bytes, canonical_json_str
from .ids import fingerprint
from .errors import ReductorError, GenerationError, ActionCreatorError

__all__ = [
    "ActionValue",
    "Reducer",
    "ParameterType",
    "SourceLocation",
    "Severity",
    "Diagnostic",
    "UNKNOWN_LOCATION",
    "Param",
    "ParamKind",
    "OperationDecl",
    "ContractDecl",
    "HandlerDecl",
    "ConstructorDecl",
    "ReducerDecl",
    "Visibility",
    "canonicalize",
    "canonical_json_bytes",
    "canonical_json_str",
    "fingerprint",
    "ReductorError",
    "GenerationError",
    "ActionCreatorError",
]
