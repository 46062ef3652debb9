"""
Canonical serialization for generated definitions.

Generation must be reproducible: the same declarations always produce the
same canonical bytes, so golden comparisons and fingerprints are stable.
"""

import json
from enum import Enum
from typing import Any

from .types import ParameterType, SourceLocation


def canonicalize(obj: Any) -> Any:
    """
    Convert a generated definition (or any nested dict/list) to canonical form.

    Rules:
    - dict keys sorted alphabetically
    - tuples converted to lists
    - enums replaced by their value
    - parameter types and locations replaced by their string form
    """
    if isinstance(obj, dict):
        return {str(k): canonicalize(obj[k]) for k in sorted(obj.keys(), key=str)}
    if isinstance(obj, (list, tuple)):
        return [canonicalize(x) for x in obj]
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (ParameterType, SourceLocation)):
        return str(obj)
    return obj


def canonical_json_bytes(obj: Any) -> bytes:
    """
    Deterministic JSON bytes for fingerprinting.

    Returns:
        UTF-8 encoded JSON bytes, no whitespace, sorted keys
    """
    canon = canonicalize(obj)
    s = json.dumps(canon, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
    return s.encode("utf-8")


def canonical_json_str(obj: Any) -> str:
    return canonical_json_bytes(obj).decode("utf-8")
