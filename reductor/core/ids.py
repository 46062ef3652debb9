"""
Stable fingerprints for generated definitions.
"""

import hashlib
from typing import Any

from .canonical import canonical_json_bytes


def fingerprint(obj: Any) -> str:
    """
    SHA-256 hex digest of the canonical JSON form of obj.

    Identical declarations always yield the identical fingerprint, which is
    what reproducible generation relies on.
    """
    return hashlib.sha256(canonical_json_bytes(obj)).hexdigest()
