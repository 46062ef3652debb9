"""
Value types shared by every generation stage.

- ParameterType: exact-match type descriptor for action arguments
- SourceLocation: where a declaration came from (for diagnostics)
- Diagnostic: a single generation-time finding
"""

import builtins
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class ParameterType:
    """
    Semantic type descriptor used for exact-match comparisons.

    Identified only by its fully-qualified name. Two parameter types are
    equal iff their names are equal; subclasses and structurally compatible
    types are NOT considered equal.
    """
    name: str

    @staticmethod
    def of(tp: Any) -> "ParameterType":
        """
        Build descriptor from a Python annotation.

        Builtins keep their bare name (int, str), other classes use
        module.QualName, typing constructs use their repr without the
        "typing." prefix, and unresolved string annotations are kept as-is.
        """
        if isinstance(tp, ParameterType):
            return tp
        if isinstance(tp, str):
            return ParameterType(tp)
        if tp is None or tp is type(None):
            return ParameterType("None")
        if isinstance(tp, type) and getattr(tp, "__origin__", None) is None:
            if tp.__module__ == "builtins":
                return ParameterType(tp.__qualname__)
            return ParameterType(f"{tp.__module__}.{tp.__qualname__}")
        return ParameterType(repr(tp).replace("typing.", ""))

    @property
    def is_builtin(self) -> bool:
        return self.name.isidentifier() and hasattr(builtins, self.name)

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class SourceLocation:
    """Source position token attached to declarations and diagnostics."""
    file: Optional[str] = None
    line: Optional[int] = None

    def __str__(self) -> str:
        if self.file is None:
            return "<unknown>"
        if self.line is None:
            return self.file
        return f"{self.file}:{self.line}"


UNKNOWN_LOCATION = SourceLocation()


class Severity(str, Enum):
    FATAL = "fatal"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """
    Generation-time finding.

    Fields:
        severity: fatal (declaration defect, ambiguity) or error (not found)
        message: Human-readable message (exact formats are part of the API)
        location: Declaration the message is reported against
    """
    severity: Severity
    message: str
    location: SourceLocation = UNKNOWN_LOCATION

    @staticmethod
    def fatal(message: str, location: SourceLocation = UNKNOWN_LOCATION) -> "Diagnostic":
        return Diagnostic(Severity.FATAL, message, location)

    @staticmethod
    def error(message: str, location: SourceLocation = UNKNOWN_LOCATION) -> "Diagnostic":
        return Diagnostic(Severity.ERROR, message, location)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "file": self.location.file,
            "line": self.location.line,
        }

    def __str__(self) -> str:
        return f"{self.location}: {self.severity.value}: {self.message}"
