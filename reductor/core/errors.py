"""
Exception types for the reductor generation engine.
"""

from typing import List, Sequence

from .types import Diagnostic


class ReductorError(Exception):
    """Base class for all reductor errors."""
    pass


class GenerationError(ReductorError):
    """
    Raised when generation cannot proceed.

    Carries every diagnostic collected for the failing unit so callers can
    report them all at once.
    """

    def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        super().__init__("\n".join(str(d) for d in self.diagnostics))


class ActionCreatorError(ReductorError):
    """Raised when a runtime builder cannot be synthesized for a contract."""
    pass
