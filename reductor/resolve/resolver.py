"""
Binding resolver: match each reducer handler to exactly one action shape.

Resolution is pure. Identical (catalog, reducer) inputs always produce
identical bindings and diagnostics, in handler declaration order.
"""

from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..catalog.model import ActionShape, ShapeCatalog
from ..config import DEFAULT_CONFIG, GenerationConfig
from ..core.declarations import HandlerDecl, ReducerDecl
from ..core.errors import GenerationError
from ..core.messages import (
    ambiguous_action_creator,
    cannot_find_action_creator,
    contract_not_annotated,
    duplicate_handler,
)
from ..core.types import Diagnostic
from ..logging_config import get_logger


@dataclass(frozen=True)
class ResolvedBinding:
    """Handler paired with the single shape it implements."""
    handler: HandlerDecl
    shape: ActionShape

    @property
    def tag(self) -> str:
        return self.handler.tag


@dataclass(frozen=True)
class ResolutionResult:
    """
    Outcome of resolving one reducer.

    Fields:
        reducer: The reducer that was resolved
        bindings: Successfully resolved handlers, in declaration order
        diagnostics: Every defect found; non-empty means no generation
    """
    reducer: ReducerDecl
    bindings: Tuple[ResolvedBinding, ...]
    diagnostics: Tuple[Diagnostic, ...]

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def raise_for_diagnostics(self) -> None:
        if self.diagnostics:
            raise GenerationError(self.diagnostics)


def resolve_handler(
    catalog: ShapeCatalog,
    handler: HandlerDecl,
    reducer: ReducerDecl,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> ResolvedBinding:
    """
    Resolve one handler against the catalog.

    Raises:
        GenerationError: With a single diagnostic when the source contract
            is not marked, nothing matches, or the match is ambiguous
    """
    log = get_logger(__name__, trace_id=reducer.qualified_name)
    wanted = handler.param_types

    if handler.source is not None:
        unmarked_at = catalog.unmarked_location(handler.source)
        if unmarked_at is not None:
            raise GenerationError([Diagnostic.fatal(contract_not_annotated(handler.source), unmarked_at)])
        candidates = catalog.from_contract(handler.source)
    else:
        candidates = tuple(catalog.all_shapes())

    by_tag = [s for s in candidates if s.tag == handler.tag]
    if not by_tag:
        if handler.source is None and not config.require_action_creators:
            log.debug("No action creator declares %s, binding %s to its own shape", handler.tag, handler.name)
            implicit = ActionShape(
                tag=handler.tag,
                params=wanted,
                origin=reducer.qualified_name,
                operation=handler.name,
            )
            return ResolvedBinding(handler=handler, shape=implicit)
        raise GenerationError(
            [Diagnostic.error(cannot_find_action_creator(handler.tag, wanted, handler.source), handler.location)]
        )

    exact = [s for s in by_tag if s.params == wanted]
    if not exact:
        raise GenerationError(
            [Diagnostic.error(cannot_find_action_creator(handler.tag, wanted, handler.source), handler.location)]
        )
    if len(exact) > 1:
        origins = [s.origin for s in exact]
        raise GenerationError(
            [Diagnostic.fatal(ambiguous_action_creator(handler.tag, wanted, origins), handler.location)]
        )

    shape = exact[0]
    log.debug("Resolved %s to %s.%s", handler.name, shape.origin, shape.operation)
    return ResolvedBinding(handler=handler, shape=shape)


def find_duplicate_tags(reducer: ReducerDecl) -> List[Diagnostic]:
    """
    Report every handler whose tag was already claimed by an earlier handler.

    Independent of shape resolution: runs over declared tags only.
    """
    first_by_tag: Dict[str, HandlerDecl] = {}
    found: List[Diagnostic] = []
    for handler in reducer.handlers:
        first = first_by_tag.get(handler.tag)
        if first is None:
            first_by_tag[handler.tag] = handler
            continue
        found.append(
            Diagnostic.fatal(
                duplicate_handler(reducer.qualified_name, first.name, handler.name, handler.tag),
                handler.location,
            )
        )
    return found


def resolve_reducer(
    catalog: ShapeCatalog,
    reducer: ReducerDecl,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> ResolutionResult:
    """
    Resolve every handler of a reducer, collecting all diagnostics.

    Args:
        catalog: Shapes visible to this run
        reducer: Reducer definition to resolve
        config: Generation settings

    Returns:
        ResolutionResult; bindings hold the handlers that did resolve
    """
    bindings: List[ResolvedBinding] = []
    diagnostics: List[Diagnostic] = []

    for handler in reducer.handlers:
        try:
            bindings.append(resolve_handler(catalog, handler, reducer, config))
        except GenerationError as e:
            diagnostics.extend(e.diagnostics)

    diagnostics.extend(find_duplicate_tags(reducer))
    return ResolutionResult(reducer=reducer, bindings=tuple(bindings), diagnostics=tuple(diagnostics))
