"""
Generation pipeline: one synchronous pass over contracts and reducers.

The catalog is built once and shared read-only; each reducer is resolved
and generated independently, so one defective reducer never affects another.
"""

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .catalog import build_catalog
from .config import DEFAULT_CONFIG, GenerationConfig
from .core.declarations import ContractDecl, ReducerDecl
from .core.errors import GenerationError
from .core.types import Diagnostic
from .generate import GeneratedBuilder, GeneratedReducer, generate_builder, generate_reducer
from .logging_config import get_logger
from .resolve import resolve_reducer


@dataclass(frozen=True)
class GenerationResult:
    """
    Result of a generation pass.

    Fields:
        reducers: Generated dispatchers for every reducer without defects
        builders: Generated builders for every marked contract
        diagnostics: Defects of the reducers that produced no definition
    """
    reducers: Tuple[GeneratedReducer, ...]
    builders: Tuple[GeneratedBuilder, ...]
    diagnostics: Tuple[Diagnostic, ...]

    @property
    def ok(self) -> bool:
        return not self.diagnostics


def generate_one(
    contracts: Iterable[ContractDecl],
    reducer: ReducerDecl,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> GeneratedReducer:
    """
    Resolve and generate a single reducer.

    Raises:
        GenerationError: With every diagnostic of the reducer
    """
    resolution = resolve_reducer(build_catalog(contracts), reducer, config)
    return generate_reducer(resolution, config)


def run_generation(
    contracts: Iterable[ContractDecl],
    reducers: Iterable[ReducerDecl],
    config: GenerationConfig = DEFAULT_CONFIG,
) -> GenerationResult:
    """
    Generate dispatchers for every reducer and builders for every contract.

    Raises:
        GenerationError: If the catalog cannot be built (aborts the whole run)
    """
    contracts = list(contracts)
    catalog = build_catalog(contracts)

    generated: List[GeneratedReducer] = []
    diagnostics: List[Diagnostic] = []
    for reducer in reducers:
        log = get_logger(__name__, trace_id=reducer.qualified_name)
        try:
            generated.append(generate_reducer(resolve_reducer(catalog, reducer, config), config))
        except GenerationError as e:
            for d in e.diagnostics:
                log.error("%s", d)
            diagnostics.extend(e.diagnostics)

    builders = [generate_builder(c, config) for c in contracts if c.marked]
    return GenerationResult(
        reducers=tuple(generated),
        builders=tuple(builders),
        diagnostics=tuple(diagnostics),
    )
