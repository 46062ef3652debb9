"""
Catalog construction from contract declarations.

Construction is fail-fast: the first contract or operation defect aborts the
whole run and no partial catalog is returned.
"""

from typing import Dict, Iterable, List, Tuple

from ..core.declarations import ContractDecl
from ..core.errors import GenerationError
from ..core.messages import duplicate_operation, operation_not_annotated
from ..core.types import Diagnostic, SourceLocation
from ..logging_config import get_logger
from .model import ActionShape, ShapeCatalog


def build_catalog(contracts: Iterable[ContractDecl]) -> ShapeCatalog:
    """
    Collect action shapes from every visible contract.

    Args:
        contracts: All contract declarations visible to this generation run

    Returns:
        ShapeCatalog with one shape per operation of each marked contract

    Raises:
        GenerationError: If an operation has no tag, or one contract declares
            the same tag with the same argument types twice
    """
    shapes: Dict[str, List[ActionShape]] = {}
    unmarked: Dict[str, SourceLocation] = {}

    for contract in contracts:
        log = get_logger(__name__, trace_id=contract.name)
        if not contract.marked:
            log.debug("Contract is not marked as action creator, skipping")
            unmarked[contract.name] = contract.location
            continue

        seen: Dict[Tuple, str] = {}
        for op in contract.operations:
            if op.tag is None:
                raise GenerationError(
                    [Diagnostic.fatal(operation_not_annotated(contract.name, op.name), op.location)]
                )

            key = (op.tag, op.param_types)
            if key in seen:
                raise GenerationError(
                    [
                        Diagnostic.fatal(
                            duplicate_operation(contract.name, seen[key], op.name, op.tag),
                            op.location,
                        )
                    ]
                )
            seen[key] = op.name

            shape = ActionShape(tag=op.tag, params=op.param_types, origin=contract.name, operation=op.name)
            shapes.setdefault(op.tag, []).append(shape)
            log.debug("Registered shape %s%s from %s", op.tag, list(map(str, op.param_types)), op.name)

    catalog = ShapeCatalog(
        shapes={tag: tuple(v) for tag, v in shapes.items()},
        unmarked=unmarked,
    )
    get_logger(__name__).debug("Catalog built with %d shapes", catalog.size)
    return catalog
