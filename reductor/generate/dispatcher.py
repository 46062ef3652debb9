"""
Dispatcher generation from resolved bindings.

Produces data only: the generated definition never mutates the catalog, the
bindings, or the reducer declaration it was built from.
"""

from ..config import DEFAULT_CONFIG, GenerationConfig
from ..core.declarations import ContractDecl
from ..core.errors import GenerationError
from ..core.messages import contract_not_annotated, operation_not_annotated
from ..core.types import Diagnostic
from ..logging_config import get_logger
from ..resolve.resolver import ResolutionResult
from .constructor import select_constructor
from .model import BuilderOp, DispatchCase, GeneratedBuilder, GeneratedReducer


def generate_reducer(
    resolution: ResolutionResult,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> GeneratedReducer:
    """
    Build the generated dispatcher definition for one resolved reducer.

    Args:
        resolution: Result of resolve_reducer(); must carry no diagnostics
        config: Generation settings (class naming)

    Returns:
        GeneratedReducer with one dispatch case and one builder op per handler

    Raises:
        GenerationError: If resolution failed or no usable constructor exists
    """
    resolution.raise_for_diagnostics()
    reducer = resolution.reducer
    log = get_logger(__name__, trace_id=reducer.qualified_name)

    constructor = select_constructor(reducer)

    cases = []
    ops = []
    for binding in resolution.bindings:
        handler = binding.handler
        cases.append(DispatchCase(tag=binding.tag, handler=handler.name, params=handler.params))
        ops.append(BuilderOp(name=handler.name, tag=binding.shape.tag, params=handler.params))

    generated = GeneratedReducer(
        name=config.impl_name(reducer.name),
        base=reducer.name,
        module=reducer.module,
        state_type=reducer.state_type,
        initial_state=reducer.initial_state,
        constructor=constructor,
        cases=tuple(cases),
        builder_ops=tuple(ops),
    )
    log.info("Generated %s with %d dispatch cases", generated.name, len(generated.cases))
    return generated


def generate_builder(
    contract: ContractDecl,
    config: GenerationConfig = DEFAULT_CONFIG,
) -> GeneratedBuilder:
    """
    Build the generated builder definition for one action-creator contract.

    Raises:
        GenerationError: If the contract is not marked or an operation has no tag
    """
    if not contract.marked:
        raise GenerationError([Diagnostic.fatal(contract_not_annotated(contract.name), contract.location)])

    ops = []
    for op in contract.operations:
        if op.tag is None:
            raise GenerationError(
                [Diagnostic.fatal(operation_not_annotated(contract.name, op.name), op.location)]
            )
        ops.append(BuilderOp(name=op.name, tag=op.tag, params=op.params))

    return GeneratedBuilder(
        name=config.builder_name(contract.qualname),
        contract=contract.qualname,
        module=contract.module,
        ops=tuple(ops),
    )
