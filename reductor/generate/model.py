"""
Generated definition model.

Generated definitions are plain data. How they become live classes
(materialize) or source text (render) is decided downstream.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..core.declarations import ConstructorDecl, Param
from ..core.ids import fingerprint
from ..core.types import ParameterType


def _params_dict(params: Tuple[Param, ...]) -> list:
    return [{"name": p.name, "type": p.type, "kind": p.kind, "default": p.default} for p in params]


@dataclass(frozen=True)
class DispatchCase:
    """
    One dispatch case: action tag -> handler call.

    Fields:
        tag: Action tag selecting this case
        handler: Handler method to invoke with (state, *values)
        params: Bound parameters; values are coerced to these types in order
    """
    tag: str
    handler: str
    params: Tuple[Param, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class BuilderOp:
    """Generated builder operation: name(params...) -> ActionValue(tag, params...)."""
    name: str
    tag: str
    params: Tuple[Param, ...] = ()


@dataclass(frozen=True)
class GeneratedReducer:
    """
    Generated dispatcher definition for one reducer.

    Fields:
        name: Generated class name (e.g., "TodoReducerImpl")
        base: Reducer class the generated class extends
        module: Module of the reducer class
        state_type: State type descriptor
        initial_state: Producer called when state is None, if any
        constructor: Constructor to forward, None when the implicit one suffices
        cases: Dispatch cases in handler declaration order
        builder_ops: Mirrored builder operations, one per handler
    """
    name: str
    base: str
    module: str
    state_type: ParameterType
    initial_state: Optional[str]
    constructor: Optional[ConstructorDecl]
    cases: Tuple[DispatchCase, ...]
    builder_ops: Tuple[BuilderOp, ...]

    def case_for(self, tag: str) -> Optional[DispatchCase]:
        for case in self.cases:
            if case.tag == tag:
                return case
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "base": self.base,
            "module": self.module,
            "state_type": self.state_type,
            "initial_state": self.initial_state,
            "constructor": None if self.constructor is None else _params_dict(self.constructor.params),
            "cases": [
                {"tag": c.tag, "handler": c.handler, "params": _params_dict(c.params)} for c in self.cases
            ],
            "builder_ops": [
                {"name": o.name, "tag": o.tag, "params": _params_dict(o.params)} for o in self.builder_ops
            ],
        }

    def fingerprint(self) -> str:
        return fingerprint(self.to_dict())


@dataclass(frozen=True)
class GeneratedBuilder:
    """
    Generated builder definition for one action-creator contract.

    Fields:
        name: Generated class name (e.g., "TodoActions_AutoImpl")
        contract: Qualified name of the contract inside its module
        module: Module of the contract
        ops: One builder operation per contract operation
    """
    name: str
    contract: str
    module: str
    ops: Tuple[BuilderOp, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "contract": self.contract,
            "module": self.module,
            "ops": [{"name": o.name, "tag": o.tag, "params": _params_dict(o.params)} for o in self.ops],
        }

    def fingerprint(self) -> str:
        return fingerprint(self.to_dict())
