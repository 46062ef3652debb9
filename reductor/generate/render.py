"""
Python source rendering for generated definitions.

Rendering is deterministic: cases and operations keep declaration order and
imports are sorted, so rendered modules can be compared to golden text.
"""

import json
from typing import List, Sequence, Set, Tuple

from ..core.declarations import Param, ParamKind
from ..core.types import ParameterType
from .model import BuilderOp, GeneratedBuilder, GeneratedReducer

HEADER = "# Generated by reductor. Do not edit."
INDENT = "    "


def _literal(text: str) -> str:
    """Python string literal for text."""
    return json.dumps(text, ensure_ascii=False)


def _annotation(tp: ParameterType) -> str:
    if tp.is_builtin:
        return tp.name
    return _literal(tp.name)


def _param(p: Param) -> str:
    if p.required:
        return f"{p.name}: {_annotation(p.type)}"
    return f"{p.name}: {_annotation(p.type)} = {p.default}"


def _signature(params: Tuple[Param, ...], receiver: str = "") -> str:
    """Parameter list with "/" and "*" markers where the parameter kind changes."""
    parts = [receiver] if receiver else []
    for i, p in enumerate(params):
        previous = params[i - 1].kind if i else None
        if previous is ParamKind.POSITIONAL_ONLY and p.kind is not ParamKind.POSITIONAL_ONLY:
            parts.append("/")
        if p.kind is ParamKind.KEYWORD_ONLY and previous is not ParamKind.KEYWORD_ONLY:
            parts.append("*")
        parts.append(_param(p))
    if params and params[-1].kind is ParamKind.POSITIONAL_ONLY:
        parts.append("/")
    return ", ".join(parts)


def _forward_args(params: Tuple[Param, ...]) -> str:
    return ", ".join(f"{p.name}={p.name}" if p.kind is ParamKind.KEYWORD_ONLY else p.name for p in params)


def _create_call(op: BuilderOp) -> str:
    args = [_literal(op.tag)] + [p.name for p in op.params]
    return f"ActionValue.create({', '.join(args)})"


def _indent(lines: List[str], depth: int) -> List[str]:
    return [(INDENT * depth + line) if line else "" for line in lines]


def _reduce_method(generated: GeneratedReducer) -> List[str]:
    state_ann = _annotation(generated.state_type)
    lines = [f"def reduce(self, state: {state_ann}, action: ActionValue) -> {state_ann}:"]
    body: List[str] = []

    if generated.initial_state is not None:
        body.append("if state is None:")
        body.append(f"{INDENT}state = self.{generated.initial_state}()")
        body.append("")

    for case in generated.cases:
        args = ["state"] + [
            f"cast({_literal(p.type.name)}, action.get_value({i}))" for i, p in enumerate(case.params)
        ]
        body.append(f"if action.type == {_literal(case.tag)}:")
        body.append(f"{INDENT}return self.{case.handler}({', '.join(args)})")
    body.append("return state")

    return lines + _indent(body, 1)


def _reducer_class(generated: GeneratedReducer) -> List[str]:
    lines = [f"class {generated.name}({generated.base}):"]
    members: List[List[str]] = []

    if generated.constructor is not None:
        params = generated.constructor.params
        members.append([
            f"def __init__({_signature(params, 'self')}):",
            f"{INDENT}super().__init__({_forward_args(params)})",
        ])

    members.append(_reduce_method(generated))

    if generated.builder_ops:
        creator = ["class ActionCreator:"]
        for i, op in enumerate(generated.builder_ops):
            if i:
                creator.append("")
            creator.extend(_indent([
                "@staticmethod",
                f"def {op.name}({_signature(op.params)}) -> ActionValue:",
                f"{INDENT}return {_create_call(op)}",
            ], 1))
        members.append(creator)

    for i, member in enumerate(members):
        if i:
            lines.append("")
        lines.extend(_indent(member, 1))
    return lines


def _builder_class(generated: GeneratedBuilder) -> List[str]:
    lines = [
        f"@generated_builder({generated.contract})",
        f"class {generated.name}({generated.contract}):",
    ]
    if not generated.ops:
        lines.append(f"{INDENT}pass")
        return lines
    for i, op in enumerate(generated.ops):
        if i:
            lines.append("")
        lines.extend(_indent([
            f"def {op.name}({_signature(op.params, 'self')}) -> ActionValue:",
            f"{INDENT}return {_create_call(op)}",
        ], 1))
    return lines


def _imports(
    reducers: Sequence[GeneratedReducer], builders: Sequence[GeneratedBuilder]
) -> List[str]:
    needs_cast = any(case.params for r in reducers for case in r.cases)
    local: Set[Tuple[str, str]] = set()
    for r in reducers:
        if r.module:
            local.add((r.module, r.base.split(".")[0]))
    for b in builders:
        if b.module:
            local.add((b.module, b.contract.split(".")[0]))

    lines: List[str] = []
    if needs_cast:
        lines.append("from typing import cast")
        lines.append("")
    lines.append("from reductor import ActionValue" + (", generated_builder" if builders else ""))
    for module, name in sorted(local):
        lines.append(f"from {module} import {name}")
    return lines


def render_module(
    reducers: Sequence[GeneratedReducer] = (),
    builders: Sequence[GeneratedBuilder] = (),
) -> str:
    """
    Render one Python module holding every given definition.

    Builders come first, then reducers, each in the order given.
    """
    lines = [HEADER] + _imports(reducers, builders)
    for block in [_builder_class(b) for b in builders] + [_reducer_class(r) for r in reducers]:
        lines.extend(["", ""])
        lines.extend(block)
    return "\n".join(lines) + "\n"


def render_reducer(generated: GeneratedReducer) -> str:
    return render_module(reducers=[generated])


def render_builder(generated: GeneratedBuilder) -> str:
    return render_module(builders=[generated])
