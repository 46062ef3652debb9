"""
Tests for discovery of decorated classes.
"""

from typing import List, Optional

import pytest

from reductor import ActionValue, GenerationError, Reducer, action, action_creator, auto_reducer, handles
from reductor.core import Param, ParamKind, ParameterType
from reductor.discovery import Discovered, collect_module, describe_contract, describe_reducer, referenced_contracts
from reductor.tests import sample_app
from reductor.tests.constructor_app import KeywordReducer, PositionalReducer
from reductor.tests.sample_app import CounterActions, CounterReducer, TextActions, TextReducer

SAMPLE = "reductor.tests.sample_app"


def test_describe_contract():
    decl = describe_contract(TextActions)

    assert decl.name == f"{SAMPLE}.TextActions"
    assert decl.qualname == "TextActions"
    assert decl.module == SAMPLE
    assert decl.marked
    assert [(o.name, o.tag) for o in decl.operations] == [("append", "ACTION_1"), ("uppercase", "UPPERCASE")]
    assert decl.operations[0].param_types == (ParameterType("int"), ParameterType("str"))
    assert decl.location.file.endswith("sample_app.py")


def test_describe_unmarked_contract():
    class Plain:
        def add(self, n: int) -> ActionValue:
            ...

    decl = describe_contract(Plain)

    assert not decl.marked
    assert decl.operations == ()


def test_untagged_operation_is_kept_without_tag():
    @action_creator
    class Partial:
        @action("A")
        def a(self) -> ActionValue:
            ...

        def b(self) -> ActionValue:
            ...

        def _private(self) -> None:
            ...

    decl = describe_contract(Partial)

    assert [(o.name, o.tag) for o in decl.operations] == [("a", "A"), ("b", None)]


def test_parameter_type_names():
    class Item:
        pass

    @action_creator
    class Typed:
        @action("T")
        def t(self, items: List[int], maybe: Optional[str], item: Item) -> ActionValue:
            ...

    (op,) = describe_contract(Typed).operations

    assert [str(t) for t in op.param_types] == [
        "List[int]",
        "Optional[str]",
        f"{__name__}.test_parameter_type_names.<locals>.Item",
    ]


def test_unannotated_operation_parameter_is_fatal():
    @action_creator
    class Loose:
        @action("L")
        def loose(self, value) -> ActionValue:
            ...

    with pytest.raises(GenerationError) as exc:
        describe_contract(Loose)

    (diag,) = exc.value.diagnostics
    assert "Parameter value of" in diag.message
    assert diag.message.endswith("Loose.loose needs a type annotation")


def test_describe_reducer():
    decl = describe_reducer(TextReducer)

    assert decl.name == "TextReducer"
    assert decl.qualified_name == f"{SAMPLE}.TextReducer"
    assert decl.state_type == ParameterType("str")
    assert decl.initial_state == "initial"
    assert decl.constructors == ()
    assert [(h.name, h.tag, h.source) for h in decl.handlers] == [
        ("append", "ACTION_1", f"{SAMPLE}.TextActions"),
        ("uppercase", "UPPERCASE", f"{SAMPLE}.TextActions"),
    ]
    assert decl.handlers[0].param_types == (ParameterType("int"), ParameterType("str"))
    assert decl.handlers[1].params == ()


def test_describe_reducer_constructor_and_static_handler():
    decl = describe_reducer(CounterReducer)

    assert decl.state_type == ParameterType("int")
    (ctor,) = decl.constructors
    assert [p.name for p in ctor.params] == ["step", "label"]
    assert ctor.visibility.usable

    reset = [h for h in decl.handlers if h.name == "reset"][0]
    assert reset.params == ()
    assert reset.source == f"{SAMPLE}.CounterActions"
    increment = [h for h in decl.handlers if h.name == "increment"][0]
    assert increment.source is None


def test_string_source_is_kept():
    @auto_reducer
    class Named(Reducer[int]):
        @handles("INC", source=f"{SAMPLE}.CounterActions")
        def inc(self, state: int, times: int) -> int:
            return state + times

    (h,) = describe_reducer(Named).handlers
    assert h.source == f"{SAMPLE}.CounterActions"


def test_handler_without_state_parameter_is_fatal():
    @auto_reducer
    class NoState(Reducer[int]):
        @handles("X")
        @staticmethod
        def x() -> int:
            return 0

    with pytest.raises(GenerationError) as exc:
        describe_reducer(NoState)

    assert "must accept the state as its first parameter" in exc.value.diagnostics[0].message


def test_inherited_handlers_are_discovered():
    class Base(Reducer[str]):
        @handles("UPPERCASE", source=TextActions)
        def up(self, state: str) -> str:
            return state.upper()

    @auto_reducer
    class Child(Base):
        @handles("ACTION_1", source=TextActions)
        def append(self, state: str, number: int, suffix: str) -> str:
            return state + suffix

    decl = describe_reducer(Child)

    assert [h.name for h in decl.handlers] == ["up", "append"]
    assert decl.state_type == ParameterType("str")


def test_referenced_contracts():
    assert referenced_contracts(CounterReducer) == [CounterActions]
    assert referenced_contracts(TextReducer) == [TextActions]


def test_add_reducer_is_idempotent():
    discovered = Discovered()

    first = discovered.add_reducer(TextReducer)
    second = discovered.add_reducer(TextReducer)

    assert first is second
    assert len(discovered.reducers) == 1
    assert [c.name for c in discovered.contracts] == [f"{SAMPLE}.TextActions"]


def test_collect_module():
    discovered = collect_module(sample_app)

    assert [c.qualname for c in discovered.contracts] == ["TextActions", "CounterActions"]
    assert [r.name for r in discovered.reducers] == ["TextReducer", "CounterReducer"]
    assert discovered.classes[f"{SAMPLE}.CounterReducer"] is CounterReducer


def test_keyword_only_operation_is_fatal():
    @action_creator
    class KeywordActions:
        @action("K")
        def k(self, *, n: int) -> ActionValue:
            ...

    with pytest.raises(GenerationError) as exc:
        describe_contract(KeywordActions)

    (diag,) = exc.value.diagnostics
    assert diag.message.endswith("KeywordActions.k is keyword-only, action values are passed by position")


def test_operation_defaults_are_recorded():
    @action_creator
    class Defaults:
        @action("D")
        def d(self, text: str, done: bool = False, label: str = "x") -> ActionValue:
            ...

    (op,) = describe_contract(Defaults).operations

    assert [p.default for p in op.params] == [None, "False", "'x'"]
    assert op.params[0].required


def test_non_literal_default_is_fatal():
    sentinel = object()

    @action_creator
    class Opaque:
        @action("O")
        def o(self, value: object = sentinel) -> ActionValue:
            ...

    with pytest.raises(GenerationError) as exc:
        describe_contract(Opaque)

    assert exc.value.diagnostics[0].message.endswith("Opaque.o must be a literal")


def test_handler_defaults_are_not_recorded():
    @auto_reducer
    class WithDefault(Reducer[int]):
        @handles("INC", source=CounterActions)
        def inc(self, state: int, times: int = 1) -> int:
            return state + times

    (h,) = describe_reducer(WithDefault).handlers
    assert h.params == (Param("times", ParameterType("int")),)


def test_constructor_kinds_and_defaults_are_recorded():
    (keyword,) = describe_reducer(KeywordReducer).constructors
    (positional,) = describe_reducer(PositionalReducer).constructors

    assert keyword.params == (
        Param("step", ParameterType("int"), ParamKind.KEYWORD_ONLY),
        Param("label", ParameterType("str"), ParamKind.KEYWORD_ONLY, "'kw'"),
    )
    assert positional.params == (
        Param("step", ParameterType("int"), ParamKind.POSITIONAL_ONLY),
        Param("scale", ParameterType("int"), ParamKind.POSITIONAL, "1"),
    )
