"""
Tests for shape catalog construction.
"""

import pytest

from reductor.catalog import build_catalog
from reductor.core import GenerationError, ParameterType, Severity, SourceLocation
from reductor.tests.helpers import contract, op


def test_one_shape_per_operation():
    """Each tagged operation contributes a shape mirroring its parameters."""
    catalog = build_catalog([
        contract(
            "test.Foobar.TestCreator",
            op("test_action", "TEST", ("foo", "int"), ("bar", "str"), ("baz", "object")),
            op("other", "OTHER"),
        )
    ])

    (shape,) = catalog.by_tag("TEST")
    assert shape.params == (ParameterType("int"), ParameterType("str"), ParameterType("object"))
    assert shape.origin == "test.Foobar.TestCreator"
    assert shape.operation == "test_action"
    assert catalog.by_tag("OTHER")[0].params == ()
    assert catalog.size == 2


def test_same_tag_with_different_params_in_one_contract():
    """One contract may declare a tag twice if the argument lists differ."""
    catalog = build_catalog([
        contract("test.Actions", op("one", "ADD", ("n", "int")), op("two", "ADD", ("s", "str")))
    ])

    assert len(catalog.by_tag("ADD")) == 2


def test_same_shape_in_two_contracts_is_not_an_error():
    """Identical shapes from different contracts only matter once a handler must choose."""
    catalog = build_catalog([
        contract("test.A", op("add", "ADD", ("n", "int"))),
        contract("test.B", op("add", "ADD", ("n", "int"))),
    ])

    assert [s.origin for s in catalog.by_tag("ADD")] == ["test.A", "test.B"]


def test_unmarked_contract_contributes_nothing():
    """Unmarked contracts are remembered with their location but offer no shapes."""
    catalog = build_catalog([contract("test.Plain", op("add", "ADD"), marked=False, line=9)])

    assert catalog.by_tag("ADD") == ()
    assert catalog.unmarked_location("test.Plain") == SourceLocation("test.py", 9)


def test_missing_tag_is_fatal():
    """An untagged operation aborts the whole catalog."""
    with pytest.raises(GenerationError) as exc:
        build_catalog([
            contract("test.Good", op("add", "ADD")),
            contract("test.Bad", op("tagged", "X"), op("untagged", None, line=12)),
        ])

    (diag,) = exc.value.diagnostics
    assert diag.severity is Severity.FATAL
    assert diag.message == "Operation test.Bad.untagged should be annotated with @action"
    assert diag.location.line == 12


def test_duplicate_shape_in_one_contract_is_fatal():
    """Same tag and same args twice in one contract is a catalog defect."""
    with pytest.raises(GenerationError) as exc:
        build_catalog([
            contract("test.Actions", op("one", "ADD", ("n", "int")), op("two", "ADD", ("m", "int")))
        ])

    assert "test.Actions.one and test.Actions.two" in exc.value.diagnostics[0].message
