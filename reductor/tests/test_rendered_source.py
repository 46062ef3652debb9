"""
Tests for rendered source executed as a module.

Critical: the rendered dispatcher must behave exactly like the materialized
one: each action reaches its bound handler with the state and the action
values in order, and unknown actions leave the state unchanged.
"""

import pytest

from reductor import ActionValue, create_reducer
from reductor.discovery import collect_module
from reductor.generate import render_module
from reductor.pipeline import run_generation
from reductor.runtime import builder_for, clear_builder_cache
from reductor.runtime.actions import find_generated_builder
from reductor.tests import constructor_app, sample_app
from reductor.tests.sample_app import TextActions, TextReducer


@pytest.fixture(autouse=True)
def isolated_builders(monkeypatch):
    """Builders registered by an executed module stay local to the test."""
    monkeypatch.setattr("reductor.runtime.actions._generated", {})
    clear_builder_cache()
    yield
    clear_builder_cache()


def load_rendered(module):
    discovered = collect_module(module)
    result = run_generation(discovered.contracts, discovered.reducers)
    assert result.ok
    source = render_module(result.reducers, result.builders)
    namespace = {}
    exec(compile(source, f"<{module.__name__} generated>", "exec"), namespace)
    return namespace


def test_rendered_round_trip():
    generated = load_rendered(sample_app)
    reducer = generated["TextReducerImpl"]()
    builder = generated["TextActions_AutoImpl"]()

    assert isinstance(reducer, TextReducer)
    assert reducer.reduce("x", builder.append(1, "s")) == reducer.append("x", 1, "s") == "x1s"
    assert reducer.reduce(None, builder.uppercase()) == "INITIAL"
    assert reducer.reduce("x", generated["TextReducerImpl"].ActionCreator.append(7, "!")) == "x7!"

    state = "same"
    assert reducer.reduce(state, ActionValue.create("UNKNOWN", 1)) is state


def test_rendered_matches_materialized():
    generated = load_rendered(sample_app)
    rendered = generated["TextReducerImpl"]()
    materialized = create_reducer(TextReducer)
    actions = [
        ActionValue.create("ACTION_1", 3, "?"),
        ActionValue.create("UPPERCASE"),
        ActionValue.create("NOT_HANDLED"),
    ]

    for state in (None, "abc"):
        for action in actions:
            assert rendered.reduce(state, action) == materialized.reduce(state, action)


def test_rendered_constructor_and_static_handler():
    generated = load_rendered(sample_app)
    counter = generated["CounterReducerImpl"](2, "c")
    builder = generated["CounterActions_AutoImpl"]()

    assert (counter.step, counter.label) == (2, "c")
    assert counter.reduce(1, builder.increment(3)) == 7
    assert counter.reduce(41, builder.reset()) == 0


def test_rendered_builders_are_registered():
    generated = load_rendered(sample_app)

    assert find_generated_builder(TextActions) is generated["TextActions_AutoImpl"]
    assert isinstance(builder_for(TextActions), generated["TextActions_AutoImpl"])


def test_rendered_constructor_defaults_and_kinds():
    generated = load_rendered(constructor_app)
    step = generated["StepActions_AutoImpl"]().step()

    assert generated["DefaultedReducerImpl"]().reduce(0, step) == 1
    assert generated["DefaultedReducerImpl"](step=4).reduce(0, step) == 4

    keyword = generated["KeywordReducerImpl"](step=3)
    assert (keyword.step, keyword.label) == (3, "kw")
    with pytest.raises(TypeError):
        generated["KeywordReducerImpl"](3)

    positional = generated["PositionalReducerImpl"](5, scale=2)
    assert positional.reduce(0, step) == 10
    assert generated["PositionalReducerImpl"](5).scale == 1
    with pytest.raises(TypeError):
        generated["PositionalReducerImpl"](step=5)
