"""
Reducers whose constructors use defaults and every parameter kind.
"""

from reductor import ActionValue, Reducer, action, action_creator, auto_reducer, handles


@action_creator
class StepActions:
    @action("STEP")
    def step(self) -> ActionValue:
        ...


@auto_reducer
class DefaultedReducer(Reducer[int]):
    def __init__(self, step: int = 1):
        self.step = step

    @handles("STEP", source=StepActions)
    def on_step(self, state: int) -> int:
        return state + self.step


@auto_reducer
class KeywordReducer(Reducer[int]):
    def __init__(self, *, step: int, label: str = "kw"):
        self.step = step
        self.label = label

    @handles("STEP", source=StepActions)
    def on_step(self, state: int) -> int:
        return state + self.step


@auto_reducer
class PositionalReducer(Reducer[int]):
    def __init__(self, step: int, /, scale: int = 1):
        self.step = step
        self.scale = scale

    @handles("STEP", source=StepActions)
    def on_step(self, state: int) -> int:
        return state + self.step * self.scale
