"""
Decorated contracts and reducers shared by dispatch and CLI tests.
"""

from reductor import ActionValue, Reducer, action, action_creator, auto_reducer, handles, initial_state


@action_creator
class TextActions:
    @action("ACTION_1")
    def append(self, number: int, suffix: str) -> ActionValue:
        ...

    @action("UPPERCASE")
    def uppercase(self) -> ActionValue:
        ...


@action_creator
class CounterActions:
    @action("INC")
    def increment(self, times: int) -> ActionValue:
        ...

    @action("RESET")
    def reset(self) -> ActionValue:
        ...


@auto_reducer
class TextReducer(Reducer[str]):
    @initial_state
    def initial(self) -> str:
        return "initial"

    @handles("ACTION_1", source=TextActions)
    def append(self, state: str, number: int, suffix: str) -> str:
        return state + str(number) + suffix

    @handles("UPPERCASE", source=TextActions)
    def uppercase(self, state: str) -> str:
        return state.upper()


@auto_reducer
class CounterReducer(Reducer[int]):
    def __init__(self, step: int, label: str):
        self.step = step
        self.label = label

    @handles("INC")
    def increment(self, state: int, times: int) -> int:
        return state + self.step * times

    @handles("RESET", source=CounterActions)
    @staticmethod
    def reset(state: int) -> int:
        return 0
