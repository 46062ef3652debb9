"""
Builders for declaration records used across tests.
"""

from reductor.core import (
    ContractDecl,
    HandlerDecl,
    OperationDecl,
    Param,
    ParameterType,
    ReducerDecl,
    SourceLocation,
)


def params(*pairs):
    return tuple(Param(name=name, type=ParameterType(tp)) for name, tp in pairs)


def op(name, tag, *pairs, line=None):
    return OperationDecl(name=name, tag=tag, params=params(*pairs), location=SourceLocation("test.py", line))


def contract(name, *operations, marked=True, line=None):
    module = name.split(".", 1)[0] if "." in name else ""
    return ContractDecl(
        name=name,
        marked=marked,
        operations=tuple(operations),
        location=SourceLocation("test.py", line),
        module=module,
    )


def handler(name, tag, *pairs, source=None, line=None):
    return HandlerDecl(
        name=name,
        tag=tag,
        params=params(*pairs),
        source=source,
        location=SourceLocation("test.py", line),
    )


def reducer(*handlers, name="FoobarReducer", module="test", state="str", **kwargs):
    return ReducerDecl(
        name=name,
        module=module,
        state_type=ParameterType(state),
        handlers=tuple(handlers),
        location=SourceLocation("test.py", 1),
        **kwargs,
    )
