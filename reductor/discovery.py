"""
Discovery: decorated Python classes -> declaration records.

This is the only place that inspects live classes. Everything downstream of
discovery works on the records from reductor.core.declarations.
"""

import ast
import inspect
import types
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple, TypeVar, get_args, get_origin, get_type_hints

from .annotations import (
    action_tag,
    handler_spec,
    is_action_creator,
    is_auto_reducer,
    is_initial_state,
    members,
    operations,
    qualified_name,
)
from .core.declarations import (
    ConstructorDecl,
    ContractDecl,
    HandlerDecl,
    OperationDecl,
    Param,
    ParamKind,
    ReducerDecl,
)
from .core.errors import GenerationError
from .core.messages import (
    keyword_only_argument,
    missing_state_parameter,
    missing_type_annotation,
    non_literal_default,
    variable_arguments,
)
from .core.reducer import Reducer
from .core.types import Diagnostic, ParameterType, SourceLocation, UNKNOWN_LOCATION

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)

_KINDS = {
    inspect.Parameter.POSITIONAL_ONLY: ParamKind.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD: ParamKind.POSITIONAL,
    inspect.Parameter.KEYWORD_ONLY: ParamKind.KEYWORD_ONLY,
}


def class_location(cls: type) -> SourceLocation:
    try:
        file = inspect.getsourcefile(cls)
        _, line = inspect.getsourcelines(cls)
    except (OSError, TypeError):
        return UNKNOWN_LOCATION
    return SourceLocation(file=file, line=line)


def function_location(fn: Any) -> SourceLocation:
    code = getattr(fn, "__code__", None)
    if code is None:
        return UNKNOWN_LOCATION
    return SourceLocation(file=code.co_filename, line=code.co_firstlineno)


def _hints(fn: Any) -> Dict[str, Any]:
    try:
        return get_type_hints(fn)
    except NameError:
        # Unresolvable forward references keep their string form
        return dict(getattr(fn, "__annotations__", {}))


def _default_source(p: inspect.Parameter) -> Optional[str]:
    """Source text of a parameter default; raises ValueError unless it is a literal."""
    if p.default is inspect.Parameter.empty:
        return None
    text = repr(p.default)
    try:
        ast.literal_eval(text)
    except (SyntaxError, TypeError, ValueError):
        raise ValueError(text) from None
    return text


def _params(
    owner: str,
    fn: Any,
    skip: int,
    diagnostics: List[Diagnostic],
    require_annotations: bool = True,
    keyword_only: bool = False,
    defaults: bool = True,
) -> Tuple[Param, ...]:
    """
    Declared parameters of fn after the first `skip` ones (receiver, state).

    Appends a diagnostic for variadic or unannotated parameters, for
    keyword-only ones unless keyword_only is set, and for defaults that are
    not literals. With defaults off, defaults are not recorded at all.
    """
    hints = _hints(fn)
    params = []
    for p in list(inspect.signature(fn).parameters.values())[skip:]:
        if p.kind in _VARIADIC:
            diagnostics.append(Diagnostic.fatal(variable_arguments(owner, fn.__name__), function_location(fn)))
            continue
        if p.kind is inspect.Parameter.KEYWORD_ONLY and not keyword_only:
            diagnostics.append(
                Diagnostic.fatal(keyword_only_argument(owner, fn.__name__, p.name), function_location(fn))
            )
            continue
        if p.name in hints:
            tp = ParameterType.of(hints[p.name])
        elif require_annotations:
            diagnostics.append(
                Diagnostic.fatal(missing_type_annotation(owner, fn.__name__, p.name), function_location(fn))
            )
            continue
        else:
            tp = ParameterType("Any")
        default = None
        if defaults:
            try:
                default = _default_source(p)
            except ValueError:
                diagnostics.append(
                    Diagnostic.fatal(non_literal_default(owner, fn.__name__, p.name), function_location(fn))
                )
                continue
        params.append(Param(name=p.name, type=tp, kind=_KINDS[p.kind], default=default))
    return tuple(params)


def _receiver_count(cls: type, name: str) -> int:
    member = inspect.getattr_static(cls, name)
    return 0 if isinstance(member, staticmethod) else 1


def describe_contract(cls: type) -> ContractDecl:
    """
    Describe an action-creator contract class.

    Unmarked classes are described too (with no operations) so resolution
    can report them by name and location.

    Raises:
        GenerationError: If an operation has variadic or unannotated parameters
    """
    name = qualified_name(cls)
    location = class_location(cls)
    if not is_action_creator(cls):
        return ContractDecl(name=name, marked=False, location=location, module=cls.__module__)

    diagnostics: List[Diagnostic] = []
    ops = []
    for op_name, fn in operations(cls):
        params = _params(name, fn, _receiver_count(cls, op_name), diagnostics)
        ops.append(OperationDecl(name=op_name, tag=action_tag(fn), params=params, location=function_location(fn)))

    if diagnostics:
        raise GenerationError(diagnostics)
    return ContractDecl(
        name=name,
        marked=True,
        operations=tuple(ops),
        location=location,
        module=cls.__module__,
    )


def _state_type(cls: type) -> ParameterType:
    for klass in cls.__mro__:
        for base in getattr(klass, "__orig_bases__", ()):
            origin = get_origin(base)
            if isinstance(origin, type) and issubclass(origin, Reducer):
                args = get_args(base)
                if args and not isinstance(args[0], TypeVar):
                    return ParameterType.of(args[0])
    return ParameterType("Any")


def _constructors(cls: type, diagnostics: List[Diagnostic]) -> Tuple[ConstructorDecl, ...]:
    init = cls.__init__
    if init is object.__init__ or not inspect.isfunction(init):
        return ()
    owner = qualified_name(cls)
    params = _params(owner, init, 1, diagnostics, require_annotations=False, keyword_only=True)
    return (ConstructorDecl(params=params),)


def _source_name(source: Any) -> Optional[str]:
    if source is None or isinstance(source, str):
        return source
    return qualified_name(source)


def describe_reducer(cls: type) -> ReducerDecl:
    """
    Describe an auto-reducer class.

    Raises:
        GenerationError: With every handler or constructor parameter defect
    """
    owner = qualified_name(cls)
    diagnostics: List[Diagnostic] = []
    handlers = []
    producer = None

    for name, member in members(cls):
        if is_initial_state(member):
            producer = name
        spec = handler_spec(member)
        if spec is None:
            continue
        fn = member.__func__ if isinstance(member, (staticmethod, classmethod)) else member
        skip = _receiver_count(cls, name)
        if len(inspect.signature(fn).parameters) <= skip:
            diagnostics.append(Diagnostic.fatal(missing_state_parameter(owner, name), function_location(fn)))
            continue
        handlers.append(
            HandlerDecl(
                name=name,
                tag=spec.tag,
                params=_params(owner, fn, skip + 1, diagnostics, defaults=False),
                source=_source_name(spec.source),
                location=function_location(fn),
            )
        )

    constructors = _constructors(cls, diagnostics)
    if diagnostics:
        raise GenerationError(diagnostics)

    return ReducerDecl(
        name=cls.__qualname__,
        module=cls.__module__,
        state_type=_state_type(cls),
        constructors=constructors,
        initial_state=producer,
        handlers=tuple(handlers),
        location=class_location(cls),
    )


def referenced_contracts(cls: type) -> List[type]:
    """Contract classes named by the handlers of a reducer class."""
    found = []
    for _, member in members(cls):
        spec = handler_spec(member)
        if spec is not None and isinstance(spec.source, type) and spec.source not in found:
            found.append(spec.source)
    return found


@dataclass
class Discovered:
    """
    Everything discovery found in one scan.

    Fields:
        contracts: Contract records (marked ones plus unmarked ones referenced
            by handlers), in discovery order
        reducers: Reducer records in discovery order
        classes: Qualified name -> live class, for materialization
    """
    contracts: List[ContractDecl] = field(default_factory=list)
    reducers: List[ReducerDecl] = field(default_factory=list)
    classes: Dict[str, type] = field(default_factory=dict)

    def add_contract(self, cls: type) -> None:
        name = qualified_name(cls)
        if name not in self.classes:
            self.contracts.append(describe_contract(cls))
            self.classes[name] = cls

    def add_reducer(self, cls: type) -> ReducerDecl:
        name = qualified_name(cls)
        for known in self.reducers:
            if known.qualified_name == name:
                return known
        for contract in referenced_contracts(cls):
            self.add_contract(contract)
        reducer = describe_reducer(cls)
        self.classes[name] = cls
        self.reducers.append(reducer)
        return reducer


def _walk(namespace: Dict[str, Any], module_name: str, seen: Set[type]) -> List[type]:
    found = []
    for value in namespace.values():
        if isinstance(value, type) and value.__module__ == module_name and value not in seen:
            seen.add(value)
            found.append(value)
            found.extend(_walk(vars(value), module_name, seen))
    return found


def module_classes(module: types.ModuleType) -> List[type]:
    """Classes defined at module level in module, nested classes included."""
    return _walk(vars(module), module.__name__, set())


def collect_module(module: types.ModuleType) -> Discovered:
    """
    Discover contracts and reducers defined in a module, nested classes included.

    Raises:
        GenerationError: With the diagnostics of every defective declaration
    """
    discovered = Discovered()
    diagnostics: List[Diagnostic] = []
    classes = module_classes(module)

    for cls in classes:
        if not is_action_creator(cls):
            continue
        try:
            discovered.add_contract(cls)
        except GenerationError as e:
            diagnostics.extend(e.diagnostics)
    for cls in classes:
        if not is_auto_reducer(cls):
            continue
        try:
            discovered.add_reducer(cls)
        except GenerationError as e:
            diagnostics.extend(e.diagnostics)

    if diagnostics:
        raise GenerationError(diagnostics)
    return discovered
