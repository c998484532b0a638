"""Execution-model classification and signature extraction.

``classify`` is a pure structural read of a function object: it never
modifies the target, it only records what the synthesizer needs to build
an equivalent wrapper.
"""

from __future__ import annotations

import inspect
import typing
from collections.abc import Callable, Iterator
from typing import Any

from hemera.models.domain import ExecutionModel, FunctionShape


def _unwrap_binding(target: Any) -> tuple[Callable[..., Any], str]:
    if isinstance(target, classmethod):
        return target.__func__, "classmethod"
    if isinstance(target, staticmethod):
        return target.__func__, "staticmethod"
    if not callable(target):
        msg = f"hemera can only instrument functions, got {type(target).__name__}"
        raise TypeError(msg)
    return target, "function"


def execution_model(func: Callable[..., Any]) -> ExecutionModel:
    """Tell how ``func`` delivers its result."""
    if inspect.isasyncgenfunction(func):
        return ExecutionModel.ASYNC_GENERATOR
    if inspect.iscoroutinefunction(func):
        return ExecutionModel.SUSPENDING
    if inspect.isgeneratorfunction(func):
        return ExecutionModel.GENERATOR
    return ExecutionModel.IMMEDIATE


def _iter_type_vars(annotation: Any) -> Iterator[Any]:
    if isinstance(annotation, typing.TypeVar | typing.ParamSpec | typing.TypeVarTuple):
        yield annotation
        return
    # Callable[[A, B], R] nests its parameter types in a plain list.
    args = annotation if isinstance(annotation, list) else typing.get_args(annotation)
    for arg in args:
        yield from _iter_type_vars(arg)


def _type_params(func: Callable[..., Any]) -> tuple[Any, ...]:
    declared = getattr(func, "__type_params__", ())
    if declared:
        return tuple(declared)

    try:
        hints = typing.get_type_hints(func)
    except (NameError, TypeError):
        # Forward references that cannot be resolved at decoration time.
        return ()
    found: dict[Any, None] = {}
    for annotation in hints.values():
        for type_var in _iter_type_vars(annotation):
            found.setdefault(type_var, None)
    return tuple(found)


def classify(target: Any) -> FunctionShape:
    """Read the shape of a function, classmethod or staticmethod.

    Args:
        target: The object being decorated.

    Returns:
        A FunctionShape describing the target. The return annotation
        defaults to ``None`` when the function declares none.

    Raises:
        TypeError: If ``target`` is not callable.
    """
    func, binding = _unwrap_binding(target)
    signature = inspect.signature(func)
    returns = signature.return_annotation
    if returns is inspect.Signature.empty:
        returns = None

    name = getattr(func, "__name__", type(func).__name__)
    return FunctionShape(
        name=name,
        qualname=getattr(func, "__qualname__", name),
        module=getattr(func, "__module__", None),
        type_params=_type_params(func),
        parameters=tuple(signature.parameters.values()),
        returns=returns,
        model=execution_model(func),
        body=func,
        binding=binding,
    )
