from __future__ import annotations

import builtins
import functools
import inspect
import logging
import typing
from types import NoneType, UnionType
from typing import Any, Callable, Optional, Union

from opscribe.errors import InvalidHandlerError
from opscribe.handler.docstring import raised_names, split_docstring
from opscribe.handler.model import NO_ANNOTATION, NO_DEFAULT, FormalParameter
from opscribe.markers.operation import API_ERRORS_ATTR, API_OPERATION_ATTR

logger = logging.getLogger(__name__)

_SKIPPED_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


class FunctionHandler:
    """
    Handler backed by a real Python callable.

    Everything is read once, at construction. Plain functions, bound
    methods, functools.partial objects and callable instances are accepted.
    *args / **kwargs are not formal parameters and are left out.
    """

    def __init__(self, target: Callable[..., Any]):
        if not callable(target):
            raise InvalidHandlerError(target, "not callable")

        try:
            sig = inspect.signature(target)
        except (TypeError, ValueError) as e:
            raise InvalidHandlerError(target, f"signature is not introspectable ({e})") from e

        self.target = target
        # decorators built with functools.wraps keep the handler in __wrapped__
        self._fn = inspect.unwrap(_underlying_function(target))
        globalns: dict[str, Any] = getattr(self._fn, "__globals__", None) or {}

        self.name = _simple_name(target)
        self.parameters = tuple(_formal_parameters(sig, globalns))
        self.return_annotation = split_annotated(_resolve_annotation(sig.return_annotation, globalns))[0]

        self.markers = tuple(
            m for m in (self._attr(API_ERRORS_ATTR), self._attr(API_OPERATION_ATTR)) if m is not None
        )

        doc = getattr(self._fn, "__doc__", None)
        self.summary, self.notes = split_docstring(doc)
        self.declared_raises = tuple(_resolve_raises(self._fn, raised_names(doc)))

    def _attr(self, name: str) -> Any:
        value = getattr(self.target, name, None)
        if value is None:
            value = getattr(self._fn, name, None)
        return value

    def __repr__(self) -> str:
        return f"FunctionHandler({self.name!r}, parameters={len(self.parameters)})"


def _underlying_function(target: Any) -> Any:
    fn = target
    while isinstance(fn, functools.partial):
        fn = fn.func
    if inspect.ismethod(fn):
        fn = fn.__func__
    if not (inspect.isfunction(fn) or inspect.isbuiltin(fn)) and hasattr(type(fn), "__call__"):
        call = getattr(type(fn), "__call__")
        if inspect.isfunction(call):
            fn = call
    return fn


def _simple_name(target: Any) -> str:
    fn = target
    while isinstance(fn, functools.partial):
        fn = fn.func
    name = getattr(fn, "__name__", None)
    if not name:
        name = type(fn).__name__
    return name


class _LenientNamespace(dict):
    """Names missing from the handler's module become forward references."""

    def __init__(self, globalns: dict[str, Any]):
        super().__init__()
        self._globalns = globalns

    def __missing__(self, key: str) -> Any:
        if key in self._globalns:
            return self._globalns[key]
        if hasattr(builtins, key):
            return getattr(builtins, key)
        return typing.ForwardRef(key)


def _resolve_annotation(raw: Any, globalns: dict[str, Any]) -> Any:
    """
    Evaluate one annotation on its own.

    String annotations (from __future__ import annotations, quoted forward
    references) are evaluated against the handler's module. A name that is
    not importable at runtime, e.g. one imported under TYPE_CHECKING, only
    degrades to a ForwardRef where it appears, so Annotated extras survive.
    """
    if raw is inspect.Parameter.empty:
        return NO_ANNOTATION
    if isinstance(raw, str):
        try:
            value = eval(raw, {"__builtins__": builtins}, _LenientNamespace(globalns))
        except Exception as e:
            logger.debug("Annotation %r could not be evaluated: %s", raw, e)
            return raw
        raw = raw if isinstance(value, typing.ForwardRef) else value
    return NoneType if raw is None else raw


def _formal_parameters(sig: inspect.Signature, globalns: dict[str, Any]) -> list[FormalParameter]:
    out: list[FormalParameter] = []
    for p in sig.parameters.values():
        if p.kind in _SKIPPED_KINDS:
            logger.debug("Skipping variadic parameter %r", p.name)
            continue

        annotation, markers = split_annotated(_resolve_annotation(p.annotation, globalns))

        out.append(
            FormalParameter(
                index=len(out),
                name=p.name or None,
                annotation=annotation,
                markers=markers,
                default=NO_DEFAULT if p.default is inspect.Parameter.empty else p.default,
            )
        )
    return out


def split_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """
    Annotated[T, m1, m2] -> (T, (m1, m2)); anything else -> (annotation, ()).

    Optional[Annotated[T, m]] (what typing.get_type_hints produces on 3.10 for
    a parameter defaulting to None) -> (Optional[T], (m,)).
    """
    origin = typing.get_origin(annotation)
    if origin is typing.Annotated:
        args = typing.get_args(annotation)
        return args[0], tuple(args[1:])
    if origin is Union or origin is UnionType:
        args = typing.get_args(annotation)
        members = [a for a in args if a is not NoneType]
        if len(members) == 1 and len(args) > 1 and typing.get_origin(members[0]) is typing.Annotated:
            inner, markers = split_annotated(members[0])
            return Optional[inner], markers
    return annotation, ()


def _resolve_raises(fn: Any, names: list[str]) -> list[type[BaseException]]:
    namespace: dict[str, Any] = getattr(fn, "__globals__", None) or {}
    out: list[type[BaseException]] = []
    for name in names:
        exc = _lookup(name, namespace)
        if exc is None:
            logger.debug("Declared exception %r of %r could not be resolved", name, fn)
            continue
        if exc not in out:
            out.append(exc)
    return out


def _lookup(dotted: str, namespace: dict[str, Any]) -> Optional[type[BaseException]]:
    head, *rest = dotted.split(".")
    if head in namespace:
        obj = namespace[head]
    elif hasattr(builtins, head):
        obj = getattr(builtins, head)
    else:
        return None

    for attr in rest:
        obj = getattr(obj, attr, None)
        if obj is None:
            return None

    if isinstance(obj, type) and issubclass(obj, BaseException):
        return obj
    return None
