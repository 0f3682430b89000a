from __future__ import annotations

import collections.abc
import datetime as dt
import decimal
import enum
import typing
import uuid
from dataclasses import dataclass
from types import NoneType, UnionType
from typing import Any, Union

from opscribe.handler.model import NO_ANNOTATION

# scalar types map to lower-case semantic names
_SCALARS: tuple[tuple[type, str], ...] = (
    (bool, "boolean"),
    (str, "string"),
    (int, "integer"),
    (float, "number"),
    (decimal.Decimal, "number"),
    (bytes, "byte"),
    (bytearray, "byte"),
    (dt.datetime, "date-time"),
    (dt.date, "date"),
    (dt.time, "string"),
    (uuid.UUID, "string"),
)

_ARRAY_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.Iterable,
)
_OBJECT_ORIGINS = (dict, collections.abc.Mapping, collections.abc.MutableMapping)

# the same containers when only their spelled-out name is known
_ARRAY_NAMES = frozenset({"list", "tuple", "set", "frozenset", "sequence", "mutablesequence", "iterable"})
_OBJECT_NAMES = frozenset({"dict", "mapping", "mutablemapping"})


@dataclass(frozen=True)
class TypeInfo:
    data_type: str
    allowable_values: tuple[str, ...] = ()
    allow_multiple: bool = False


def describe_type(annotation: Any) -> TypeInfo:
    """Normalize a Python type annotation for documentation."""
    if annotation is NO_ANNOTATION or annotation is Any:
        return TypeInfo("string")

    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if isinstance(annotation, str):
        # unresolved forward reference, e.g. "models.Pet" or "list[Pet]"
        return _describe_text(annotation)

    for scalar, name in _SCALARS:
        if annotation is scalar:
            return TypeInfo(name)

    origin = typing.get_origin(annotation)
    args = typing.get_args(annotation)

    if origin is Union or origin is UnionType:
        non_none = [a for a in args if a is not NoneType]
        if len(non_none) == 1:
            return describe_type(non_none[0])
        infos = {describe_type(a).data_type for a in non_none}
        if infos <= {"integer", "number"}:
            return TypeInfo("number")
        if len(infos) == 1:
            return TypeInfo(infos.pop())
        return TypeInfo("string")

    if origin is typing.Literal:
        return TypeInfo("string", allowable_values=tuple(str(a) for a in args))

    if origin is typing.Annotated:
        return describe_type(args[0])

    if origin in _ARRAY_ORIGINS or annotation in _ARRAY_ORIGINS:
        return TypeInfo("array", allow_multiple=True)

    if origin in _OBJECT_ORIGINS or annotation in _OBJECT_ORIGINS:
        return TypeInfo("object")

    if isinstance(annotation, type) and issubclass(annotation, enum.Enum):
        return TypeInfo("string", allowable_values=tuple(str(m.value) for m in annotation))

    if isinstance(annotation, type):
        return TypeInfo(annotation.__name__)

    name = getattr(annotation, "__name__", None)
    if name:
        return TypeInfo(name)
    return _describe_text(repr(annotation))


def data_type_name(annotation: Any) -> str:
    return describe_type(annotation).data_type


def response_class_name(annotation: Any) -> str:
    """Return type name for an operation; "void" when nothing is returned."""
    if annotation is NO_ANNOTATION or annotation is None or annotation is NoneType:
        return "void"

    info = describe_type(annotation)
    if info.data_type == "array":
        element = _element_type(annotation)
        if element is not None:
            return f"List[{response_class_name(element)}]"
    return info.data_type


def _element_type(annotation: Any) -> Any:
    if isinstance(annotation, typing.ForwardRef):
        annotation = annotation.__forward_arg__
    if isinstance(annotation, str):
        base, args = _split_subscript(annotation)
        if base.lower() == "optional" and args:
            return _element_type(args[0])
        return args[0] if args else None
    args = [a for a in typing.get_args(_strip_optional(annotation)) if a is not Ellipsis]
    return args[0] if args else None


def _strip_optional(annotation: Any) -> Any:
    if typing.get_origin(annotation) in (Union, UnionType):
        non_none = [a for a in typing.get_args(annotation) if a is not NoneType]
        if len(non_none) == 1:
            return non_none[0]
    return annotation


def _describe_text(text: str) -> TypeInfo:
    base, args = _split_subscript(text)
    key = base.lower()
    if key == "optional" and args:
        return _describe_text(args[0])
    if key in _ARRAY_NAMES:
        return TypeInfo("array", allow_multiple=True)
    if key in _OBJECT_NAMES:
        return TypeInfo("object")
    return TypeInfo(base or "string")


def _split_subscript(text: str) -> tuple[str, list[str]]:
    """'typing.Dict[str, list[int]]' -> ('Dict', ['str', 'list[int]'])"""
    text = text.strip().strip("'\"")
    head, _, rest = text.partition("[")
    base = head.strip().rsplit(".", 1)[-1]
    inner = rest.rsplit("]", 1)[0]

    args: list[str] = []
    depth, start = 0, 0
    for i, ch in enumerate(inner):
        if ch == "[":
            depth += 1
        elif ch == "]":
            depth -= 1
        elif ch == "," and depth == 0:
            args.append(inner[start:i].strip())
            start = i + 1
    tail = inner[start:].strip()
    if tail:
        args.append(tail)
    return base, [a for a in args if a != "..."]
