from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Protocol, runtime_checkable


class _Missing:
    def __init__(self, label: str) -> None:
        self._label = label

    def __repr__(self) -> str:
        return self._label


NO_ANNOTATION: Any = _Missing("NO_ANNOTATION")
NO_DEFAULT: Any = _Missing("NO_DEFAULT")


@dataclass(frozen=True)
class FormalParameter:
    """
    One formal parameter of a handler.

    `name` is the interpreter-supplied name and may be None when the
    handler source cannot provide it. `annotation` is the bare type with
    Annotated extras removed; those extras are kept in `markers`.
    """

    index: int
    name: Optional[str] = None
    annotation: Any = NO_ANNOTATION
    markers: tuple[Any, ...] = ()
    default: Any = NO_DEFAULT

    def marker(self, kind: type) -> Any:
        return find_marker(self.markers, kind)

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@runtime_checkable
class Handler(Protocol):
    """What the operation reader needs to know about an endpoint handler."""

    @property
    def name(self) -> str: ...

    @property
    def parameters(self) -> tuple[FormalParameter, ...]: ...

    @property
    def return_annotation(self) -> Any: ...

    @property
    def markers(self) -> tuple[Any, ...]: ...

    @property
    def declared_raises(self) -> tuple[type[BaseException], ...]: ...

    @property
    def summary(self) -> str: ...

    @property
    def notes(self) -> str: ...


def find_marker(markers: tuple[Any, ...], kind: type) -> Any:
    for m in markers:
        if isinstance(m, kind):
            return m
    return None


@dataclass(frozen=True)
class SyntheticHandler:
    """In-memory handler, for callers that already hold the metadata."""

    name: str
    parameters: tuple[FormalParameter, ...] = ()
    return_annotation: Any = NO_ANNOTATION
    markers: tuple[Any, ...] = ()
    declared_raises: tuple[type[BaseException], ...] = ()
    summary: str = ""
    notes: str = ""
