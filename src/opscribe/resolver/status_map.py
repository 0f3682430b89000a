from __future__ import annotations

from http import HTTPStatus
from types import MappingProxyType
from typing import Mapping, Optional, Union

from opscribe.domain.models import ErrorDescriptor
from opscribe.markers.operation import RESPONSE_STATUS_ATTR, ResponseStatus

StatusEntry = Union[int, tuple[int, str]]


def default_reason(code: int) -> str:
    try:
        return HTTPStatus(code).phrase
    except ValueError:
        return ""


class ExceptionStatusMap:
    """
    Read-only exception type -> (status code, reason) table.

    Lookup walks the exception's MRO, so subclasses of a mapped exception
    share its entry unless they have one of their own. At each class the
    table is consulted before a @response_status marker on that class.
    """

    def __init__(self, entries: Optional[Mapping[type[BaseException], StatusEntry]] = None):
        table: dict[type[BaseException], ErrorDescriptor] = {}
        for exc, entry in (entries or {}).items():
            if not (isinstance(exc, type) and issubclass(exc, BaseException)):
                raise TypeError(f"status map keys must be exception classes, got {exc!r}")
            code, reason = (entry, "") if isinstance(entry, int) else entry
            table[exc] = _descriptor(code, reason)
        self._table = MappingProxyType(table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, exc: object) -> bool:
        return isinstance(exc, type) and self.lookup(exc) is not None

    def lookup(self, exc: type[BaseException]) -> Optional[ErrorDescriptor]:
        for klass in exc.__mro__:
            hit = self._table.get(klass)
            if hit is not None:
                return hit
            marker = klass.__dict__.get(RESPONSE_STATUS_ATTR)
            if isinstance(marker, ResponseStatus):
                return _descriptor(marker.code, marker.reason)
        return None


def _descriptor(code: int, reason: str) -> ErrorDescriptor:
    if not 100 <= int(code) <= 599:
        raise ValueError(f"invalid HTTP status code: {code}")
    return ErrorDescriptor(code=int(code), reason=reason or default_reason(int(code)))

