from __future__ import annotations

import logging
from typing import Callable, Iterable, Sequence

from opscribe.domain.models import ErrorDescriptor
from opscribe.handler.model import Handler, find_marker
from opscribe.markers.operation import ApiErrors
from opscribe.resolver.status_map import ExceptionStatusMap, default_reason

logger = logging.getLogger(__name__)

ErrorStrategy = Callable[[Handler, ExceptionStatusMap], Iterable[ErrorDescriptor]]


def explicit_error_list(handler: Handler, status_map: ExceptionStatusMap) -> Iterable[ErrorDescriptor]:
    declared: ApiErrors | None = find_marker(handler.markers, ApiErrors)
    if declared is None:
        return []
    return [ErrorDescriptor(code=e.code, reason=e.reason or default_reason(e.code)) for e in declared.errors]


def referenced_exceptions(handler: Handler, status_map: ExceptionStatusMap) -> Iterable[ErrorDescriptor]:
    declared: ApiErrors | None = find_marker(handler.markers, ApiErrors)
    if declared is None:
        return []
    return _map_exceptions(handler, declared.exceptions, status_map)


def declared_raises(handler: Handler, status_map: ExceptionStatusMap) -> Iterable[ErrorDescriptor]:
    return _map_exceptions(handler, handler.declared_raises, status_map)


# precedence order: earlier strategies win on a repeated code
DEFAULT_STRATEGIES: tuple[ErrorStrategy, ...] = (
    explicit_error_list,
    referenced_exceptions,
    declared_raises,
)


def extract_error_responses(
    handler: Handler,
    status_map: ExceptionStatusMap,
    strategies: Sequence[ErrorStrategy] = DEFAULT_STRATEGIES,
) -> list[ErrorDescriptor]:
    """
    Error responses of a handler, de-duplicated by status code.

    Strategies run in order; the first descriptor seen for a code is kept
    and later ones for the same code are dropped.
    """
    out: list[ErrorDescriptor] = []
    seen: set[int] = set()
    for strategy in strategies:
        for err in strategy(handler, status_map):
            if err.code in seen:
                continue
            seen.add(err.code)
            out.append(err)
    return out


def _map_exceptions(
    handler: Handler,
    exceptions: Iterable[type[BaseException]],
    status_map: ExceptionStatusMap,
) -> list[ErrorDescriptor]:
    out: list[ErrorDescriptor] = []
    for exc in exceptions:
        hit = status_map.lookup(exc)
        if hit is None:
            logger.debug("No status mapping for %s declared by %r; skipped", exc.__name__, handler.name)
            continue
        out.append(hit)
    return out
