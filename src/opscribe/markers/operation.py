from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, TypeVar

F = TypeVar("F", bound=Callable[..., Any])
E = TypeVar("E", bound=type)

API_ERRORS_ATTR = "__api_errors__"
API_OPERATION_ATTR = "__api_operation__"
RESPONSE_STATUS_ATTR = "__response_status__"


@dataclass(frozen=True)
class ApiError:
    code: int
    reason: str = ""


@dataclass(frozen=True)
class ApiErrors:
    """Error declarations attached to a handler by @api_errors."""

    exceptions: tuple[type[BaseException], ...] = ()
    errors: tuple[ApiError, ...] = ()


@dataclass(frozen=True)
class ApiOperation:
    summary: Optional[str] = None
    notes: Optional[str] = None
    nickname: Optional[str] = None
    response_class: Optional[str] = None


@dataclass(frozen=True)
class ResponseStatus:
    code: int
    reason: str = ""


def api_errors(*exceptions: type[BaseException], errors: Iterable[ApiError] = ()) -> Callable[[F], F]:
    """
    Declare the errors a handler may produce.

      @api_errors(NotFoundError, BadRequestError)
      @api_errors(errors=[ApiError(404, "Pet not found")])

    Exception classes are mapped to status codes through the exception
    status map when the operation is read. Stacking the decorator appends.
    """
    for exc in exceptions:
        if not (isinstance(exc, type) and issubclass(exc, BaseException)):
            raise TypeError(f"api_errors expects exception classes, got {exc!r}")

    errors = tuple(errors)
    for err in errors:
        if not isinstance(err, ApiError):
            raise TypeError(f"api_errors(errors=...) expects ApiError entries, got {err!r}")
        if not 100 <= err.code <= 599:
            raise ValueError(f"invalid HTTP status code: {err.code}")

    def wrap(fn: F) -> F:
        prev: Optional[ApiErrors] = getattr(fn, API_ERRORS_ATTR, None)
        if prev is None:
            merged = ApiErrors(exceptions=tuple(exceptions), errors=errors)
        else:
            # decorators apply bottom-up; keep source order top-down
            merged = ApiErrors(
                exceptions=tuple(exceptions) + prev.exceptions,
                errors=errors + prev.errors,
            )
        setattr(fn, API_ERRORS_ATTR, merged)
        return fn

    return wrap


def api_operation(
    summary: Optional[str] = None,
    notes: Optional[str] = None,
    nickname: Optional[str] = None,
    response_class: Optional[str] = None,
) -> Callable[[F], F]:
    def wrap(fn: F) -> F:
        setattr(
            fn,
            API_OPERATION_ATTR,
            ApiOperation(summary=summary, notes=notes, nickname=nickname, response_class=response_class),
        )
        return fn

    return wrap


def response_status(code: int, reason: str = "") -> Callable[[E], E]:
    """Attach a default HTTP status to an exception class."""

    def wrap(cls: E) -> E:
        if not (isinstance(cls, type) and issubclass(cls, BaseException)):
            raise TypeError(f"response_status can only decorate exception classes, got {cls!r}")
        setattr(cls, RESPONSE_STATUS_ATTR, ResponseStatus(code=code, reason=reason))
        return cls

    return wrap
