"""
Error types for opscribe.

Only structural failures are raised. Missing names, unmapped exceptions and
unclassifiable parameters degrade to defaults inside the Operation.
"""

from __future__ import annotations

from typing import Any


class OpscribeError(Exception):
    """Base class for opscribe errors."""


class InvalidHandlerError(OpscribeError):
    """The handler cannot be introspected; no Operation is produced."""

    def __init__(self, target: Any, reason: str):
        self.target = target
        self.reason = reason
        super().__init__(f"Cannot read handler {_describe(target)}: {reason}")


class ConfigError(OpscribeError):
    """Configuration refers to something that cannot be resolved."""


def _describe(target: Any) -> str:
    name = getattr(target, "__qualname__", None) or getattr(target, "__name__", None)
    if name:
        return repr(name)
    return f"of type {type(target).__name__}"
