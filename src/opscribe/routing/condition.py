from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class ParamExpression:
    name: str
    value: str | None = None
    negated: bool = False

    @classmethod
    def parse(cls, expression: str) -> "ParamExpression":
        """
        Route parameter expressions:
          "id"          parameter must be present
          "!debug"      parameter must be absent
          "mode=full"   parameter must equal a value
          "mode!=full"  parameter must be present with a different value
        """
        expr = expression.strip()
        if not expr:
            raise ValueError("empty route parameter expression")

        if "!=" in expr:
            name, value = expr.split("!=", 1)
            return cls(name=name.strip(), value=value.strip(), negated=True)
        if "=" in expr:
            name, value = expr.split("=", 1)
            return cls(name=name.strip(), value=value.strip())
        if expr.startswith("!"):
            return cls(name=expr[1:].strip(), negated=True)
        return cls(name=expr)

    @property
    def requires_presence(self) -> bool:
        # "!name" excludes the parameter; "name!=v" still needs it sent
        return not (self.negated and self.value is None)


@dataclass(frozen=True)
class RouteCondition:
    """Query parameters a matched route declares."""

    expressions: tuple[ParamExpression, ...] = ()

    @classmethod
    def of(cls, *expressions: str) -> "RouteCondition":
        return cls.from_expressions(expressions)

    @classmethod
    def from_expressions(cls, expressions: Iterable[str]) -> "RouteCondition":
        return cls(expressions=tuple(ParamExpression.parse(e) for e in expressions))

    @property
    def accepted_names(self) -> frozenset[str]:
        return frozenset(e.name for e in self.expressions if e.requires_presence)

    def accepts(self, name: str) -> bool:
        return name in self.accepted_names
