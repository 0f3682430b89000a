import pytest

from opscribe.routing.condition import ParamExpression, RouteCondition


def test_parse_expressions():
    assert ParamExpression.parse("id") == ParamExpression(name="id")
    assert ParamExpression.parse("!debug") == ParamExpression(name="debug", negated=True)
    assert ParamExpression.parse("mode=full") == ParamExpression(name="mode", value="full")
    assert ParamExpression.parse(" mode != full ") == ParamExpression(name="mode", value="full", negated=True)


def test_empty_expression_rejected():
    with pytest.raises(ValueError):
        ParamExpression.parse("  ")


def test_accepted_names_exclude_negated_presence():
    route = RouteCondition.of("id", "!debug", "mode=full", "format!=xml")
    assert route.accepted_names == frozenset({"id", "mode", "format"})
    assert route.accepts("id")
    assert not route.accepts("debug")
    assert not route.accepts("other")


def test_empty_route_accepts_nothing():
    assert RouteCondition().accepted_names == frozenset()
