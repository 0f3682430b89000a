from opscribe.handler.model import FormalParameter
from opscribe.markers.params import (
    ApiParam,
    ModelAttribute,
    PathVariable,
    RequestBody,
    RequestHeader,
    RequestParam,
)
from opscribe.resolver.classifier import classify_parameter
from opscribe.routing.condition import RouteCondition

from sample_handlers import Pet

NO_ROUTE = RouteCondition()


def classify(markers=(), annotation=str, name="p", route=NO_ROUTE):
    p = FormalParameter(index=0, name=name, annotation=annotation, markers=tuple(markers))
    return classify_parameter(p, name, route)


def test_path_variable_is_required_path():
    c = classify([PathVariable("id")], annotation=int)
    assert (c.param_type, c.data_type, c.required) == ("path", "integer", True)


def test_path_variable_ignores_api_param_required():
    c = classify([PathVariable("id"), ApiParam(required=False)])
    assert c.required is True


def test_path_beats_other_bindings():
    c = classify([RequestParam("q"), PathVariable("id")])
    assert c.param_type == "path"


def test_request_body():
    c = classify([RequestBody()], annotation=Pet)
    assert (c.param_type, c.data_type, c.required) == ("body", "Pet", True)


def test_request_body_type_override():
    c = classify([RequestBody(), ApiParam(data_type="PetInput")], annotation=dict)
    assert c.data_type == "PetInput"


def test_model_attribute_is_body():
    c = classify([ModelAttribute("form")], annotation=Pet)
    assert (c.param_type, c.required) == ("body", True)


def test_request_param_required_defaults_true():
    c = classify([RequestParam()])
    assert (c.param_type, c.required) == ("query", True)


def test_request_param_not_required():
    c = classify([RequestParam("q", required=False)])
    assert (c.param_type, c.required) == ("query", False)


def test_api_param_required_overrides_query_flag():
    c = classify([RequestParam("q", required=False), ApiParam(required=True)])
    assert c.required is True


def test_request_header():
    c = classify([RequestHeader("X-Token")])
    assert (c.param_type, c.required) == ("header", True)


def test_route_condition_makes_query():
    c = classify(name="limit", annotation=int, route=RouteCondition.of("limit"))
    assert (c.param_type, c.data_type, c.required) == ("query", "integer", True)


def test_unmatched_parameter_is_unknown_not_error():
    c = classify(name="whatever", route=RouteCondition.of("limit"))
    assert (c.param_type, c.required) == ("unknown", False)


def test_explicit_binding_wins_over_route_condition():
    c = classify([RequestHeader()], name="limit", route=RouteCondition.of("limit"))
    assert c.param_type == "header"
