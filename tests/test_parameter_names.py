from opscribe.handler.model import FormalParameter
from opscribe.markers.params import ApiParam, ModelAttribute, PathVariable, RequestBody, RequestParam
from opscribe.resolver.names import dedupe_names, fallback_name, resolve_parameter_name


def test_documentation_name_beats_binding_name():
    p = FormalParameter(index=0, name="variable_a", markers=(PathVariable("mvcName"), ApiParam(name="docName")))
    assert resolve_parameter_name(p) == "docName"


def test_binding_name_beats_signature_name():
    p = FormalParameter(index=0, name="variable_b", markers=(RequestParam("q"),))
    assert resolve_parameter_name(p) == "q"


def test_api_param_without_name_does_not_count():
    p = FormalParameter(index=0, name="variable_b", markers=(ApiParam(description="x"), ModelAttribute("model")))
    assert resolve_parameter_name(p) == "model"


def test_signature_name_used_when_no_markers():
    p = FormalParameter(index=2, name="limit")
    assert resolve_parameter_name(p) == "limit"


def test_unnamed_binding_uses_signature_name():
    p = FormalParameter(index=1, name="body", markers=(RequestBody(),))
    assert resolve_parameter_name(p) == "body"


def test_missing_signature_name_falls_back():
    p = FormalParameter(index=3, name=None)
    assert resolve_parameter_name(p) == "arg3"


def test_disabled_signature_names_fall_back():
    p = FormalParameter(index=4, name="variable_e")
    assert resolve_parameter_name(p, use_signature_names=False) == fallback_name(4) == "arg4"


def test_dedupe_names():
    assert dedupe_names(["a", "b", "a"]) == ["a", "b", "a_2"]
    assert dedupe_names(["a", "a_1", "a"]) == ["a", "a_1", "a_2"]
    # a generated name must not collide with a later real one
    assert dedupe_names(["x", "x", "x_1"]) == ["x", "x_1_2", "x_1"]
