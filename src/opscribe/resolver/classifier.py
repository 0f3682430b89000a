from __future__ import annotations

import logging
from dataclasses import dataclass

from opscribe.domain.models import ParamType
from opscribe.handler.model import FormalParameter
from opscribe.markers.params import (
    ApiParam,
    ModelAttribute,
    PathVariable,
    RequestBody,
    RequestHeader,
    RequestParam,
)
from opscribe.resolver.types import data_type_name
from opscribe.routing.condition import RouteCondition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    param_type: ParamType
    data_type: str
    required: bool


def classify_parameter(
    parameter: FormalParameter,
    name: str,
    route_condition: RouteCondition,
) -> Classification:
    """
    Where a parameter is read from, its type name and whether it is required.

    Rules, first match wins:
      PathVariable    -> path, always required
      RequestBody     -> body (ApiParam(data_type=...) may rename the type)
      ModelAttribute  -> body, required
      RequestParam    -> query, required per the marker
      RequestHeader   -> header, required per the marker
      name accepted by the route condition -> query, required
      otherwise       -> unknown
    """
    declared = data_type_name(parameter.annotation)
    doc: ApiParam | None = parameter.marker(ApiParam)

    if parameter.marker(PathVariable) is not None:
        return Classification("path", declared, True)

    body = parameter.marker(RequestBody)
    if body is not None:
        data_type = doc.data_type if doc is not None and doc.data_type else declared
        return Classification("body", data_type, _required(doc, body.required))

    if parameter.marker(ModelAttribute) is not None:
        return Classification("body", declared, _required(doc, True))

    query = parameter.marker(RequestParam)
    if query is not None:
        return Classification("query", declared, _required(doc, query.required))

    header = parameter.marker(RequestHeader)
    if header is not None:
        return Classification("header", declared, _required(doc, header.required))

    if route_condition.accepts(name):
        return Classification("query", declared, _required(doc, True))

    logger.warning("Parameter %r (#%d) has no binding; marking as unknown", name, parameter.index)
    return Classification("unknown", declared, _required(doc, False))


def _required(doc: ApiParam | None, default: bool) -> bool:
    if doc is not None and doc.required is not None:
        return doc.required
    return default
