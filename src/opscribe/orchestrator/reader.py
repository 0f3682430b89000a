from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Union

from opscribe.config import ReaderConfig
from opscribe.domain.models import (
    HTTP_METHODS,
    DocumentationContext,
    Operation,
    ParameterDescriptor,
)
from opscribe.handler.model import FormalParameter, Handler, find_marker
from opscribe.handler.reflect import FunctionHandler
from opscribe.markers.operation import ApiOperation
from opscribe.markers.params import ApiParam, RequestParam
from opscribe.resolver.classifier import Classification, classify_parameter
from opscribe.resolver.errors import DEFAULT_STRATEGIES, ErrorStrategy, extract_error_responses
from opscribe.resolver.names import dedupe_names, resolve_parameter_name
from opscribe.resolver.status_map import ExceptionStatusMap
from opscribe.resolver.types import describe_type, response_class_name
from opscribe.routing.condition import RouteCondition

logger = logging.getLogger(__name__)

HandlerLike = Union[Handler, Callable[..., Any]]
ReadRequest = tuple[HandlerLike, Optional[RouteCondition], str]

_EMPTY_ROUTE = RouteCondition()


class OperationReader:
    """
    Builds one Operation from a handler, its matched route condition and an
    HTTP method.

    Stateless between calls: the same inputs always produce an equal
    Operation, and nothing passed in is modified.
    """

    def __init__(
        self,
        config: Optional[ReaderConfig] = None,
        status_map: Optional[ExceptionStatusMap] = None,
        error_strategies: Iterable[ErrorStrategy] = DEFAULT_STRATEGIES,
    ):
        self.config = config or ReaderConfig()
        self.status_map = status_map if status_map is not None else self.config.status_map()
        self.error_strategies = tuple(error_strategies)

    def read_operation(
        self,
        context: DocumentationContext,
        handler: HandlerLike,
        route_condition: Optional[RouteCondition] = None,
        http_method: str = "GET",
    ) -> Operation:
        method = _normalize_method(http_method)
        h = as_handler(handler)
        route = route_condition or _EMPTY_ROUTE

        logger.debug("Reading %s %s (api %s)", method, h.name, context.api_version)

        doc_op: Optional[ApiOperation] = find_marker(h.markers, ApiOperation)

        return Operation(
            http_method=method,
            nickname=(doc_op.nickname if doc_op and doc_op.nickname else h.name),
            summary=(doc_op.summary if doc_op and doc_op.summary else h.summary),
            notes=(doc_op.notes if doc_op and doc_op.notes else h.notes),
            response_class=(
                doc_op.response_class
                if doc_op and doc_op.response_class
                else response_class_name(h.return_annotation)
            ),
            parameters=tuple(self.read_parameters(h, route)),
            error_responses=tuple(extract_error_responses(h, self.status_map, self.error_strategies)),
        )

    def read_operations(
        self,
        context: DocumentationContext,
        requests: Iterable[ReadRequest],
    ) -> list[Operation]:
        return [self.read_operation(context, h, route, method) for (h, route, method) in requests]

    def read_parameters(self, handler: Handler, route_condition: RouteCondition) -> list[ParameterDescriptor]:
        params = handler.parameters
        names = dedupe_names(
            [resolve_parameter_name(p, self.config.use_signature_names) for p in params]
        )

        out: list[ParameterDescriptor] = []
        for p, name in zip(params, names):
            c = classify_parameter(p, name, route_condition)
            out.append(_descriptor(p, name, c))
        return out


def as_handler(handler: HandlerLike) -> Handler:
    if isinstance(handler, Handler):
        return handler
    return FunctionHandler(handler)


def _normalize_method(http_method: str) -> str:
    method = str(http_method).strip().upper()
    if method not in HTTP_METHODS:
        raise ValueError(f"Unsupported HTTP method: {http_method!r}")
    return method


def _descriptor(p: FormalParameter, name: str, c: Classification) -> ParameterDescriptor:
    doc: Optional[ApiParam] = p.marker(ApiParam)
    query: Optional[RequestParam] = p.marker(RequestParam)
    info = describe_type(p.annotation)

    default_value: Optional[str] = None
    if doc is not None and doc.default_value is not None:
        default_value = doc.default_value
    elif query is not None and query.default_value is not None:
        default_value = query.default_value
    elif p.has_default and p.default is not None:
        default_value = str(p.default)

    allowable = doc.allowable_values if doc is not None and doc.allowable_values else info.allowable_values

    return ParameterDescriptor(
        name=name,
        data_type=c.data_type,
        param_type=c.param_type,
        required=c.required,
        description=doc.description if doc is not None else None,
        default_value=default_value,
        allowable_values=tuple(allowable),
        allow_multiple=info.allow_multiple,
    )
