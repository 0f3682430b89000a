from __future__ import annotations

import logging
from typing import Iterable, Optional

from opscribe.handler.model import FormalParameter
from opscribe.markers.params import ApiParam, ModelAttribute, PathVariable, RequestHeader, RequestParam

logger = logging.getLogger(__name__)

# binding markers that can carry an explicit name
_NAMED_BINDINGS = (PathVariable, ModelAttribute, RequestParam, RequestHeader)


def fallback_name(index: int) -> str:
    return f"arg{index}"


def resolve_parameter_name(parameter: FormalParameter, use_signature_names: bool = True) -> str:
    """
    Public name of one handler parameter. First match wins:
      1. ApiParam(name=...)
      2. explicit name on a binding marker (PathVariable("id"), ...)
      3. the interpreter-supplied parameter name, when available and enabled
      4. arg<index>
    """
    doc = parameter.marker(ApiParam)
    if doc is not None and doc.name:
        return doc.name

    bound = _binding_name(parameter.markers)
    if bound:
        return bound

    if use_signature_names and parameter.name:
        return parameter.name

    logger.debug("No name source for parameter #%d; using fallback", parameter.index)
    return fallback_name(parameter.index)


def _binding_name(markers: Iterable[object]) -> Optional[str]:
    for m in markers:
        if isinstance(m, _NAMED_BINDINGS) and m.name:
            return m.name
    return None


def dedupe_names(names: list[str]) -> list[str]:
    """Keep names unique within one operation: a repeat becomes name_<index>."""
    seen: set[str] = set()
    out: list[str] = []
    for i, name in enumerate(names):
        candidate = name
        if candidate in seen:
            candidate = f"{name}_{i}"
            n = 2
            while candidate in seen or candidate in names:
                candidate = f"{name}_{i}_{n}"
                n += 1
            logger.warning("Duplicate parameter name %r at position %d renamed to %r", name, i, candidate)
        seen.add(candidate)
        out.append(candidate)
    return out
