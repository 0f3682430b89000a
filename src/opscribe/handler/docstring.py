from __future__ import annotations

import inspect
import re
from typing import Optional

# :raises NotFoundError: ...   :raise pkg.BadRequest: ...   :exception X: ...
_SPHINX_RAISES = re.compile(r"^\s*:(?:raises?|exception|except)\s+([^:]+):", re.MULTILINE)
_SECTION_HEADER = re.compile(r"^([A-Z][A-Za-z ]*):\s*$")
_NUMPY_UNDERLINE = re.compile(r"^\s*-{3,}\s*$")
_DOTTED_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*$")


def split_docstring(doc: Optional[str]) -> tuple[str, str]:
    """
    (summary, notes): first paragraph, then the remaining prose up to the
    first field list or section header.
    """
    text = inspect.cleandoc(doc or "")
    if not text:
        return "", ""

    prose: list[str] = []
    lines = text.splitlines()
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith(":"):
            break
        if _SECTION_HEADER.match(stripped):
            break
        if i + 1 < len(lines) and stripped and _NUMPY_UNDERLINE.match(lines[i + 1]):
            break
        prose.append(line)

    paragraphs = [p.strip() for p in "\n".join(prose).split("\n\n") if p.strip()]
    if not paragraphs:
        return "", ""
    summary = " ".join(paragraphs[0].split())
    notes = "\n\n".join(paragraphs[1:])
    return summary, notes


def raised_names(doc: Optional[str]) -> list[str]:
    """
    Exception names a docstring declares, in order of appearance.

    Understands Sphinx field lists (`:raises X:`), Google style `Raises:`
    sections and NumPy style `Raises` / `------` sections.
    """
    text = inspect.cleandoc(doc or "")
    if not text:
        return []

    out: list[str] = []

    for m in _SPHINX_RAISES.finditer(text):
        for part in m.group(1).split(","):
            _add_name(out, part)

    lines = text.splitlines()
    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        google = stripped == "Raises:"
        numpy = stripped == "Raises" and i + 1 < len(lines) and _NUMPY_UNDERLINE.match(lines[i + 1])
        if not (google or numpy):
            i += 1
            continue

        i += 2 if numpy else 1
        section_indent: Optional[int] = None
        while i < len(lines):
            line = lines[i]
            if not line.strip():
                i += 1
                continue
            indent = len(line) - len(line.lstrip())
            if google and indent == 0:
                break
            if numpy and (_SECTION_HEADER.match(line.strip()) or _is_numpy_header(lines, i)):
                break
            if section_indent is None:
                section_indent = indent
            if indent == section_indent:
                head = line.strip().split(":", 1)[0]
                _add_name(out, head)
            i += 1

    return out


def _is_numpy_header(lines: list[str], i: int) -> bool:
    return i + 1 < len(lines) and bool(_NUMPY_UNDERLINE.match(lines[i + 1]))


def _add_name(out: list[str], raw: str) -> None:
    name = raw.strip().strip("`~")
    if name and _DOTTED_NAME.match(name) and name not in out:
        out.append(name)
