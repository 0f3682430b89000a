from __future__ import annotations

import importlib
from pathlib import Path
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from opscribe.domain.models import DocumentationContext
from opscribe.errors import ConfigError
from opscribe.resolver.status_map import ExceptionStatusMap, StatusEntry


class ExceptionStatusEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    exception: str  # "package.module:ClassName" or "package.module.ClassName"
    code: int = Field(ge=100, le=599)
    reason: str = ""


class ReaderConfig(BaseModel):
    """
    Static settings for reading operations.

    Everything here is read once; the reader never writes back.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    api_version: str = "1.0"
    swagger_version: str = "1.1"
    base_path: str = "/"
    documentation_base_path: str = "/api-docs"

    # off = behave as if parameter names were never recorded
    use_signature_names: bool = True

    exception_statuses: tuple[ExceptionStatusEntry, ...] = ()

    @classmethod
    def from_file(cls, path: Path) -> "ReaderConfig":
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise ConfigError(f"Invalid config file {path}:\n{e}") from e

    def documentation_context(self) -> DocumentationContext:
        return DocumentationContext(
            api_version=self.api_version,
            swagger_version=self.swagger_version,
            base_path=self.base_path,
            documentation_base_path=self.documentation_base_path,
        )

    def status_map(
        self, extra: Optional[Mapping[type[BaseException], StatusEntry]] = None
    ) -> ExceptionStatusMap:
        """Configured entries plus `extra`; configured entries win."""
        entries: dict[type[BaseException], StatusEntry] = dict(extra or {})
        for item in self.exception_statuses:
            exc = import_object(item.exception)
            if not (isinstance(exc, type) and issubclass(exc, BaseException)):
                raise ConfigError(f"{item.exception} is not an exception class")
            entries[exc] = (item.code, item.reason)
        return ExceptionStatusMap(entries)


def import_object(path: str) -> Any:
    """Import "pkg.mod:attr.sub" or "pkg.mod.attr"."""
    if ":" in path:
        module_name, _, attr_path = path.partition(":")
    else:
        module_name, _, attr_path = path.rpartition(".")

    if not module_name or not attr_path:
        raise ConfigError(f"Not an import path: {path!r}")

    try:
        obj: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import module {module_name!r}: {e}") from e

    for attr in attr_path.split("."):
        try:
            obj = getattr(obj, attr)
        except AttributeError as e:
            raise ConfigError(f"{module_name!r} has no attribute {attr_path!r}") from e
    return obj
