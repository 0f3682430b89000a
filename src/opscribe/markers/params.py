from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ApiParam:
    """
    Documentation metadata for one handler parameter, attached with
    typing.Annotated:

        def get_pet(pet_id: Annotated[int, ApiParam(name="petId", description="ID of pet")]): ...

    `name` overrides every other name source. `data_type` overrides the
    declared type name of a request body.
    """

    name: Optional[str] = None
    description: Optional[str] = None
    data_type: Optional[str] = None
    required: Optional[bool] = None
    default_value: Optional[str] = None
    allowable_values: tuple[str, ...] = ()


@dataclass(frozen=True)
class PathVariable:
    name: Optional[str] = None


@dataclass(frozen=True)
class RequestBody:
    required: bool = True


@dataclass(frozen=True)
class ModelAttribute:
    name: Optional[str] = None


@dataclass(frozen=True)
class RequestParam:
    name: Optional[str] = None
    required: bool = True
    default_value: Optional[str] = None


@dataclass(frozen=True)
class RequestHeader:
    name: Optional[str] = None
    required: bool = True
