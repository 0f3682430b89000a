from __future__ import annotations

from typing import TYPE_CHECKING, Annotated, Optional

from opscribe.markers.params import PathVariable, RequestBody, RequestParam

if TYPE_CHECKING:
    from sample_handlers import Pet


def get_pet(pet_id: Annotated[str, PathVariable("petId")]) -> Pet:
    """Fetch a pet."""


def update_pet(
    pet_id: Annotated[int, PathVariable("petId")],
    pet: Annotated[Pet, RequestBody()],
    tags: Annotated[Optional[list[str]], RequestParam(required=False)] = None,
) -> list[Pet]:
    """Replace a pet."""
