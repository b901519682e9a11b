"""
Pydantic schema definitions for the catalog module.

The ``Character`` model captures the fields required to render a
character card and its detail view. ``Planet`` is the lighter record
served by the planets endpoint. ``CharacterPage`` and ``PlanetPage``
bundle a list of records with the pagination metadata returned by the
Dragon Ball API, so that clients know how many pages are available.

Field names are snake_case in Python and camelCase on the wire; the
aliases below match the remote API so that its payloads validate as-is
and responses serialise back to the same shape.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Character(BaseModel):
    """A single character entry.

    ``ki`` and ``max_ki`` are kept as strings: the remote values
    (e.g. ``"90,000,000,000,000,000,000"``) are meant for display and
    routinely overflow what a float can represent exactly. Extra fields
    sent by the remote (origin planet, transformations, ...) are kept on
    the instance rather than dropped. Records are frozen once built.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: Union[int, str]
    name: str
    race: str = ""
    gender: str = ""
    ki: str = ""
    max_ki: str = Field(default="", alias="maxKi")
    description: str = ""
    image: Optional[str] = None
    affiliation: Optional[str] = None

    @field_validator("ki", "max_ki", mode="before")
    @classmethod
    def _power_level_as_text(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value)


class Planet(BaseModel):
    """A planet entry. Only listed, never searched."""

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    id: Union[int, str]
    name: str
    is_destroyed: bool = Field(default=False, alias="isDestroyed")
    description: str = ""


class PageMeta(BaseModel):
    """Pagination metadata attached to every list response."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    total_items: int = Field(alias="totalItems")
    item_count: int = Field(alias="itemCount")
    items_per_page: int = Field(alias="itemsPerPage")
    total_pages: int = Field(alias="totalPages")
    current_page: int = Field(alias="currentPage")


class CharacterPage(BaseModel):
    """A wrapper for paginated results from ``/characters``."""

    model_config = ConfigDict(frozen=True)

    items: List[Character]
    meta: PageMeta


class PlanetPage(BaseModel):
    """A wrapper for paginated results from ``/planets``."""

    model_config = ConfigDict(frozen=True)

    items: List[Planet]
    meta: PageMeta
