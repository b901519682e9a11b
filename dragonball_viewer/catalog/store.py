"""
Data access facade for the character catalogue.

Each public coroutine tries the Dragon Ball API first (through
``dragonball_service``) and, when the remote is unreachable, answers
a non-2xx status or sends a payload that does not match the expected
shape, serves the bundled fallback dataset instead.  Both paths return
the same ``CharacterPage`` / ``PlanetPage`` envelope so callers never
need to know where the data came from.

The fallback dataset is read from ``data/fallback.json`` once, at
import time, and kept as read-only tuples for the rest of the process.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Tuple, Union

import httpx
from pydantic import ValidationError

from .dragonball_service import fetch_character, fetch_characters, fetch_planets
from .schemas import Character, CharacterPage, PageMeta, Planet, PlanetPage

logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

DATA_FILE = Path(__file__).resolve().parents[1] / "data" / "fallback.json"

DEFAULT_PAGE_SIZE = 12
PLANETS_PAGE_SIZE = 10

NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."
NOT_FOUND_MESSAGE = "Character not found."
SERVER_ERROR_MESSAGE = "Server error. Please try again later."
UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class CharacterNotFoundError(LookupError):
    """Raised when neither the API nor the fallback dataset knows an id."""

    def __init__(self, character_id: Union[int, str]) -> None:
        self.character_id = character_id
        # "404" routes this through the not-found wording of handle_api_error
        # instead of the generic "unexpected error" message.
        super().__init__(f"Character {character_id!r} not found (404)")


def _load_fallback() -> Tuple[Tuple[Character, ...], Tuple[Planet, ...]]:
    """Load the bundled characters and planets."""
    with DATA_FILE.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    characters = tuple(Character.model_validate(entry) for entry in raw.get("characters") or [])
    planets = tuple(Planet.model_validate(entry) for entry in raw.get("planets") or [])
    return characters, planets


CHARACTERS, PLANETS = _load_fallback()


def _norm(s: Optional[str]) -> str:
    """Normalize a string for case-insensitive comparison."""
    return (s or "").strip().lower()


def _clamp(page: int, limit: int) -> Tuple[int, int]:
    return max(1, int(page)), max(1, int(limit))


def _coerce_id(value: Any) -> Optional[int]:
    """Integer form of an identifier, or ``None`` when it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def _filter_characters(
    items: Iterable[Character], name: Optional[str], race: Optional[str]
) -> List[Character]:
    """Keep characters whose name and race contain the given substrings.

    An empty filter matches everything.
    """
    nname = _norm(name)
    nrace = _norm(race)
    result = list(items)
    if nname:
        result = [c for c in result if nname in _norm(c.name)]
    if nrace:
        result = [c for c in result if nrace in _norm(c.race)]
    return result


def _paginate_local(page: int, limit: int) -> CharacterPage:
    """Slice the fallback characters the way the remote would paginate them."""
    start = (page - 1) * limit
    end = start + limit
    page_items = list(CHARACTERS[start:end])
    total = len(CHARACTERS)
    return CharacterPage(
        items=page_items,
        meta=PageMeta(
            total_items=total,
            item_count=len(page_items),
            items_per_page=limit,
            total_pages=(total + limit - 1) // limit,
            current_page=page,
        ),
    )


async def list_characters(
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    client: Optional[httpx.AsyncClient] = None,
) -> CharacterPage:
    """Return one page of characters.

    The remote envelope is returned unmodified when the API answers;
    otherwise the fallback dataset is paginated client-side.  This
    coroutine never raises for network or payload problems.
    """
    page, limit = _clamp(page, limit)
    data = await fetch_characters(page, limit, client=client)
    if data is not None:
        try:
            return CharacterPage.model_validate(data)
        except ValidationError as exc:
            logger.warning("Malformed characters page from API: %s", exc)
    logger.info("Serving characters page %s from fallback dataset", page)
    return _paginate_local(page, limit)


async def get_character(
    character_id: Union[int, str],
    client: Optional[httpx.AsyncClient] = None,
) -> Character:
    """Fetch a single character by its identifier.

    When the API cannot provide the record, the fallback dataset is
    searched by numeric identifier (``"1"`` matches ``1``).

    Raises
    ------
    CharacterNotFoundError
        If no record with that identifier can be found anywhere.
    """
    data = await fetch_character(character_id, client=client)
    if data is not None:
        try:
            return Character.model_validate(data)
        except ValidationError as exc:
            logger.warning("Malformed character %r from API: %s", character_id, exc)
    target = _coerce_id(character_id)
    if target is not None:
        for character in CHARACTERS:
            if _coerce_id(character.id) == target:
                logger.info("Serving character %s from fallback dataset", target)
                return character
    raise CharacterNotFoundError(character_id)


def _coerce_remote_page(data: Any) -> CharacterPage:
    # Some deployments answer with a bare list instead of an envelope.
    if isinstance(data, list):
        items = [Character.model_validate(entry) for entry in data]
        return CharacterPage(
            items=items,
            meta=PageMeta(
                total_items=len(items),
                item_count=len(items),
                items_per_page=len(items),
                total_pages=1,
                current_page=1,
            ),
        )
    return CharacterPage.model_validate(data)


async def search_characters(
    name: str = "",
    race: str = "",
    page: int = 1,
    limit: int = DEFAULT_PAGE_SIZE,
    client: Optional[httpx.AsyncClient] = None,
) -> CharacterPage:
    """Search characters by name and race.

    The API offers no search, so a single page is fetched and filtered
    locally.  Only that page is searched, not the whole remote
    collection.  The remote metadata is kept apart from ``itemCount``,
    which follows the filtered items.  When the API is unavailable the
    entire fallback dataset is filtered and returned as one page.
    """
    page, limit = _clamp(page, limit)
    data = await fetch_characters(page, limit, client=client)
    if data is not None:
        try:
            remote = _coerce_remote_page(data)
        except ValidationError as exc:
            logger.warning("Malformed characters page from API: %s", exc)
        else:
            items = _filter_characters(remote.items, name, race)
            return remote.model_copy(
                update={
                    "items": items,
                    "meta": remote.meta.model_copy(update={"item_count": len(items)}),
                }
            )
    logger.info("Searching fallback dataset (name=%r, race=%r)", name, race)
    items = _filter_characters(CHARACTERS, name, race)
    return CharacterPage(
        items=items,
        meta=PageMeta(
            total_items=len(items),
            item_count=len(items),
            items_per_page=limit,
            total_pages=1,
            current_page=page,
        ),
    )


async def list_planets(client: Optional[httpx.AsyncClient] = None) -> PlanetPage:
    """Return the planets listing, or every fallback planet on failure."""
    data = await fetch_planets(client=client)
    if data is not None:
        try:
            return PlanetPage.model_validate(data)
        except ValidationError as exc:
            logger.warning("Malformed planets page from API: %s", exc)
    logger.info("Serving planets from fallback dataset")
    return PlanetPage(
        items=list(PLANETS),
        meta=PageMeta(
            total_items=len(PLANETS),
            item_count=len(PLANETS),
            items_per_page=PLANETS_PAGE_SIZE,
            total_pages=1,
            current_page=1,
        ),
    )


def handle_api_error(error: BaseException) -> str:
    """Map a failure to the message shown to the user.

    Classification is by exception type for connectivity problems and
    by message text otherwise.  It only picks the wording.
    """
    message = str(error)
    if isinstance(error, (httpx.TransportError, ConnectionError)) or "Failed to fetch" in message:
        return NETWORK_ERROR_MESSAGE
    if "404" in message:
        return NOT_FOUND_MESSAGE
    if "500" in message:
        return SERVER_ERROR_MESSAGE
    return UNEXPECTED_ERROR_MESSAGE
