"""
Route definitions for the catalogue API.

Endpoints under /api/catalog:
- GET  /characters                  : list characters (API + fallback local)
- GET  /characters/search           : filter characters by name and race
- GET  /characters/{character_id}   : get one character (API + fallback local)
- GET  /planets                     : list planets (API + fallback local)
- GET  /debug/local                 : debug local fallback dataset
"""

from __future__ import annotations

from typing import Optional

import httpx
from fastapi import APIRouter, HTTPException, Query, Request

from . import store
from .schemas import Character, CharacterPage, PlanetPage


router = APIRouter(prefix="/api/catalog", tags=["catalog"])


def _client(request: Request) -> Optional[httpx.AsyncClient]:
    return getattr(request.app.state, "http_client", None)


@router.get("/characters", response_model=CharacterPage)
async def list_characters(
    request: Request,
    page: int = Query(default=1, ge=1, description="Current page (1-indexed)"),
    limit: int = Query(default=store.DEFAULT_PAGE_SIZE, ge=1, le=200, description="Page size"),
) -> CharacterPage:
    return await store.list_characters(page, limit, client=_client(request))


@router.get("/characters/search", response_model=CharacterPage)
async def search_characters(
    request: Request,
    name: str = Query(default="", description="Substring of the character name"),
    race: str = Query(default="", description="Substring of the race"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=store.DEFAULT_PAGE_SIZE, ge=1, le=200),
) -> CharacterPage:
    """
    Filters a single page of characters.

    Important:
    - The Dragon Ball API has no search, only the fetched page is filtered.
    - Without the API, the whole fallback dataset is filtered into one page.
    """
    return await store.search_characters(name, race, page, limit, client=_client(request))


@router.get("/characters/{character_id}", response_model=Character)
async def get_character(request: Request, character_id: str) -> Character:
    try:
        return await store.get_character(character_id, client=_client(request))
    except store.CharacterNotFoundError as exc:
        raise HTTPException(status_code=404, detail=store.handle_api_error(exc))


@router.get("/planets", response_model=PlanetPage)
async def list_planets(request: Request) -> PlanetPage:
    return await store.list_planets(client=_client(request))


@router.get("/debug/local")
def debug_local():
    """
    Debug endpoint to verify the local fallback dataset is loaded.
    Visit: http://127.0.0.1:8000/api/catalog/debug/local
    """
    return {
        "characters": len(store.CHARACTERS),
        "planets": len(store.PLANETS),
        "sample": [
            {"id": c.id, "name": c.name, "race": c.race}
            for c in store.CHARACTERS[:5]
        ],
    }
