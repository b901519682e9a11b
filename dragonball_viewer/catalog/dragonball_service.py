"""
Dragon Ball API integration for the catalogue.  This module performs
the raw, anonymous requests against the public Dragon Ball API and
hands back decoded JSON.  It exposes three fetchers:

* ``fetch_characters()`` — one page of characters (``/characters``).
* ``fetch_character()`` — a single character by identifier.
* ``fetch_planets()`` — the planets listing (``/planets``).

None of them raise on network trouble: transport errors, non-2xx
statuses and undecodable bodies are logged and reported as ``None``.
Shaping the payload and falling back to the bundled dataset is the job
of ``store.py``.

Every fetcher accepts an optional ``httpx.AsyncClient``.  The web app
shares one client for its whole lifetime; when none is given a
short-lived client is built from the current settings.
"""

from __future__ import annotations

import logging
import urllib.parse
from typing import Any, Dict, Optional, Union

import httpx

from ..config import ViewerSettings, load_settings


logger = logging.getLogger(__name__)
logger.setLevel(logging.INFO)

DEFAULT_HEADERS = {
    'User-Agent': 'dragonball-viewer/1.0 (+https://dragonball-api.com)',
    'Accept': 'application/json',
}


def build_client(settings: Optional[ViewerSettings] = None) -> httpx.AsyncClient:
    """Create an ``AsyncClient`` pointed at the configured API base URL."""
    settings = settings or load_settings()
    return httpx.AsyncClient(
        base_url=settings.api_base_url,
        timeout=settings.http_timeout,
        headers=DEFAULT_HEADERS,
    )


async def _http_get_json(
    path: str,
    params: Optional[Dict[str, Any]] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Any]:
    """Perform an HTTP GET and return parsed JSON or ``None`` on failure.

    Any non-2xx status counts as a failure.  Network errors and bodies
    that are not valid JSON are logged and ``None`` is returned.
    """
    try:
        if client is None:
            async with build_client() as own_client:
                response = await own_client.get(path, params=params)
        else:
            response = await client.get(path, params=params)
        if not response.is_success:
            logger.warning(
                "Dragon Ball API request to %s returned status %s", path, response.status_code
            )
            return None
        return response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("Error fetching %s: %s", path, exc)
        return None


async def fetch_characters(
    page: int = 1,
    limit: int = 12,
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Any]:
    """Return one raw page of characters, trusting the remote pagination."""
    return await _http_get_json(
        "/characters", params={'page': page, 'limit': limit}, client=client
    )


async def fetch_character(
    character_id: Union[int, str],
    client: Optional[httpx.AsyncClient] = None,
) -> Optional[Any]:
    """Return the raw record for ``character_id``."""
    key = str(character_id).strip()
    if not key:
        return None
    return await _http_get_json(f"/characters/{urllib.parse.quote(key, safe='')}", client=client)


async def fetch_planets(client: Optional[httpx.AsyncClient] = None) -> Optional[Any]:
    """Return the raw planets listing."""
    return await _http_get_json("/planets", client=client)
