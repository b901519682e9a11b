"""Configuration helpers for the catalog viewer."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "https://dragonball-api.com/api"


@dataclass(frozen=True)
class ViewerSettings:
    api_base_url: str
    http_timeout: float
    page_size: int
    search_page_size: int


def load_settings() -> ViewerSettings:
    return ViewerSettings(
        api_base_url=os.getenv("DBVIEWER_API_BASE_URL", DEFAULT_API_BASE_URL).rstrip("/"),
        http_timeout=float(os.getenv("DBVIEWER_HTTP_TIMEOUT", "10")),
        page_size=int(os.getenv("DBVIEWER_PAGE_SIZE", "12")),
        search_page_size=int(os.getenv("DBVIEWER_SEARCH_PAGE_SIZE", "50")),
    )
