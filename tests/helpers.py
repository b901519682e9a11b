from typing import Callable, List

import httpx

API_BASE = "https://dragonball-api.com/api"


def make_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=API_BASE, transport=httpx.MockTransport(handler))


def character_payload(character_id: int, name: str, race: str = "Saiyan") -> dict:
    return {
        "id": character_id,
        "name": name,
        "ki": "1,000",
        "maxKi": "9,000,000",
        "race": race,
        "gender": "Male",
        "description": f"{name} from the remote API.",
        "image": f"https://dragonball-api.com/characters/{name.lower()}.webp",
        "affiliation": "Z Fighter",
    }


def envelope(items: List[dict], page: int = 1, limit: int = 12, total_items: int = 58) -> dict:
    return {
        "items": items,
        "meta": {
            "totalItems": total_items,
            "itemCount": len(items),
            "itemsPerPage": limit,
            "totalPages": (total_items + limit - 1) // limit,
            "currentPage": page,
        },
    }
