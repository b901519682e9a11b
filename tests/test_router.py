import httpx
from fastapi.testclient import TestClient

from dragonball_viewer.main import create_app
from helpers import character_payload, envelope, make_client


def test_health_check(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_list_characters_serves_fallback_in_camel_case(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    response = client.get("/api/catalog/characters", params={"page": 1, "limit": 4})

    assert response.status_code == 200
    data = response.json()
    assert [c["name"] for c in data["items"]] == ["Goku", "Vegeta", "Piccolo", "Gohan"]
    assert data["items"][0]["maxKi"] == "90,000,000,000,000,000,000"
    assert data["meta"] == {
        "totalItems": 6,
        "itemCount": 4,
        "itemsPerPage": 4,
        "totalPages": 2,
        "currentPage": 1,
    }


def test_list_characters_rejects_page_zero(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    response = client.get("/api/catalog/characters", params={"page": 0})

    assert response.status_code == 422


def test_list_characters_proxies_remote_page() -> None:
    body = envelope([character_payload(20, "Trunks", "Half-Saiyan")], page=3, limit=1)
    remote = make_client(lambda request: httpx.Response(200, json=body))
    client = TestClient(create_app(http_client=remote))

    data = client.get("/api/catalog/characters", params={"page": 3, "limit": 1}).json()

    assert data["items"][0]["name"] == "Trunks"
    assert data["meta"]["currentPage"] == 3


def test_search_endpoint_filters_fallback(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    data = client.get("/api/catalog/characters/search", params={"race": "saiyan"}).json()

    assert [c["name"] for c in data["items"]] == ["Goku", "Vegeta", "Gohan"]
    assert data["meta"]["totalPages"] == 1


def test_get_character_from_fallback(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    response = client.get("/api/catalog/characters/6")

    assert response.status_code == 200
    assert response.json()["name"] == "Cell"


def test_get_character_unknown_returns_404(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    response = client.get("/api/catalog/characters/999")

    assert response.status_code == 404
    assert response.json()["detail"] == "Character not found."


def test_planets_endpoint(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    data = client.get("/api/catalog/planets").json()

    assert [p["name"] for p in data["items"]] == ["Earth", "Namek", "Vegeta"]
    assert data["items"][1]["isDestroyed"] is True


def test_debug_local_reports_fallback_counts(offline_client) -> None:
    client = TestClient(create_app(http_client=offline_client))

    data = client.get("/api/catalog/debug/local").json()

    assert data["characters"] == 6
    assert data["planets"] == 3
    assert data["sample"][0] == {"id": 1, "name": "Goku", "race": "Saiyan"}
