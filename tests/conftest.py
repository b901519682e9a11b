import asyncio
from typing import List

import httpx
import pytest

from helpers import make_client


@pytest.fixture
def requests_seen() -> List[httpx.Request]:
    return []


@pytest.fixture
def offline_client(requests_seen):
    def handler(request: httpx.Request) -> httpx.Response:
        requests_seen.append(request)
        raise httpx.ConnectError("Failed to fetch", request=request)

    client = make_client(handler)
    yield client
    asyncio.run(client.aclose())
