# dragonball_viewer/main.py
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI

from .catalog import catalog_router
from .catalog.dragonball_service import build_client
from .config import load_settings


def create_app(http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if http_client is not None:
            yield
            return
        async with build_client(load_settings()) as client:
            app.state.http_client = client
            yield

    app = FastAPI(
        title="Dragon Ball Catalog Viewer",
        description=(
            "Paginated, searchable catalogue of Dragon Ball characters "
            "backed by the public Dragon Ball API, with a bundled dataset "
            "served whenever the API is unreachable."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )
    if http_client is not None:
        app.state.http_client = http_client

    # Quick liveness probe
    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "Dragon Ball catalog live"}

    app.include_router(catalog_router)
    return app


app = create_app()
