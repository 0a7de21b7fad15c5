"""
server/api.py
=============
FastAPI server that stores the city level document.

Start the server::

    python main.py serve                   # → http://127.0.0.1:8000

Routes
------
``POST /api/city/save``
    Accepts the full level document and overwrites the stored JSON file
    wholesale (pretty-printed, last write wins).  Answers
    ``{"success": true}`` or HTTP 500 with a generic error body.
``GET /city/data.json``
    Returns the stored document.
``/city/*``
    Static files next to the document (the tile atlas), when that
    directory exists.
"""

import logging
import os
from typing import List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel, ConfigDict, Field

from config import DATA_REL_PATH, DATA_ROUTE, SAVE_ROUTE
from level.store import save_level

log = logging.getLogger("server")

SAVE_FAILED_BODY = {"success": False, "error": "Failed to save data"}

# ── Pydantic request schemas ─────────────────────────────────────────────────


class LayerModel(BaseModel):
    """One named full-grid tile array."""
    name: str
    data: List[int]


class EntityConfigModel(BaseModel):
    """Archetype sprite sequences per facing."""
    id: int
    type: str
    right: List[int] = []
    left: List[int] = []
    up: List[int] = []
    down: List[int] = []


class LevelDataModel(BaseModel):
    """Level document submitted to ``/api/city/save``."""

    model_config = ConfigDict(populate_by_name=True)

    width: int
    height: int
    tile_size: int = Field(alias="tileSize")
    layers: List[LayerModel]
    drivable: List[int]
    walkable: List[int]
    entity_configs: Optional[List[EntityConfigModel]] = Field(
        default=None, alias="entityConfigs",
    )

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


# ── FastAPI application ──────────────────────────────────────────────────────


def create_app(data_path: str, atlas_dir: Optional[str] = None) -> FastAPI:
    """Build the application serving and storing *data_path*.

    Parameters
    ----------
    data_path : str
        JSON file the save route overwrites.
    atlas_dir : str or None
        Directory mounted under ``/city``; defaults to the directory of
        *data_path*.  Skipped when it does not exist.
    """
    app = FastAPI(
        title="Tile City Level API",
        description="Loads and saves the city level document.",
        version="1.0",
    )
    app.state.data_path = data_path

    @app.exception_handler(RequestValidationError)
    async def _invalid_body(request: Request, exc: RequestValidationError):
        log.error("Rejected level document: %s", exc.errors())
        return JSONResponse(status_code=500, content=SAVE_FAILED_BODY)

    @app.post(SAVE_ROUTE)
    def save_city(level: LevelDataModel):
        """Overwrite the stored level document."""
        if not save_level(app.state.data_path, level.to_document()):
            return JSONResponse(status_code=500, content=SAVE_FAILED_BODY)
        return {"success": True}

    @app.get(DATA_ROUTE)
    def city_data():
        path = app.state.data_path
        if not os.path.isfile(path):
            return JSONResponse(status_code=404, content={"detail": "Not Found"})
        return FileResponse(path, media_type="application/json")

    static_dir = atlas_dir or os.path.dirname(os.path.abspath(data_path))
    if os.path.isdir(static_dir):
        app.mount("/city", StaticFiles(directory=static_dir), name="city")
    else:
        log.warning("Static directory %s missing; atlas not served", static_dir)

    return app


def get_app() -> FastAPI:
    """App over $TILECITY_DATA (or the default data path).

    Factory for running without the CLI::

        uvicorn server.api:get_app --factory
    """
    return create_app(os.environ.get("TILECITY_DATA", DATA_REL_PATH))
