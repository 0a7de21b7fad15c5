#!/usr/bin/env python3
"""
config.py
=========
Application-wide configuration constants.

Values can be overridden via environment variables (see :mod:`main`).
This module is a thin, import-safe leaf; it never imports from
other project packages.
"""

# ── Tile atlas ───────────────────────────────────────────────────────────────
TILE_SIZE: int = 8            # source pixels per tile in the atlas
SCALE: int = 3
ACTUAL_TILE_SIZE: int = TILE_SIZE * SCALE
TILEMAP_COLS: int = 24
TILEMAP_ROWS: int = 15

# ── Simulation defaults ──────────────────────────────────────────────────────
CAR_SPAWN_ATTEMPTS: int = 40
PEDESTRIAN_COUNT: int = 50
PEDESTRIAN_ID_BASE: int = 1000

# ── Editor defaults ──────────────────────────────────────────────────────────
MAX_BRUSH_SIZE: int = 10
PALETTE_ZOOM_MIN: float = 1.0
PALETTE_ZOOM_MAX: float = 8.0
PALETTE_ZOOM_STEP: float = 0.5
PALETTE_ZOOM_DEFAULT: float = 2.0
BLANK_MAP_WIDTH: int = 40
BLANK_MAP_HEIGHT: int = 30

# ── UI defaults ──────────────────────────────────────────────────────────────
WINDOW_WIDTH: int = 1280
WINDOW_HEIGHT: int = 800
TARGET_FPS: int = 60

# ── Assets (relative to project root) ────────────────────────────────────────
DATA_REL_PATH: str = "public/city/data.json"
ATLAS_REL_PATH: str = "public/city/tilemap_packed.png"

# ── HTTP ─────────────────────────────────────────────────────────────────────
SERVER_HOST: str = "127.0.0.1"
SERVER_PORT: int = 8000
DATA_ROUTE: str = "/city/data.json"
SAVE_ROUTE: str = "/api/city/save"
HTTP_TIMEOUT_S: float = 5.0
