#!/usr/bin/env python3

from .types import ButtonRect, ColorRGB, ColorRGBA, MapViewport
from .constants import ViewConstants
from .helpers import TileAtlas, ViewHelpers, load_atlas, make_placeholder_atlas
from .draw_tiles import TileRenderer
from .draw_entities import EntityRenderer
from .draw_panels import PanelRenderer
from .hud import HudRenderer
from .sim_view import PygameCityView, run_city_view
from .editor_view import PygameEditorView, run_editor_view

__all__ = [
    "ButtonRect",
    "ColorRGB",
    "ColorRGBA",
    "MapViewport",
    "ViewConstants",
    "ViewHelpers",
    "TileAtlas",
    "load_atlas",
    "make_placeholder_atlas",
    "TileRenderer",
    "EntityRenderer",
    "PanelRenderer",
    "HudRenderer",
    "PygameCityView",
    "run_city_view",
    "PygameEditorView",
    "run_editor_view",
]
