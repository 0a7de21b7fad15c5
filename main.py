#!/usr/bin/env python3
"""
main.py
=======
Command-line entry point.

Usage::

    python main.py sim                       # simulation window
    python main.py edit                      # map editor
    python main.py run                       # simulation ⇄ editor (E / TAB)
    python main.py serve --port 8000         # level save server

``--data PATH`` works on a local JSON file, ``--url URL`` talks to a
running ``serve`` instance instead.  Environment variables
``TILECITY_DATA``, ``TILECITY_ATLAS``, ``TILECITY_URL`` and
``TILECITY_SEED`` provide defaults; command-line flags win.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from config import (
    ATLAS_REL_PATH,
    BLANK_MAP_HEIGHT,
    BLANK_MAP_WIDTH,
    DATA_REL_PATH,
    SERVER_HOST,
    SERVER_PORT,
)
from logging_setup import setup_logging

log = logging.getLogger("main")

project_root = os.path.abspath(os.path.dirname(__file__))


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name)
    if raw is None or raw == "":
        return None
    try:
        return int(raw)
    except ValueError:
        log.warning("Ignoring non-integer %s=%r", name, raw)
        return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tilecity",
        description="Tile-grid city micro-simulation and map editor.",
    )
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    for name, help_text in (
        ("sim", "run the city simulation"),
        ("edit", "open the map editor"),
        ("run", "simulation and editor, switching with E / TAB"),
    ):
        p = sub.add_parser(name, help=help_text)
        source = p.add_mutually_exclusive_group()
        source.add_argument("--data", default=None,
                            help="level JSON file (default: $TILECITY_DATA or %s)" % DATA_REL_PATH)
        source.add_argument("--url", default=None,
                            help="save server root URL (default: $TILECITY_URL)")
        p.add_argument("--atlas", default=None,
                       help="tile atlas image (default: $TILECITY_ATLAS or %s)" % ATLAS_REL_PATH)
        p.add_argument("--seed", type=int, default=None,
                       help="simulation random seed (default: $TILECITY_SEED)")

    serve = sub.add_parser("serve", help="serve and store the level over HTTP")
    serve.add_argument("--data", default=None)
    serve.add_argument("--atlas-dir", default=None,
                       help="directory served under /city (default: next to the data file)")
    serve.add_argument("--host", default=SERVER_HOST)
    serve.add_argument("--port", type=int, default=SERVER_PORT)
    return parser


def resolve_settings(args: argparse.Namespace) -> argparse.Namespace:
    """Fill unset flags from the environment, then from config defaults."""
    if getattr(args, "url", None) is None and getattr(args, "data", None) is None:
        args.url = os.environ.get("TILECITY_URL") or None
    if getattr(args, "data", None) is None:
        args.data = os.environ.get("TILECITY_DATA") or os.path.join(project_root, DATA_REL_PATH)
    if hasattr(args, "atlas") and args.atlas is None:
        args.atlas = os.environ.get("TILECITY_ATLAS") or os.path.join(project_root, ATLAS_REL_PATH)
    if hasattr(args, "seed") and args.seed is None:
        args.seed = _env_int("TILECITY_SEED")
    return args


def make_gateway(args: argparse.Namespace):
    from level.gateway import FileGateway, HttpGateway

    if getattr(args, "url", None):
        return HttpGateway(args.url)
    return FileGateway(args.data)


def _blank_fallback(args: argparse.Namespace):
    from level.model import blank_level

    if getattr(args, "url", None) or os.path.exists(args.data):
        return None
    return blank_level(BLANK_MAP_WIDTH, BLANK_MAP_HEIGHT)


def run_views(args: argparse.Namespace, start: str) -> None:
    """Alternate the simulation and editor windows until one quits.

    Each switch re-fetches the level so the simulation sees saved edits.
    """
    import pygame
    from ui import PygameCityView, PygameEditorView

    gateway = make_gateway(args)
    atlas = None
    current = start
    try:
        while current in ("sim", "edit"):
            if current == "sim":
                view = PygameCityView(gateway, atlas=atlas, atlas_path=args.atlas,
                                      seed=args.seed)
                result = view.run()
                current = "edit" if result == "editor" and args.command == "run" else "quit"
            else:
                view = PygameEditorView(gateway, atlas=atlas, atlas_path=args.atlas,
                                        fallback=_blank_fallback(args))
                result = view.run()
                current = "sim" if result == "simulation" and args.command == "run" else "quit"
            atlas = view.atlas
    finally:
        pygame.quit()


def serve(args: argparse.Namespace) -> None:
    import uvicorn
    from server.api import create_app

    app = create_app(args.data, atlas_dir=args.atlas_dir)
    log.info("Serving level %s on http://%s:%d", args.data, args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level))
    resolve_settings(args)

    if args.command == "serve":
        serve(args)
    elif args.command == "edit":
        run_views(args, "edit")
    else:
        run_views(args, "sim")
    return 0


if __name__ == "__main__":
    sys.exit(main())
