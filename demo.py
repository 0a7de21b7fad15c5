#!/usr/bin/env python3
"""
Quick demo: runs the Pygame simulation on a generated ring-road city
with a procedural tile atlas, so you can see the UI without any assets
or a running save server.

Usage:
    python3 demo.py            # simulation (E opens the editor)
    python3 demo.py --seed 7
"""

import argparse
import logging

import pygame

from level.gateway import MemoryGateway
from level.samples import build_demo_level
from logging_setup import setup_logging
from ui import PygameCityView, PygameEditorView, TileAtlas, make_placeholder_atlas


def main() -> None:
    parser = argparse.ArgumentParser(description="Tile city demo (no assets needed).")
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args()

    setup_logging(logging.INFO)
    gateway = MemoryGateway(build_demo_level())

    print("Starting demo with a generated city...")
    print("Controls: E=editor  TAB=back to simulation  F3/D=debug  R=respawn  ESC=quit")
    pygame.init()
    try:
        atlas = TileAtlas(make_placeholder_atlas())
        mode = "sim"
        while mode != "quit":
            if mode == "sim":
                result = PygameCityView(gateway, atlas=atlas, seed=args.seed).run()
                mode = "edit" if result == "editor" else "quit"
            else:
                result = PygameEditorView(gateway, atlas=atlas).run()
                mode = "sim" if result == "simulation" else "quit"
    finally:
        pygame.quit()


if __name__ == "__main__":
    main()
