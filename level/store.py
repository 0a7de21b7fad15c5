#!/usr/bin/env python3
"""
level/store.py
==============
Local JSON persistence for :class:`~level.model.LevelData`.

The document is written wholesale (no merge, no versioning); the last
write wins.  Loading failures raise :class:`LevelLoadError`, saving
failures are logged and reported as ``False``.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Mapping, Union

from level.model import LevelData, LevelDataError

log = logging.getLogger("level.store")


class LevelLoadError(Exception):
    """The level document could not be read, parsed or validated."""


def dump_level(level: Union[LevelData, Mapping[str, Any]]) -> str:
    """Pretty-printed JSON text of *level* (2-space indent)."""
    doc = level.to_dict() if isinstance(level, LevelData) else dict(level)
    return json.dumps(doc, indent=2)


def parse_level(text: str) -> LevelData:
    try:
        return LevelData.from_dict(json.loads(text))
    except (json.JSONDecodeError, LevelDataError, AttributeError) as exc:
        raise LevelLoadError(str(exc)) from exc


def load_level(path: str) -> LevelData:
    """Read and validate the level document at *path*."""
    try:
        with open(path, "r", encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        log.error("Failed to read level data %s: %s", path, exc)
        raise LevelLoadError(f"cannot read {path}: {exc}") from exc
    try:
        level = parse_level(text)
    except LevelLoadError as exc:
        log.error("Failed to parse level data %s: %s", path, exc)
        raise
    log.info("Loaded level %s (%dx%d, %d layers)",
             path, level.width, level.height, len(level.layers))
    return level


def save_level(path: str, level: Union[LevelData, Mapping[str, Any]]) -> bool:
    """Overwrite *path* with *level*; ``True`` on success."""
    try:
        text = dump_level(level)
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        with open(path, "w", encoding="utf-8") as fh:
            fh.write(text)
    except (OSError, TypeError, ValueError):
        log.exception("Failed to save level data to %s", path)
        return False
    log.info("Saved level data to %s", path)
    return True
