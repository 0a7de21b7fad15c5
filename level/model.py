#!/usr/bin/env python3
"""
level/model.py
==============
Canonical grid data shared by the simulation and the editor.

A :class:`LevelData` is an immutable snapshot.  Every full-grid array
(each layer, ``drivable``, ``walkable``) holds exactly ``width * height``
integers, and index ``i`` always addresses cell ``(i % width, i // width)``.
Edits never mutate a snapshot in place; they build a new one that shares
every array they did not touch (see :mod:`editor.brush`).
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple


class LevelDataError(ValueError):
    """A level document violates the grid invariants."""


def _as_int(value: Any) -> int:
    """Integer from a JSON value; fractional numbers are rejected."""
    number = int(value)
    if isinstance(value, float) and value != number:
        raise ValueError(f"non-integer value {value!r}")
    return number


class Direction(IntEnum):
    """Per-cell code of the drivable mask."""

    NONE = 0
    UP = 1
    RIGHT = 2
    DOWN = 3
    LEFT = 4

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> "Direction":
        return _OPPOSITES[self]

    @classmethod
    def from_drag(cls, dx: int, dy: int) -> "Direction":
        """Direction of a pointer drag step by its dominant axis.

        Horizontal wins only when strictly larger; ties and pure vertical
        steps map to DOWN / UP.  A zero step yields ``NONE``.
        """
        if dx == 0 and dy == 0:
            return cls.NONE
        if abs(dx) > abs(dy):
            return cls.RIGHT if dx > 0 else cls.LEFT
        return cls.DOWN if dy > 0 else cls.UP


_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.NONE: (0, 0),
    Direction.UP: (0, -1),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
}
_OPPOSITES: Dict[Direction, Direction] = {
    Direction.NONE: Direction.NONE,
    Direction.UP: Direction.DOWN,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
}

# Fixed enumeration order used by every decision step.
CARDINALS: Tuple[Direction, ...] = (
    Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT,
)

FACINGS: Tuple[str, ...] = ("right", "left", "up", "down")
ENTITY_TYPES: Tuple[str, ...] = ("car", "train")


@dataclass(frozen=True)
class Layer:
    """One named full-grid array of tile IDs (0 = empty)."""

    name: str
    data: List[int]


@dataclass(frozen=True)
class EntityConfig:
    """Archetype: a multi-tile sprite train per travel direction."""

    id: int
    type: str
    right: List[int] = field(default_factory=list)
    left: List[int] = field(default_factory=list)
    up: List[int] = field(default_factory=list)
    down: List[int] = field(default_factory=list)

    def sequence(self, facing: str) -> List[int]:
        if facing not in FACINGS:
            raise KeyError(facing)
        return getattr(self, facing)

    def with_tile(self, facing: str, part: int, tile_id: int) -> "EntityConfig":
        """Return a copy with one slot replaced, or ``self`` if unchanged."""
        parts = self.sequence(facing)
        if parts[part] == tile_id:
            return self
        new_parts = list(parts)
        new_parts[part] = tile_id
        return replace(self, **{facing: new_parts})

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "right": list(self.right),
            "left": list(self.left),
            "up": list(self.up),
            "down": list(self.down),
        }

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "EntityConfig":
        try:
            cfg = cls(
                id=_as_int(raw["id"]),
                type=str(raw["type"]),
                right=[_as_int(t) for t in raw.get("right", [])],
                left=[_as_int(t) for t in raw.get("left", [])],
                up=[_as_int(t) for t in raw.get("up", [])],
                down=[_as_int(t) for t in raw.get("down", [])],
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            raise LevelDataError(f"malformed entity config: {exc}") from exc
        if cfg.type not in ENTITY_TYPES:
            raise LevelDataError(f"entity config {cfg.id}: unknown type {cfg.type!r}")
        for facing in FACINGS:
            if any(t < 0 for t in cfg.sequence(facing)):
                raise LevelDataError(f"entity config {cfg.id}: negative tile id in {facing}")
        return cfg


@dataclass(frozen=True)
class LevelData:
    """Immutable level snapshot.

    Attributes
    ----------
    width, height : int
        Grid dimensions in tiles.
    tile_size : int
        Source tile size in atlas pixels (``tileSize`` in JSON).
    layers : tuple of Layer
        Rendered in order; layer 0 is drawn below entities.
    drivable : list of int
        Direction codes 0–4 per cell.
    walkable : list of int
        0 / 1 per cell.
    entity_configs : tuple of EntityConfig or None
        ``None`` when the document carries no ``entityConfigs`` key.
    """

    width: int
    height: int
    tile_size: int
    layers: Tuple[Layer, ...]
    drivable: List[int]
    walkable: List[int]
    entity_configs: Optional[Tuple[EntityConfig, ...]] = None

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise LevelDataError(f"invalid dimensions {self.width}x{self.height}")
        n = self.width * self.height
        for layer in self.layers:
            if len(layer.data) != n:
                raise LevelDataError(
                    f"layer {layer.name!r} has {len(layer.data)} cells, expected {n}"
                )
            if any(t < 0 for t in layer.data):
                raise LevelDataError(f"layer {layer.name!r} has a negative tile id")
        if len(self.drivable) != n:
            raise LevelDataError(f"drivable has {len(self.drivable)} cells, expected {n}")
        if len(self.walkable) != n:
            raise LevelDataError(f"walkable has {len(self.walkable)} cells, expected {n}")
        if any(not 0 <= code <= 4 for code in self.drivable):
            raise LevelDataError("drivable contains a code outside 0-4")
        if any(flag not in (0, 1) for flag in self.walkable):
            raise LevelDataError("walkable contains a value outside {0, 1}")

    # ── addressing ────────────────────────────────────────────────────────

    @property
    def size(self) -> int:
        return self.width * self.height

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def index(self, x: int, y: int) -> int:
        return y * self.width + x

    def coords(self, i: int) -> Tuple[int, int]:
        return i % self.width, i // self.width

    @staticmethod
    def cell_center(x: int, y: int, tile_px: float) -> Tuple[float, float]:
        return x * tile_px + tile_px / 2, y * tile_px + tile_px / 2

    # ── archetypes ────────────────────────────────────────────────────────

    def car_configs(self) -> List[Tuple[int, EntityConfig]]:
        """``(index, config)`` pairs of every ``car`` archetype."""
        return [
            (idx, cfg)
            for idx, cfg in enumerate(self.entity_configs or ())
            if cfg.type == "car"
        ]

    # ── serialisation ─────────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {
            "width": self.width,
            "height": self.height,
            "tileSize": self.tile_size,
            "layers": [{"name": layer.name, "data": list(layer.data)} for layer in self.layers],
            "drivable": list(self.drivable),
            "walkable": list(self.walkable),
        }
        if self.entity_configs is not None:
            doc["entityConfigs"] = [cfg.to_dict() for cfg in self.entity_configs]
        return doc

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "LevelData":
        try:
            layers = tuple(
                Layer(name=str(layer["name"]), data=[_as_int(t) for t in layer["data"]])
                for layer in raw["layers"]
            )
            configs_raw = raw.get("entityConfigs")
            configs = (
                tuple(EntityConfig.from_dict(c) for c in configs_raw)
                if configs_raw is not None
                else None
            )
            return cls(
                width=_as_int(raw["width"]),
                height=_as_int(raw["height"]),
                tile_size=_as_int(raw["tileSize"]),
                layers=layers,
                drivable=[_as_int(v) for v in raw["drivable"]],
                walkable=[_as_int(v) for v in raw["walkable"]],
                entity_configs=configs,
            )
        except (KeyError, TypeError, ValueError, OverflowError) as exc:
            if isinstance(exc, LevelDataError):
                raise
            raise LevelDataError(f"malformed level document: {exc}") from exc


# ── factories ─────────────────────────────────────────────────────────────────

def default_entity_configs() -> Tuple[EntityConfig, ...]:
    """Three two-tile cars and one four-tile train, all slots empty."""
    configs: List[EntityConfig] = []
    for idx, kind, length in ((0, "car", 2), (1, "car", 2), (2, "car", 2), (3, "train", 4)):
        configs.append(EntityConfig(
            id=idx, type=kind,
            right=[0] * length, left=[0] * length,
            up=[0] * length, down=[0] * length,
        ))
    return tuple(configs)


def with_default_configs(level: LevelData) -> LevelData:
    if level.entity_configs is not None:
        return level
    return replace(level, entity_configs=default_entity_configs())


def blank_level(
    width: int,
    height: int,
    tile_size: int = 8,
    layer_names: Sequence[str] = ("Ground", "Objects"),
) -> LevelData:
    n = width * height
    return LevelData(
        width=width,
        height=height,
        tile_size=tile_size,
        layers=tuple(Layer(name=name, data=[0] * n) for name in layer_names),
        drivable=[0] * n,
        walkable=[0] * n,
        entity_configs=default_entity_configs(),
    )
