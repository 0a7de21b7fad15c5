#!/usr/bin/env python3
"""
Tests for the level snapshot model: index mapping, validation, JSON shape.
"""

from __future__ import annotations

import unittest

from level.atlas import cell_origin, sheet_position, source_rect, tile_id_at
from level.model import (
    Direction,
    EntityConfig,
    Layer,
    LevelData,
    LevelDataError,
    blank_level,
    default_entity_configs,
    with_default_configs,
)
from level.samples import build_demo_level


def _doc(width: int = 3, height: int = 2, **overrides):
    n = width * height
    doc = {
        "width": width,
        "height": height,
        "tileSize": 8,
        "layers": [{"name": "Ground", "data": list(range(n))}],
        "drivable": [0] * n,
        "walkable": [0] * n,
    }
    doc.update(overrides)
    return doc


class IndexMappingTests(unittest.TestCase):
    def test_every_array_addresses_the_same_cell(self) -> None:
        level = build_demo_level(width=9, height=7, margin=2)
        for i in range(level.size):
            x, y = level.coords(i)
            self.assertEqual((i % level.width, i // level.width), (x, y))
            self.assertEqual(level.index(x, y), i)
        for layer in level.layers:
            self.assertEqual(len(layer.data), level.size)
        self.assertEqual(len(level.drivable), level.size)
        self.assertEqual(len(level.walkable), level.size)

    def test_in_bounds(self) -> None:
        level = blank_level(4, 3)
        self.assertTrue(level.in_bounds(0, 0))
        self.assertTrue(level.in_bounds(3, 2))
        self.assertFalse(level.in_bounds(4, 0))
        self.assertFalse(level.in_bounds(0, -1))

    def test_cell_center(self) -> None:
        self.assertEqual(LevelData.cell_center(2, 1, 24), (60.0, 36.0))


class ValidationTests(unittest.TestCase):
    def test_wrong_layer_length_rejected(self) -> None:
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(layers=[{"name": "Ground", "data": [0, 0]}]))

    def test_wrong_mask_length_rejected(self) -> None:
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(drivable=[0]))

    def test_direction_code_out_of_range_rejected(self) -> None:
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(drivable=[5, 0, 0, 0, 0, 0]))

    def test_walkable_must_be_boolean(self) -> None:
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(walkable=[2, 0, 0, 0, 0, 0]))

    def test_missing_key_rejected(self) -> None:
        doc = _doc()
        del doc["tileSize"]
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(doc)

    def test_unknown_archetype_type_rejected(self) -> None:
        bad = {"id": 0, "type": "boat", "right": [], "left": [], "up": [], "down": []}
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(entityConfigs=[bad]))

    def test_non_positive_dimensions_rejected(self) -> None:
        with self.assertRaises(LevelDataError):
            LevelData(0, 1, 8, (), [], [])

    def test_level_data_error_is_value_error(self) -> None:
        self.assertTrue(issubclass(LevelDataError, ValueError))

    def test_fractional_cell_rejected(self) -> None:
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(layers=[{"name": "Ground", "data": [1.5, 0, 0, 0, 0, 0]}]))
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(drivable=[1.5, 0, 0, 0, 0, 0]))

    def test_fractional_archetype_slot_rejected(self) -> None:
        bad = {"id": 0, "type": "car", "right": [2.5, 1], "left": [], "up": [], "down": []}
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(entityConfigs=[bad]))

    def test_whole_float_accepted(self) -> None:
        doc = _doc(drivable=[2.0, 0, 0, 0, 0, 0])
        doc["width"] = 3.0
        level = LevelData.from_dict(doc)
        self.assertEqual(level.width, 3)
        self.assertEqual(level.drivable[0], 2)
        self.assertIsInstance(level.drivable[0], int)

    def test_infinite_cell_rejected(self) -> None:
        with self.assertRaises(LevelDataError):
            LevelData.from_dict(_doc(layers=[{"name": "Ground", "data": [float("inf")] * 6}]))


class SerialisationTests(unittest.TestCase):
    def test_round_trip_without_entity_configs(self) -> None:
        doc = _doc()
        self.assertEqual(LevelData.from_dict(doc).to_dict(), doc)
        self.assertNotIn("entityConfigs", LevelData.from_dict(doc).to_dict())

    def test_round_trip_with_entity_configs(self) -> None:
        doc = build_demo_level().to_dict()
        self.assertEqual(LevelData.from_dict(doc).to_dict(), doc)
        self.assertEqual(
            sorted(doc), ["drivable", "entityConfigs", "height", "layers",
                          "tileSize", "walkable", "width"],
        )
        self.assertEqual(
            sorted(doc["entityConfigs"][0]), ["down", "id", "left", "right", "type", "up"],
        )


class DirectionTests(unittest.TestCase):
    def test_codes_and_deltas(self) -> None:
        self.assertEqual(int(Direction.UP), 1)
        self.assertEqual(int(Direction.LEFT), 4)
        self.assertEqual(Direction.UP.delta, (0, -1))
        self.assertEqual(Direction.RIGHT.delta, (1, 0))
        self.assertEqual(Direction.DOWN.delta, (0, 1))
        self.assertEqual(Direction.LEFT.delta, (-1, 0))
        self.assertIs(Direction.RIGHT.opposite, Direction.LEFT)

    def test_from_drag_dominant_axis(self) -> None:
        self.assertIs(Direction.from_drag(3, 1), Direction.RIGHT)
        self.assertIs(Direction.from_drag(-2, 1), Direction.LEFT)
        self.assertIs(Direction.from_drag(1, 2), Direction.DOWN)
        self.assertIs(Direction.from_drag(0, -1), Direction.UP)
        # Ties go to the vertical axis.
        self.assertIs(Direction.from_drag(1, 1), Direction.DOWN)
        self.assertIs(Direction.from_drag(0, 0), Direction.NONE)


class ArchetypeTests(unittest.TestCase):
    def test_default_configs(self) -> None:
        configs = default_entity_configs()
        self.assertEqual([c.type for c in configs], ["car", "car", "car", "train"])
        self.assertEqual(configs[0].right, [0, 0])
        self.assertEqual(configs[3].down, [0, 0, 0, 0])

    def test_with_default_configs_only_fills_missing(self) -> None:
        bare = LevelData.from_dict(_doc())
        filled = with_default_configs(bare)
        self.assertEqual(len(filled.entity_configs), 4)
        self.assertIs(with_default_configs(filled), filled)

    def test_with_tile_returns_self_when_unchanged(self) -> None:
        cfg = EntityConfig(id=0, type="car", right=[5, 0], left=[0, 0], up=[0, 0], down=[0, 0])
        self.assertIs(cfg.with_tile("right", 0, 5), cfg)
        updated = cfg.with_tile("right", 1, 7)
        self.assertEqual(updated.right, [5, 7])
        self.assertEqual(cfg.right, [5, 0])

    def test_car_configs_skip_trains(self) -> None:
        level = blank_level(2, 2)
        self.assertEqual([idx for idx, _ in level.car_configs()], [0, 1, 2])

    def test_blank_level_layers(self) -> None:
        level = blank_level(5, 4)
        self.assertEqual([layer.name for layer in level.layers], ["Ground", "Objects"])
        self.assertTrue(all(t == 0 for t in level.layers[0].data))
        self.assertIsInstance(level.layers[0], Layer)


class AtlasAddressingTests(unittest.TestCase):
    def test_tile_zero_is_absent(self) -> None:
        self.assertIsNone(source_rect(0))
        self.assertIsNone(sheet_position(0))

    def test_source_rect(self) -> None:
        self.assertEqual(source_rect(1, cols=24, tile_size=8), (0, 0, 8, 8))
        self.assertEqual(source_rect(25, cols=24, tile_size=8), (0, 8, 8, 8))
        self.assertEqual(source_rect(30, cols=24, tile_size=8), (40, 8, 8, 8))

    def test_palette_pick(self) -> None:
        self.assertEqual(tile_id_at(0, 0, 24, 15), 1)
        self.assertEqual(tile_id_at(5, 1, 24, 15), 30)
        self.assertIsNone(tile_id_at(24, 0, 24, 15))
        self.assertIsNone(tile_id_at(0, 15, 24, 15))

    def test_cell_origin(self) -> None:
        self.assertEqual(cell_origin(7, 5, 24), (48, 24))


if __name__ == "__main__":
    unittest.main()
