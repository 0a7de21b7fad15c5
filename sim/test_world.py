#!/usr/bin/env python3
"""
World-level tests: spawning rules, tick order and long-run invariants.
"""

from __future__ import annotations

import math
import unittest

import numpy as np

from level.model import EntityConfig, Layer, LevelData, blank_level
from level.samples import build_demo_level
from sim.physics import cell_center, pixel_to_cell
from sim.policy import SimPolicy
from sim.world import CityWorld

TILE = 24.0


def _open_level(width: int, height: int, drivable: int = 0, walkable: int = 0,
                configs=None) -> LevelData:
    n = width * height
    return LevelData(
        width=width,
        height=height,
        tile_size=8,
        layers=(Layer("Ground", [1] * n),),
        drivable=[drivable] * n,
        walkable=[walkable] * n,
        entity_configs=configs,
    )


_ONE_CAR = (EntityConfig(id=0, type="car", right=[1, 2], left=[2, 1], up=[3, 4], down=[4, 3]),)


class SpawnTests(unittest.TestCase):
    def test_no_car_archetype_means_no_cars(self) -> None:
        train_only = (EntityConfig(id=0, type="train", right=[0] * 4, left=[0] * 4,
                                   up=[0] * 4, down=[0] * 4),)
        world = CityWorld(_open_level(6, 6, drivable=2, walkable=1, configs=train_only), seed=1)
        self.assertEqual(len(world.cars), 0)
        self.assertEqual(len(world.pedestrians), world.policy.pedestrian_count)

    def test_no_walkable_cells_means_no_pedestrians(self) -> None:
        world = CityWorld(_open_level(6, 6, drivable=2, configs=_ONE_CAR), seed=1)
        self.assertEqual(len(world.pedestrians), 0)
        self.assertGreater(len(world.cars), 0)

    def test_cars_spawn_on_distinct_drivable_tile_centers(self) -> None:
        level = build_demo_level()
        world = CityWorld(level, seed=4)
        self.assertLessEqual(len(world.cars), world.policy.car_spawn_attempts)
        seen = set()
        for rec in world.cars:
            gx, gy = pixel_to_cell(float(rec["x"]), float(rec["y"]), TILE)
            self.assertGreater(level.drivable[level.index(gx, gy)], 0)
            self.assertEqual((float(rec["x"]), float(rec["y"])), cell_center(gx, gy, TILE))
            self.assertEqual((int(rec["vx"]), int(rec["vy"])), (0, 0))
            self.assertNotIn((gx, gy), seen)
            seen.add((gx, gy))
            self.assertEqual(level.entity_configs[int(rec["archetype"])].type, "car")
            self.assertGreaterEqual(float(rec["speed"]), 0.5)
            self.assertLess(float(rec["speed"]), 2.0)

    def test_car_on_first_tile_blocks_spawn_on_its_right(self) -> None:
        level = _open_level(2, 1, drivable=2, configs=_ONE_CAR)
        first_left = 0
        for seed in range(50):
            world = CityWorld(level, seed=seed)
            first = pixel_to_cell(float(world.cars[0]["x"]), float(world.cars[0]["y"]), TILE)
            if first == (0, 0):
                first_left += 1
                self.assertEqual(len(world.cars), 1, msg=f"seed={seed}")
        self.assertGreater(first_left, 0)

    def test_later_spawns_keep_a_tile_from_earlier_centres(self) -> None:
        # Measured from an earlier car's centre to a later car's tile corner.
        half = TILE / 2
        for level in (_open_level(2, 1, drivable=2, configs=_ONE_CAR),
                      _open_level(3, 3, drivable=2, configs=_ONE_CAR),
                      build_demo_level()):
            for seed in range(20):
                cars = CityWorld(level, seed=seed).cars
                for j in range(len(cars)):
                    corner = (float(cars[j]["x"]) - half, float(cars[j]["y"]) - half)
                    for i in range(j):
                        gap = math.hypot(float(cars[i]["x"]) - corner[0],
                                         float(cars[i]["y"]) - corner[1])
                        self.assertGreaterEqual(gap, TILE)

    def test_tile_left_of_a_car_stays_open(self) -> None:
        # A car on (1, 0) sits 1.5 tiles from the corner of (0, 0).
        level = _open_level(2, 1, drivable=2, configs=_ONE_CAR)
        counts = {len(CityWorld(level, seed=seed).cars) for seed in range(50)}
        self.assertIn(2, counts)

    def test_car_ids_are_attempt_indices(self) -> None:
        world = CityWorld(build_demo_level(), seed=2)
        ids = [int(i) for i in world.cars["id"]]
        self.assertEqual(ids, sorted(ids))
        self.assertTrue(all(0 <= i < world.policy.car_spawn_attempts for i in ids))

    def test_pedestrians_spawn_near_walkable_centers(self) -> None:
        level = build_demo_level()
        world = CityWorld(level, seed=3)
        self.assertEqual(len(world.pedestrians), 50)
        self.assertEqual(list(world.pedestrians["id"][:3]), [1000, 1001, 1002])
        for rec in world.pedestrians:
            x, y = float(rec["x"]), float(rec["y"])
            gx, gy = pixel_to_cell(x, y, TILE)
            self.assertEqual(level.walkable[level.index(gx, gy)], 1)
            cx, cy = cell_center(gx, gy, TILE)
            self.assertLessEqual(abs(x - cx), TILE / 4)
            self.assertLessEqual(abs(y - cy), TILE / 4)
            self.assertTrue(bool(rec["pedestrian"]))
            self.assertGreaterEqual(float(rec["speed"]), 0.2)
            self.assertLess(float(rec["speed"]), 0.5)

    def test_seed_reproducible(self) -> None:
        a = CityWorld(build_demo_level(), seed=42)
        b = CityWorld(build_demo_level(), seed=42)
        for _ in range(30):
            a.tick()
            b.tick()
        for field in ("x", "y", "tx", "ty", "vx", "vy"):
            self.assertTrue(np.array_equal(a.cars[field], b.cars[field]))
            self.assertTrue(np.array_equal(a.pedestrians[field], b.pedestrians[field]))

    def test_reset_respawns(self) -> None:
        world = CityWorld(build_demo_level(), seed=5)
        for _ in range(10):
            world.tick()
        world.reset()
        self.assertEqual(world.tick_count, 0)
        self.assertTrue((world.cars["vx"] == 0).all())


class ScenarioTests(unittest.TestCase):
    def test_fresh_car_on_two_by_two_map_targets_a_neighbour_center(self) -> None:
        # Only (0, 1) is drivable at spawn time, which pins the car there.
        level = LevelData(
            width=2, height=2, tile_size=8,
            layers=(Layer("Ground", [1, 1, 1, 1]),),
            drivable=[0, 0, 1, 0],
            walkable=[0, 0, 0, 0],
            entity_configs=_ONE_CAR,
        )
        policy = SimPolicy(tile_px=TILE, car_spawn_attempts=1)
        world = CityWorld(level, policy=policy, seed=0)
        self.assertEqual(len(world.cars), 1)
        # Every cell now carries code 1 (up).
        world.level = LevelData(
            width=2, height=2, tile_size=8,
            layers=level.layers,
            drivable=[1, 1, 1, 1],
            walkable=level.walkable,
            entity_configs=_ONE_CAR,
        )
        world.tick()
        car = world.cars[0]
        neighbours = [cell_center(0, 0, TILE), cell_center(1, 1, TILE)]
        self.assertIn((float(car["tx"]), float(car["ty"])), neighbours)
        self.assertEqual((float(car["tx"]), float(car["ty"])), cell_center(0, 0, TILE))

    def test_omnidirectional_cell_targets_any_orthogonal_neighbour(self) -> None:
        # Code 0 under the car, drivable neighbours all around.
        level = LevelData(
            width=3, height=3, tile_size=8,
            layers=(Layer("Ground", [1] * 9),),
            drivable=[0, 2, 0, 2, 0, 2, 0, 2, 0],
            walkable=[0] * 9,
            entity_configs=_ONE_CAR,
        )
        policy = SimPolicy(tile_px=TILE, car_spawn_attempts=1)
        world = CityWorld(level, policy=policy, seed=0)
        rec = world.cars[0]
        x, y = cell_center(1, 1, TILE)
        rec["x"], rec["y"], rec["tx"], rec["ty"] = x, y, x, y
        world.tick()
        rec = world.cars[0]
        expected = [cell_center(gx, gy, TILE) for gx, gy in ((1, 0), (2, 1), (1, 2), (0, 1))]
        self.assertIn((float(rec["tx"]), float(rec["ty"])), expected)


class LongRunTests(unittest.TestCase):
    def test_entities_stay_on_their_masks(self) -> None:
        level = build_demo_level()
        world = CityWorld(level, seed=17)
        moved = 0
        start = world.cars["x"].copy(), world.cars["y"].copy()
        for _ in range(1500):
            world.tick()
            for rec in world.cars:
                gx, gy = pixel_to_cell(float(rec["x"]), float(rec["y"]), TILE)
                self.assertTrue(level.in_bounds(gx, gy))
                self.assertGreater(level.drivable[level.index(gx, gy)], 0)
                tx, ty = float(rec["tx"]), float(rec["ty"])
                tgx, tgy = pixel_to_cell(tx, ty, TILE)
                self.assertEqual((tx, ty), cell_center(tgx, tgy, TILE))
                self.assertGreater(level.drivable[level.index(tgx, tgy)], 0)
            for rec in world.pedestrians:
                gx, gy = pixel_to_cell(float(rec["x"]), float(rec["y"]), TILE)
                self.assertEqual(level.walkable[level.index(gx, gy)], 1)
        for i in range(len(world.cars)):
            if math.hypot(world.cars["x"][i] - start[0][i], world.cars["y"][i] - start[1][i]) > 0:
                moved += 1
        self.assertGreater(moved, 0)
        self.assertEqual(world.tick_count, 1500)

    def test_headings_are_grid_aligned(self) -> None:
        world = CityWorld(build_demo_level(), seed=8)
        for _ in range(300):
            world.tick()
        for table in (world.cars, world.pedestrians):
            for rec in table:
                vx, vy = int(rec["vx"]), int(rec["vy"])
                self.assertIn((vx, vy), [(0, 0), (0, 1), (0, -1), (1, 0), (-1, 0)])

    def test_blank_map_has_no_entities(self) -> None:
        world = CityWorld(blank_level(5, 5), seed=0)
        world.tick()
        self.assertEqual((len(world.cars), len(world.pedestrians)), (0, 0))


if __name__ == "__main__":
    unittest.main()
