#!/usr/bin/env python3
"""
Tests for the look-ahead yield check between cars.
"""

from __future__ import annotations

import random
import unittest

from sim.collision import blocked_mask, is_blocked, lookahead_point
from sim.entities import entity_row, make_table
from sim.motion import integrate
from sim.physics import cell_center
from sim.policy import SimPolicy

TILE = 24.0
POLICY = SimPolicy(tile_px=TILE)
LOOKAHEAD = POLICY.lookahead_px
RADIUS = POLICY.block_radius_px


def _car(entity_id, gx, gy, heading, speed=1.0):
    x, y = cell_center(gx, gy, TILE)
    return entity_row(entity_id, x, y, speed, heading=heading, archetype=0,
                      target=cell_center(gx + heading[0], gy + heading[1], TILE))


class LookaheadTests(unittest.TestCase):
    def test_point_follows_heading_sign(self) -> None:
        self.assertEqual(lookahead_point(10.0, 10.0, 1, 0, 36.0), (46.0, 10.0))
        self.assertEqual(lookahead_point(10.0, 10.0, 0, -1, 36.0), (10.0, -26.0))
        self.assertEqual(lookahead_point(10.0, 10.0, 0, 0, 36.0), (10.0, 10.0))


class YieldTests(unittest.TestCase):
    def test_trailing_car_stops_leading_car_moves(self) -> None:
        # Leader one and a half tiles ahead of the trailer, both heading right.
        cars = make_table([
            _car(0, 0, 0, (1, 0)),
            _car(1, 1, 0, (1, 0)),
        ])
        cars[1]["x"] = cars[0]["x"] + LOOKAHEAD
        self.assertTrue(is_blocked(cars, 0, LOOKAHEAD, RADIUS))
        self.assertFalse(is_blocked(cars, 1, LOOKAHEAD, RADIUS))

    def test_world_order_gating(self) -> None:
        mask = [2] * 8
        cars = make_table([
            _car(0, 0, 0, (1, 0)),
            _car(1, 1, 0, (1, 0)),
        ])
        cars[1]["x"] = cars[0]["x"] + LOOKAHEAD
        before = (float(cars[0]["x"]), float(cars[1]["x"]))
        rng = random.Random(0)
        for i in range(len(cars)):
            if not is_blocked(cars, i, LOOKAHEAD, RADIUS):
                integrate(cars, i, mask, 8, 1, rng, POLICY)
        self.assertEqual(float(cars[0]["x"]), before[0])
        self.assertGreater(float(cars[1]["x"]), before[1])

    def test_stationary_car_is_never_blocked(self) -> None:
        cars = make_table([_car(0, 0, 0, (0, 0)), _car(1, 0, 0, (0, 0))])
        self.assertFalse(is_blocked(cars, 0, LOOKAHEAD, RADIUS))

    def test_car_does_not_block_itself(self) -> None:
        cars = make_table([_car(0, 2, 2, (1, 0))])
        self.assertFalse(is_blocked(cars, 0, LOOKAHEAD, RADIUS))

    def test_distant_car_does_not_block(self) -> None:
        cars = make_table([_car(0, 0, 0, (1, 0)), _car(1, 4, 0, (1, 0))])
        self.assertFalse(is_blocked(cars, 0, LOOKAHEAD, RADIUS))

    def test_oncoming_car_in_lookahead_blocks(self) -> None:
        cars = make_table([_car(0, 0, 0, (1, 0)), _car(1, 2, 0, (-1, 0))])
        cars[1]["x"] = cars[0]["x"] + LOOKAHEAD + RADIUS / 2
        self.assertTrue(is_blocked(cars, 0, LOOKAHEAD, RADIUS))

    def test_blocked_mask_matches_scalar_check(self) -> None:
        cars = make_table([
            _car(0, 0, 0, (1, 0)),
            _car(1, 1, 0, (1, 0)),
            _car(2, 5, 5, (0, 1)),
            _car(3, 5, 6, (0, 0)),
        ])
        cars[1]["x"] = cars[0]["x"] + LOOKAHEAD
        vector = blocked_mask(cars, LOOKAHEAD, RADIUS)
        scalar = [is_blocked(cars, i, LOOKAHEAD, RADIUS) for i in range(len(cars))]
        self.assertEqual(list(vector), scalar)


if __name__ == "__main__":
    unittest.main()
