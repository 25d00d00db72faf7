# src/tests/test_obstacles.py
"""
Obstacle field: lattice layout, scrolling, recycling, count invariant.

Usage (from repo root):
  python -m src.tests.test_obstacles
"""

from __future__ import annotations
import math
import random

from src.game.config import (
    WIDTH, PIXEL_RATIO, OBSTACLE_AMOUNT, OBSTACLE_SPACING, OBSTACLE_VERTICAL_OFFSET
)
from src.game.obstacles import ObstacleField, UPPER, LOWER, centre_gap
from src.tests.fixed_random import SeqRandom

SPACING = OBSTACLE_SPACING * PIXEL_RATIO
PERIOD = OBSTACLE_AMOUNT * SPACING


def make_field(values=(0.0,), **kw) -> ObstacleField:
    return ObstacleField(SeqRandom(values), float(WIDTH), **kw)


def test_initial_layout():
    offsets = [float(i) for i in range(OBSTACLE_AMOUNT)]
    f = make_field(offsets)
    assert len(f) == 2 * OBSTACLE_AMOUNT
    gap = centre_gap()
    for i in range(OBSTACLE_AMOUNT):
        up, lo = f.obstacles[2 * i], f.obstacles[2 * i + 1]
        x = WIDTH / 2 + SPACING * i
        assert up.direction == UPPER and lo.direction == LOWER
        assert math.isclose(up.x, x) and math.isclose(lo.x, x)
        off = offsets[i] * PIXEL_RATIO
        assert math.isclose(up.y, gap + off), "upper member at +gap + offset"
        assert math.isclose(lo.y, -gap + off), "lower member at -gap + offset"


def test_offsets_drawn_from_symmetric_range():
    rng = SeqRandom((0.0,))
    ObstacleField(rng, float(WIDTH))
    assert rng.calls == OBSTACLE_AMOUNT, "one draw per pair at init"
    assert all(b == (-OBSTACLE_VERTICAL_OFFSET, OBSTACLE_VERTICAL_OFFSET) for b in rng.bounds)


def test_advance_scrolls_everything():
    f = make_field()
    before = [o.x for o in f]
    recycled = f.advance(0.5)
    assert recycled == 0
    for x0, o in zip(before, f):
        assert math.isclose(o.x, x0 - f.scroll_speed * 0.5)


def test_no_draw_without_recycle():
    f = make_field()
    calls = f.rng.calls
    for _ in range(10):
        f.advance(1 / 60)
    assert f.rng.calls == calls


def test_recycle_shares_one_draw_per_frame():
    # 8 zero draws for init, then 10 / 20 for recycles
    f = make_field([0.0] * OBSTACLE_AMOUNT + [10.0, 20.0])
    for slot in range(4):            # pairs 0 and 1
        f.obstacles[slot].x = -711.0
    recycled = f.advance(0.1)        # dx = 12 -> x = -723, right edge past -640
    assert recycled == 4
    gap = centre_gap()
    for slot in range(4):
        ob = f.obstacles[slot]
        assert math.isclose(ob.x, -711.0 - 12.0 + PERIOD)
        assert math.isclose(ob.y, gap * ob.direction + 10.0 * PIXEL_RATIO)
    assert f.rng.calls == OBSTACLE_AMOUNT + 1


def test_recycle_per_pair_offsets():
    f = make_field([0.0] * OBSTACLE_AMOUNT + [10.0, 20.0], per_pair_offsets=True)
    for slot in range(4):
        f.obstacles[slot].x = -711.0
    f.advance(0.1)
    gap = centre_gap()
    up0, lo0, up1, lo1 = f.obstacles[:4]
    assert math.isclose(up0.y, gap + 45.0) and math.isclose(lo0.y, -gap + 45.0)
    assert math.isclose(up1.y, gap + 90.0) and math.isclose(lo1.y, -gap + 90.0)


def test_count_and_lattice_invariants():
    f = ObstacleField(random.Random(7), float(WIDTH))
    dt = 1 / 60
    dx = f.scroll_speed * dt
    recycles = 0
    for _ in range(60 * 60):
        before = [o.x for o in f]
        f.advance(dt)
        assert len(f) == 2 * OBSTACLE_AMOUNT
        for x0, o in zip(before, f):
            jump = o.x - (x0 - dx)
            if abs(jump) > 1e-6:
                assert math.isclose(jump, PERIOD, rel_tol=1e-9), "recycle jumps exactly one period"
                recycles += 1
    assert recycles > 0
    # pairs stay aligned and spaced one SPACING apart modulo the period
    xs = sorted(o.x for o in f.upper_members())
    for a, b in zip(xs, xs[1:]):
        assert math.isclose(b - a, SPACING, rel_tol=1e-6)


def test_reset_rebuilds_in_place():
    f = make_field()
    for _ in range(500):
        f.advance(1 / 30)
    f.reset()
    assert len(f) == 2 * OBSTACLE_AMOUNT
    assert math.isclose(f.obstacles[0].x, WIDTH / 2)


def test_invalid_config():
    for kw in ({"pair_count": 0}, {"spacing": 0.0}):
        try:
            make_field(**kw)
        except ValueError:
            continue
        raise AssertionError(f"expected ValueError for {kw}")


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
    print("✓ obstacle field tests passed")


if __name__ == "__main__":
    main()
