# src/tests/test_flap_env.py
"""
Tests for FlapEnv (Gymnasium environment) and its observation vector.

Usage (from repo root):
  python -m src.tests.test_flap_env
"""

from __future__ import annotations
import math
import os
from typing import List, Tuple

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import numpy as np
from gymnasium.utils.env_checker import check_env

from src.env.flap_env import FlapEnv
from src.env.observations import OBS_SIZE, build_observation, upcoming_pairs
from src.game.actor import Actor
from src.game.config import WIDTH, HEIGHT, PIXEL_RATIO, OBSTACLE_SPACING
from src.game.obstacles import ObstacleField
from src.game.simulation import Geometry
from src.tests.fixed_random import SeqRandom


# ------------------------ Observations ------------------------

def test_observation_layout():
    geo = Geometry(float(WIDTH), float(HEIGHT))
    field = ObstacleField(SeqRandom(), geo.width)
    obs = build_observation(Actor(), field, geo)
    assert isinstance(obs, np.ndarray) and obs.dtype == np.float32 and obs.shape == (OBS_SIZE,)
    y, vy, dx1, gap1, dy1, dx2, gap2, dy2 = obs.tolist()
    assert (y, vy) == (0.0, 0.0)
    assert math.isclose(dx1, 0.5)                                    # first pair at x = W/2
    assert math.isclose(dx2, (WIDTH / 2 + OBSTACLE_SPACING * PIXEL_RATIO) / WIDTH, rel_tol=1e-6)
    assert gap1 == 0.0 and dy1 == 0.0 and gap2 == 0.0 and dy2 == 0.0


def test_observation_tracks_actor():
    geo = Geometry(float(WIDTH), float(HEIGHT))
    field = ObstacleField(SeqRandom(), geo.width)
    obs = build_observation(Actor(y=100.0, vy=-800.0), field, geo)
    assert math.isclose(obs[0], 100.0 / (HEIGHT / 2), rel_tol=1e-6)
    assert math.isclose(obs[1], -0.5, rel_tol=1e-6)
    assert math.isclose(obs[4], -100.0 / HEIGHT, rel_tol=1e-6)
    assert np.all(np.abs(build_observation(Actor(y=-5000.0, vy=9000.0), field, geo)) <= 1.0)


def test_upcoming_pairs_skip_passed_obstacles():
    geo = Geometry(float(WIDTH), float(HEIGHT))
    field = ObstacleField(SeqRandom(), geo.width)
    field.obstacles[0].x = -field.half_width - 1.0     # fully behind the actor
    pairs = upcoming_pairs(Actor(), field)
    assert len(pairs) == 2 and all(p.is_upper for p in pairs)
    assert pairs[0] is field.obstacles[2]


# ------------------------ Env ------------------------

def test_api_check():
    """Verify Gym API contract (spaces, step/reset signatures, types)."""
    env = FlapEnv(frame_skip=4)
    try:
        check_env(env, skip_render_check=True)
    finally:
        env.close()


def test_smoke():
    """Short random rollout: no crashes, obs in space, reward type, proper terminations."""
    env = FlapEnv(frame_skip=4)
    try:
        obs, info = env.reset(seed=123)
        assert env.observation_space.contains(obs)
        assert info["seed"] == 123
        rng = np.random.RandomState(0)
        for t in range(300):
            obs, r, term, trunc, info = env.step(int(rng.randint(0, 2)))
            assert isinstance(r, float)
            assert env.observation_space.contains(obs), f"step {t}: observation out of bounds"
            if term or trunc:
                break
    finally:
        env.close()


def test_noop_falls_to_floor():
    env = FlapEnv(frame_skip=4)
    try:
        env.reset(seed=5)
        rewards = []
        for _ in range(100):
            obs, r, term, trunc, info = env.step(0)
            rewards.append(r)
            if term:
                break
        assert term, "never flapping must hit the floor"
        assert info["death_cause"] == "floor"
        assert rewards[-1] == -1.0 and all(r == 1.0 for r in rewards[:-1])
        assert env.observation_space.contains(obs)
    finally:
        env.close()


def test_time_limit_truncates():
    env = FlapEnv(frame_skip=4, time_limit_seconds=0.2)   # 3 decisions
    try:
        env.reset(seed=1)
        flags = [env.step(1)[3] for _ in range(3)]
        assert flags == [False, False, True]
    finally:
        env.close()


def test_determinism():
    """Same seed + same action sequence => identical obs/reward/terminal flags."""
    def rollout(seed_val: int, action_seq: List[int]) -> List[Tuple[np.ndarray, float, bool, bool]]:
        env = FlapEnv(frame_skip=4)
        traj = []
        try:
            env.reset(seed=seed_val)
            for a in action_seq:
                obs, r, term, trunc, _ = env.step(int(a))
                traj.append((obs.copy(), float(r), bool(term), bool(trunc)))
                if term or trunc:
                    break
        finally:
            env.close()
        return traj

    rng = np.random.RandomState(42)
    action_seq = [int(rng.random_sample() < 0.2) for _ in range(300)]
    t1 = rollout(77, action_seq)
    t2 = rollout(77, action_seq)
    assert len(t1) == len(t2)
    for i, ((o1, r1, te1, tr1), (o2, r2, te2, tr2)) in enumerate(zip(t1, t2)):
        assert np.array_equal(o1, o2), f"obs mismatch at step {i}"
        assert (r1, te1, tr1) == (r2, te2, tr2), f"transition mismatch at step {i}"


def test_rgb_array_render():
    env = FlapEnv(render_mode="rgb_array")
    try:
        env.reset(seed=3)
        env.step(1)
        frame = env.render()
        assert frame.shape == (HEIGHT, WIDTH, 3) and frame.dtype == np.uint8
    finally:
        env.close()


def main():
    for name, fn in list(globals().items()):
        if name.startswith("test_") and callable(fn):
            fn()
            print(f"✓ {name}")
    print("🎉 All env tests passed")


if __name__ == "__main__":
    main()
