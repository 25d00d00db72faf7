# src/env/observations.py
"""Vector observation for FlapEnv.

Layout, float32, shape (8,), every entry in [-1, 1]:

    [y_norm, vy_norm,
     dx1, gap1, dy1,      # nearest pair still ahead of (or overlapping) the actor
     dx2, gap2, dy2]      # the pair after it

- y_norm : actor height / (H/2)
- vy_norm: actor vertical speed / OBS_MAX_VY
- dx     : horizontal distance actor -> pair centre, / W
- gap    : pair opening centre line / (H/2)
- dy     : opening centre minus actor height, / H
"""

from __future__ import annotations
from typing import List, Optional, Tuple
import numpy as np

from src.game.actor import Actor
from src.game.obstacles import Obstacle, ObstacleField, centre_gap
from src.game.simulation import Geometry

OBS_SIZE = 8
OBS_PAIRS = 2
OBS_MAX_VY = 1600.0     # ~ free fall speed over the full screen height


def _clamp1(v: float) -> float:
    return -1.0 if v < -1.0 else (1.0 if v > 1.0 else v)


def upcoming_pairs(actor: Actor, field: ObstacleField, n: int = OBS_PAIRS) -> List[Obstacle]:
    """Upper members not yet fully behind the actor, nearest first."""
    ahead = [o for o in field.upper_members() if o.x + field.half_width > actor.x]
    ahead.sort(key=lambda o: o.x)
    return ahead[:n]


def pair_features(actor: Actor, upper: Optional[Obstacle], geo: Geometry) -> Tuple[float, float, float]:
    if upper is None:
        return 1.0, 0.0, 0.0
    opening_y = upper.y - centre_gap()
    dx = _clamp1((upper.x - actor.x) / geo.width)
    gap = _clamp1(opening_y / (geo.height / 2))
    dy = _clamp1((opening_y - actor.y) / geo.height)
    return dx, gap, dy


def build_observation(actor: Actor, field: ObstacleField, geo: Geometry) -> np.ndarray:
    y_norm = _clamp1(actor.y / (geo.height / 2))
    vy_norm = _clamp1(actor.vy / OBS_MAX_VY)

    feats = [y_norm, vy_norm]
    pairs = upcoming_pairs(actor, field)
    for i in range(OBS_PAIRS):
        feats.extend(pair_features(actor, pairs[i] if i < len(pairs) else None, geo))
    return np.asarray(feats, dtype=np.float32)
