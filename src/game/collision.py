# src/game/collision.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple
from .actor import Actor
from .obstacles import Obstacle
from .config import (
    PIXEL_RATIO, OBSTACLE_WIDTH, OBSTACLE_HEIGHT, MERCY_ZONE, OBSTACLE_SCROLL_SPEED
)


def hit_half_extents(width: float = OBSTACLE_WIDTH,
                     height: float = OBSTACLE_HEIGHT,
                     mercy: float = MERCY_ZONE) -> Tuple[float, float]:
    """(half_w, half_h) of the forgiving hitbox, in world units."""
    return (width - mercy) * PIXEL_RATIO / 2, (height - mercy) * PIXEL_RATIO / 2


HALF_W, HALF_H = hit_half_extents()


@dataclass
class FrameOutcome:
    scored: int = 0
    hit_slot: Optional[int] = None   # arena slot of the obstacle that killed the actor

    @property
    def hit(self) -> bool:
        return self.hit_slot is not None


def passed_this_frame(actor: Actor, ob: Obstacle, dt: float,
                      scroll_speed: float = OBSTACLE_SCROLL_SPEED) -> bool:
    """Upper member whose x crossed the actor's line during this frame."""
    diff = ob.x - actor.x
    return ob.is_upper and 0.0 < diff < scroll_speed * dt


def touches(actor: Actor, ob: Obstacle,
            half_w: float = HALF_W, half_h: float = HALF_H) -> bool:
    """Strict centre-distance test; touching the envelope edge is not a hit."""
    return abs(ob.y - actor.y) < half_h and abs(ob.x - actor.x) < half_w


def check_frame(actor: Actor, obstacles: Iterable[Obstacle], dt: float,
                scroll_speed: float = OBSTACLE_SCROLL_SPEED) -> FrameOutcome:
    """
    One pass over the (already moved) obstacles in slot order.
    Scores each passed upper member, stops at the first fatal contact.
    """
    out = FrameOutcome()
    for slot, ob in enumerate(obstacles):
        if passed_this_frame(actor, ob, dt, scroll_speed):
            out.scored += 1
        if touches(actor, ob):
            out.hit_slot = slot
            break
    return out
