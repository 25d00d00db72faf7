# src/game/obstacles.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Protocol
from .config import (
    PIXEL_RATIO, OBSTACLE_AMOUNT, OBSTACLE_WIDTH, OBSTACLE_HEIGHT,
    OBSTACLE_VERTICAL_OFFSET, OBSTACLE_GAP, OBSTACLE_SPACING, OBSTACLE_SCROLL_SPEED
)

log = logging.getLogger(__name__)

UPPER = 1
LOWER = -1


class RandomSource(Protocol):
    """Anything with random.Random's uniform(); tests pass a fixed sequence."""
    def uniform(self, a: float, b: float) -> float: ...


@dataclass
class Obstacle:
    x: float
    y: float          # sprite centre
    direction: int    # +1 = upper member of its pair, -1 = lower member

    @property
    def is_upper(self) -> bool:
        return self.direction == UPPER


def centre_gap() -> float:
    """Distance from the pair's centre line to each member's centre."""
    return (OBSTACLE_HEIGHT / 2 + OBSTACLE_GAP) * PIXEL_RATIO


def generate_offset(rng: RandomSource) -> float:
    """One vertical pair offset in world units, uniform in the configured range."""
    return rng.uniform(-OBSTACLE_VERTICAL_OFFSET, OBSTACLE_VERTICAL_OFFSET) * PIXEL_RATIO


class ObstacleField:
    """
    Fixed pool of obstacle pairs scrolling left on a periodic lattice.

    Slot 2*i holds the upper member of pair i, slot 2*i+1 the lower one.
    Obstacles are never created or dropped after reset(): once one leaves the
    left edge it jumps forward by exactly one lattice period and gets a new
    vertical offset.

    By default all obstacles recycled during the same frame share a single
    offset draw. With per_pair_offsets=True each pair gets its own draw.
    """
    def __init__(self,
                 rng: RandomSource,
                 world_width: float,
                 pair_count: int = OBSTACLE_AMOUNT,
                 spacing: float = OBSTACLE_SPACING * PIXEL_RATIO,
                 scroll_speed: float = OBSTACLE_SCROLL_SPEED,
                 per_pair_offsets: bool = False):
        if pair_count <= 0:
            raise ValueError(f"pair_count must be > 0, got {pair_count}")
        if spacing <= 0:
            raise ValueError(f"spacing must be > 0, got {spacing}")
        self.rng = rng
        self.world_width = float(world_width)
        self.pair_count = int(pair_count)
        self.spacing = float(spacing)
        self.scroll_speed = float(scroll_speed)
        self.per_pair_offsets = per_pair_offsets
        self.half_width = OBSTACLE_WIDTH * PIXEL_RATIO / 2
        self.obstacles: List[Obstacle] = []
        self.reset()

    @property
    def lattice_period(self) -> float:
        return self.pair_count * self.spacing

    def __len__(self) -> int:
        return len(self.obstacles)

    def __iter__(self) -> Iterator[Obstacle]:
        return iter(self.obstacles)

    def reset(self):
        """(Re)build every pair at its lattice slot ahead of the right edge."""
        gap = centre_gap()
        obstacles: List[Obstacle] = []
        for i in range(self.pair_count):
            offset = generate_offset(self.rng)
            x = self.world_width / 2 + self.spacing * i
            obstacles.append(Obstacle(x=x, y=gap + offset, direction=UPPER))
            obstacles.append(Obstacle(x=x, y=-gap + offset, direction=LOWER))
        self.obstacles = obstacles

    def upper_members(self) -> Iterator[Obstacle]:
        return (o for o in self.obstacles if o.is_upper)

    def _past_left_edge(self, ob: Obstacle) -> bool:
        return ob.x + self.half_width < -self.world_width / 2

    def advance(self, dt: float) -> int:
        """Scroll every obstacle left and recycle the ones that left the world.
        Returns how many obstacles were recycled this frame."""
        dx = self.scroll_speed * dt
        gap = centre_gap()
        shared: Optional[float] = None
        pair_offsets = {}
        recycled = 0

        for slot, ob in enumerate(self.obstacles):
            ob.x -= dx
            if not self._past_left_edge(ob):
                continue

            if self.per_pair_offsets:
                pair = slot // 2
                if pair not in pair_offsets:
                    pair_offsets[pair] = generate_offset(self.rng)
                offset = pair_offsets[pair]
            else:
                if shared is None:
                    shared = generate_offset(self.rng)
                offset = shared

            ob.x += self.lattice_period
            ob.y = gap * ob.direction + offset
            recycled += 1

        if recycled:
            log.debug("recycled %d obstacle(s)", recycled)
        return recycled

