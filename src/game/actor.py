# src/game/actor.py
from __future__ import annotations
from dataclasses import dataclass
from .config import FLAP_FORCE, GRAVITY, VELOCITY_ROT_RATIO, MAX_TILT_DEG


@dataclass
class Actor:
    """
    The flapping actor. World coords are centred on the origin, y points up.
    - x never changes (the obstacles scroll, not the actor)
    - vy > 0 means moving up
    """
    x: float = 0.0
    y: float = 0.0
    vy: float = 0.0

    @property
    def tilt(self) -> float:
        """Visual tilt in degrees, positive = nose up. Presentation only."""
        return max(-MAX_TILT_DEG, min(MAX_TILT_DEG, self.vy / VELOCITY_ROT_RATIO))

    def flap(self):
        # override, never accumulate
        self.vy = FLAP_FORCE

    def update_physics(self, dt: float, flap: bool = False):
        """Apply the flap edge, then integrate gravity and position."""
        if flap:
            self.flap()
        self.vy -= GRAVITY * dt
        self.y += self.vy * dt

    def below_world(self, world_height: float) -> bool:
        """Death boundary: at or below the bottom edge of the world."""
        return self.y <= -world_height / 2
