# src/game/simulation.py
from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple
from .actor import Actor
from .obstacles import ObstacleField, RandomSource
from .collision import check_frame
from .config import WIDTH, HEIGHT, PAUSE_TEXT_1, PAUSE_TEXT_2, SCORE_DISPLAY

log = logging.getLogger(__name__)


class Phase(Enum):
    PLAYING = "playing"
    PAUSED = "paused"


@dataclass(frozen=True)
class Geometry:
    width: float = float(WIDTH)
    height: float = float(HEIGHT)

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"world size must be positive, got {self.width}x{self.height}")


@dataclass
class SimState:
    """Everything one run owns. Passed explicitly into update()."""
    geometry: Geometry
    rng: RandomSource
    obstacles: ObstacleField
    actor: Optional[Actor] = None
    score: int = 0
    phase: Phase = Phase.PLAYING
    dead: bool = False
    death_cause: Optional[str] = None   # "floor" | "obstacle" | None
    frame: int = 0


@dataclass(frozen=True)
class ActorView:
    x: float
    y: float
    tilt: float


@dataclass(frozen=True)
class RenderSnapshot:
    actor: Optional[ActorView]
    obstacles: List[Tuple[float, float, int]]   # (x, y, direction)
    score: int
    phase: Phase
    overlay: Tuple[str, ...] = ()
    death_cause: Optional[str] = None

    @property
    def paused(self) -> bool:
        return self.phase is Phase.PAUSED


def score_text(score: int) -> str:
    return f"{SCORE_DISPLAY}{score}"


def new_state(seed: Optional[int] = None,
              geometry: Optional[Geometry] = None,
              rng: Optional[RandomSource] = None,
              per_pair_offsets: bool = False) -> SimState:
    """Level setup: one actor at the origin, a fresh obstacle field, Playing."""
    geometry = geometry or Geometry()
    if rng is None:
        rng = random.Random(seed)
    field_ = ObstacleField(rng, geometry.width, per_pair_offsets=per_pair_offsets)
    return SimState(geometry=geometry, rng=rng, obstacles=field_, actor=Actor())


def reset(state: SimState):
    """Paused -> Playing: fresh actor, zero score, rebuilt obstacle field."""
    state.actor = Actor()
    state.score = 0
    state.obstacles.reset()
    state.dead = False
    state.death_cause = None
    state.phase = Phase.PLAYING
    log.info("run reset")


def _die(state: SimState, cause: str):
    state.dead = True
    state.death_cause = cause
    state.phase = Phase.PAUSED
    state.actor = None
    log.info("actor died (%s) with score %d", cause, state.score)


def snapshot(state: SimState) -> RenderSnapshot:
    actor = None
    if state.actor is not None:
        actor = ActorView(state.actor.x, state.actor.y, state.actor.tilt)
    overlay: Tuple[str, ...] = ()
    if state.phase is Phase.PAUSED:
        overlay = (PAUSE_TEXT_1, PAUSE_TEXT_2, score_text(state.score))
    return RenderSnapshot(
        actor=actor,
        obstacles=[(o.x, o.y, o.direction) for o in state.obstacles],
        score=state.score,
        phase=state.phase,
        overlay=overlay,
        death_cause=state.death_cause,
    )


def update(state: SimState, dt: float, flap: bool = False) -> RenderSnapshot:
    """
    One frame, in a fixed order:
      1. Paused: a flap edge resets the run, nothing else moves.
      2. Playing without an actor (and not dead): respawn one, obstacles still scroll.
      3. Playing: actor physics -> obstacle scroll/recycle -> floor check,
         then scoring and collision on the moved positions.
    """
    state.frame += 1

    if state.phase is Phase.PAUSED:
        if flap:
            reset(state)
        return snapshot(state)

    if state.actor is None:
        if not state.dead:
            log.warning("playing without an actor at frame %d, respawning", state.frame)
            state.actor = Actor()
        state.obstacles.advance(dt)
        return snapshot(state)

    actor = state.actor
    actor.update_physics(dt, flap)
    state.obstacles.advance(dt)

    if actor.below_world(state.geometry.height):
        _die(state, "floor")
        return snapshot(state)

    outcome = check_frame(actor, state.obstacles, dt, state.obstacles.scroll_speed)
    if outcome.scored:
        state.score += outcome.scored
        log.debug("score %d (+%d)", state.score, outcome.scored)
    if outcome.hit:
        _die(state, "obstacle")

    return snapshot(state)
