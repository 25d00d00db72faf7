# src/env/flap_env.py
from __future__ import annotations
import random
from typing import Optional, Dict, Any
import numpy as np
import gymnasium as gym
import pygame

from src.game.config import WIDTH, HEIGHT, FPS, SCORE_REWARD
from src.game.actor import Actor
from src.game.simulation import Geometry, Phase, SimState, new_state, update, snapshot
from src.game.render import Renderer
from src.env.observations import OBS_SIZE, build_observation


class FlapEnv(gym.Env):
    """
    Flap Birb Gymnasium environment (vector observations).
    - Simulation at 60 Hz (internal).
    - Agent acts every `frame_skip` frames (default 4) -> 15 decisions/sec.
    - Observation: shape (8,), float32, see src.env.observations.
    """
    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": FPS}

    def __init__(self,
                 render_mode: Optional[str] = None,
                 frame_skip: int = 4,
                 time_limit_seconds: Optional[float] = 30.0,
                 per_pair_offsets: bool = False):
        super().__init__()
        assert frame_skip >= 1, "frame_skip must be >= 1"
        assert render_mode is None or render_mode in self.metadata["render_modes"]
        self.render_mode = render_mode
        self.frame_skip = int(frame_skip)
        self.per_pair_offsets = per_pair_offsets

        self.sim_fps = FPS
        self.dt = 1.0 / self.sim_fps

        self.time_limit_decisions = None
        if time_limit_seconds is not None:
            self.time_limit_decisions = int(self.sim_fps * time_limit_seconds / self.frame_skip)

        # Actions: 0 = NOOP, 1 = FLAP
        self.action_space = gym.spaces.Discrete(2)
        self.observation_space = gym.spaces.Box(low=-1.0, high=1.0, shape=(OBS_SIZE,), dtype=np.float32)

        # --- Runtime state ---
        self.geometry = Geometry(float(WIDTH), float(HEIGHT))
        self.state: Optional[SimState] = None
        self.current_seed: Optional[int] = None
        self.timestep: int = 0
        self.frames: int = 0
        self._last_actor: Actor = Actor()   # kept for the terminal observation

        # Rendering
        self.screen: Optional[pygame.Surface] = None
        self.clock = None
        self.renderer: Optional[Renderer] = None

    # -------------------- Core API --------------------

    def reset(self, *, seed: Optional[int] = None, options: Optional[Dict[str, Any]] = None):
        super().reset(seed=seed)  # initializes self.np_random

        # Seeding policy:
        # - If a seed is provided, use it directly for the obstacle RNG (strict reproducibility).
        # - If not, draw a fresh one so each unseeded episode gets a new layout.
        level_seed = int(seed) if seed is not None else random.randrange(0, 2**31 - 1)

        self.state = new_state(level_seed, self.geometry, per_pair_offsets=self.per_pair_offsets)
        self.current_seed = level_seed
        self.timestep = 0
        self.frames = 0
        self._last_actor = Actor()

        obs = self._get_obs()
        info = {"seed": self.current_seed, "score": 0}
        if self.render_mode == "human":
            self.render()
        return obs, info

    def step(self, action: int):
        assert self.action_space.contains(action), f"Invalid action {action}"
        assert self.state is not None, "call reset() before step()"

        scored = 0
        died = False
        for i in range(self.frame_skip):
            before = self.state.score
            # flap edge only on the first sub-step of the decision
            update(self.state, self.dt, flap=(action == 1 and i == 0))
            self.frames += 1
            scored += self.state.score - before
            if self.state.actor is not None:
                self._last_actor = Actor(self.state.actor.x, self.state.actor.y, self.state.actor.vy)
            if self.state.phase is Phase.PAUSED:
                died = True
                break

        reward = -1.0 if died else 1.0 + SCORE_REWARD * scored

        self.timestep += 1
        terminated = died
        truncated = False
        if (self.time_limit_decisions is not None) and (self.timestep >= self.time_limit_decisions):
            truncated = True

        obs = self._get_obs()
        info = {
            "score": self.state.score,
            "timestep": self.timestep,
            "frames": self.frames,
            "seed": self.current_seed,
            "death_cause": self.state.death_cause,
        }

        if self.render_mode == "human":
            self.render()

        return obs, float(reward), terminated, truncated, info

    # -------------------- Helpers --------------------

    def _get_obs(self) -> np.ndarray:
        assert self.state is not None
        actor = self.state.actor if self.state.actor is not None else self._last_actor
        return build_observation(actor, self.state.obstacles, self.geometry)

    # -------------------- Rendering --------------------

    def render(self):
        if self.render_mode is None or self.state is None:
            return None

        if self.screen is None:
            pygame.init()
            size = (int(self.geometry.width), int(self.geometry.height))
            if self.render_mode == "human":
                self.screen = pygame.display.set_mode(size)
                pygame.display.set_caption("Flapp Birb - Gym Env")
                self.clock = pygame.time.Clock()
            else:
                self.screen = pygame.Surface(size)
            self.renderer = Renderer(self.screen)

        self.renderer.draw(snapshot(self.state))

        if self.render_mode == "human":
            # Pump minimal event queue so the OS doesn't think we're hung
            pygame.event.pump()
            pygame.display.flip()
            self.clock.tick(self.metadata["render_fps"])
            return None

        # (H, W, 3) uint8
        arr = pygame.surfarray.array3d(self.screen)  # (W, H, 3)
        return np.transpose(arr, (1, 0, 2))

    def close(self):
        if self.screen is not None:
            if self.render_mode == "human":
                pygame.display.quit()
            pygame.quit()
            self.screen = None
            self.clock = None
            self.renderer = None
