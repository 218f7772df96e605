"""
ArenaEnv - gymnasium wrapper around one game Session
---------------------------------------------------
- The agent plays through the same input queue a human uses (keys, pointer, fire)
- One env step = one frame pumped through the session's frame scheduler
- Vector observation: player state + top-K nearest enemies
- MultiDiscrete action space: [move(9), shoot(2), aim(8)]

Quick test:
    python -m arena.env
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .raster import rasterize
from .session import Session
from .simulation import StepEvents
from .utils import clamp

# move index -> movement keys held (0 = stand still, then clockwise from up)
MOVE_KEYS = (
    (),
    ("w",),
    ("w", "d"),
    ("d",),
    ("s", "d"),
    ("s",),
    ("s", "a"),
    ("a",),
    ("w", "a"),
)

AIM_DISTANCE = 100.0

DEFAULT_REWARD = {
    "R_KILL": 1.0,       # per enemy killed
    "R_HIT": 0.2,        # per bullet hit
    "R_DAMAGE": 0.05,    # per health point lost
    "R_SHOT": 0.01,      # per bullet fired
    "R_TIME": 0.001,     # per step
    "R_DEATH": 5.0,      # on defeat
}


class ArenaEnv(gym.Env):
    """Top-down arena shooter environment"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 30}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        game_config: Optional[Dict[str, Any]] = None,
        dt: float = 1 / 30,
        max_steps: int = 1800,  # 60s at 30 FPS
        k_enemies: int = 5,
        reward_config: Optional[Dict[str, float]] = None,
    ):
        super().__init__()

        if render_mode is not None and render_mode not in self.metadata["render_modes"]:
            raise ValueError(f"Unknown render mode: {render_mode}")
        self.render_mode = render_mode

        self.config = GameConfig.from_dict(game_config)
        if dt <= 0 or dt > self.config.max_delta:
            raise ValueError(f"dt must be in (0, {self.config.max_delta}], got {dt}")
        self.dt = dt
        self.max_steps = max_steps
        self.k_enemies = k_enemies
        self.reward_config = dict(DEFAULT_REWARD, **(reward_config or {}))

        self.action_space = spaces.MultiDiscrete([len(MOVE_KEYS), 2, 8])

        # Player: pos(2) vel(2) health(1)
        # Each enemy: rel pos(2) hp(1) speed(1)
        obs_dim = 2 + 2 + 1 + self.k_enemies * 4
        self.observation_space = spaces.Box(low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32)

        self._aim_dirs = []
        for i in range(8):
            ang = (math.pi * 2) * (i / 8.0)
            self._aim_dirs.append((math.cos(ang), math.sin(ang)))

        self._now = 0.0
        self.session = Session(self.config, clock=lambda: self._now)
        self._held = set()
        self._step_count = 0
        self._totals = {"kills": 0, "hits": 0, "damage": 0.0, "shots": 0}
        self._window = None

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)
        self.session.world.rng.seed(int(self.np_random.integers(2 ** 31)))

        self._now = 0.0
        self._step_count = 0
        self._totals = {"kills": 0, "hits": 0, "damage": 0.0, "shots": 0}
        self.session.start(now=self._now)

        # start() drained the queue; keys held by the last episode are let go
        self.session.input.release_all()
        self._held = set()

        return self._get_obs(), self._get_info()

    def step(self, action):
        assert self.action_space.contains(np.asarray(action, dtype=np.int64)), f"Invalid action: {action}"
        move, shoot, aim = int(action[0]), int(action[1]), int(action[2])

        self._apply_action(move, shoot, aim)

        self._now += self.dt
        ran = self.session.scheduler.pump(self._now)
        events = self.session.last_events if ran else StepEvents()
        self._accumulate(events)

        reward = self._compute_reward(events)
        terminated = not self.session.running
        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        obs = self._get_obs()
        info = self._get_info()

        if self.render_mode == "human":
            self.render()

        return obs, reward, terminated, truncated, info

    # ----------------------------
    # Action -> input events
    # ----------------------------

    def _apply_action(self, move: int, shoot: int, aim: int):
        queue = self.session.input.queue
        wanted = set(MOVE_KEYS[move])
        for key in self._held - wanted:
            queue.key_up(key)
        for key in wanted - self._held:
            queue.key_down(key)
        self._held = wanted

        p = self.session.world.player
        dx, dy = self._aim_dirs[aim % 8]
        queue.pointer_move(p.x + dx * AIM_DISTANCE, p.y + dy * AIM_DISTANCE)
        if shoot:
            queue.fire()

    # ----------------------------
    # Observation / reward / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        world = self.session.world
        p = world.player
        w, h = world.width, world.height
        speed = max(1e-6, p.speed)

        obs_parts = [
            (p.x / w) * 2 - 1,
            (p.y / h) * 2 - 1,
            clamp(p.vx / speed, -1, 1),
            clamp(p.vy / speed, -1, 1),
            clamp(p.health / world.config.player_health, 0, 1) * 2 - 1,
        ]

        lo, hi = world.config.enemy_speed_range
        max_enemy_speed = hi + world.config.enemy_speed_bonus_cap

        enemies_sorted = sorted(world.enemies, key=lambda e: (e.x - p.x) ** 2 + (e.y - p.y) ** 2)
        for i in range(self.k_enemies):
            if i < len(enemies_sorted):
                e = enemies_sorted[i]
                obs_parts += [
                    clamp((e.x - p.x) / w, -1, 1),
                    clamp((e.y - p.y) / h, -1, 1),
                    clamp(e.hp / 5.0, 0, 1),
                    clamp(e.speed / max_enemy_speed, 0, 1),
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _accumulate(self, events: StepEvents):
        self._totals["kills"] += events.kills
        self._totals["hits"] += events.hits
        self._totals["damage"] += events.damage
        self._totals["shots"] += events.shots

    def _compute_reward(self, events: StepEvents) -> float:
        r = self.reward_config
        reward = 0.0
        reward += r["R_KILL"] * events.kills
        reward += r["R_HIT"] * events.hits
        reward -= r["R_DAMAGE"] * events.damage
        reward -= r["R_SHOT"] * events.shots
        reward -= r["R_TIME"]
        if events.defeated:
            reward -= r["R_DEATH"]
        return float(reward)

    def _get_info(self) -> Dict[str, Any]:
        world = self.session.world
        return {
            "health": max(0.0, world.player.health),
            "score": world.score,
            "enemies_killed": self._totals["kills"],
            "bullets_hit": self._totals["hits"],
            "damage_taken": self._totals["damage"],
            "shots_fired": self._totals["shots"],
            "num_enemies": len(world.enemies),
            "num_bullets": len(world.bullets),
            "spawn_interval": world.spawn_interval,
            "step": self._step_count,
        }

    # ----------------------------
    # Rendering
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            return rasterize(self.session.render())

        if self._window is None:
            from .window import ArenaWindow
            self._window = ArenaWindow(self.session, title="ArenaEnv")

        self._window.dispatch_events()
        self._window.on_draw()
        self._window.flip()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


def run_random_episode(render: bool = False, seed: int = 42, verbose: int = 1):
    """Run one episode with random actions"""
    env = ArenaEnv(render_mode="human" if render else None)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

    if verbose > 0:
        print(f"Random episode return: {total:.2f}  score: {info['score']}  steps: {info['step']}")

    env.close()
    return total, info


if __name__ == "__main__":
    run_random_episode(render=True)
