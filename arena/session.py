"""
Game session controller
-----------------------
State machine  IDLE -> RUNNING -> ENDED -> RUNNING ...

- start()/restart() reset the world and request the first frame
- every frame: drain input, step the simulation, publish the HUD, render,
  and request the next frame only while still RUNNING
- the only way out of RUNNING is the player's health reaching zero

Frames are paced from outside: whoever owns the clock (the arcade window, the
gym env, a test) calls scheduler.pump(now).
"""

from __future__ import annotations

import math
import time
from enum import Enum
from typing import Callable, Optional

from .config import GameConfig
from .input_state import InputState
from .renderer import Frame, build_frame
from .simulation import StepEvents, advance, apply_shots, clamp_delta
from .world import World


class SessionState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    ENDED = "ended"


def score_text(score: int) -> str:
    return f"Score: {score}"


def health_text(health: float) -> str:
    return f"Health: {max(0, math.floor(health))}"


class HudSink:
    """Receives score/health text and the game-over notification.

    The base class ignores everything; the arcade window and tests subclass it.
    """

    def update(self, score: str, health: str):
        pass

    def game_over(self, final_score: int):
        pass


class TextHud(HudSink):
    """Keeps the latest HUD strings for a front-end to draw"""

    def __init__(self, player_health: float = 100.0):
        self.score = score_text(0)
        self.health = health_text(player_health)
        self.final_score: Optional[int] = None

    def update(self, score: str, health: str):
        self.score = score
        self.health = health

    def game_over(self, final_score: int):
        self.final_score = final_score


class FrameScheduler:
    """Holds the single tick callback and a request-next-frame flag"""

    def __init__(self, tick: Callable[[float], None]):
        self._tick = tick
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    def request_frame(self):
        self._pending = True

    def cancel(self):
        self._pending = False

    def pump(self, now: float) -> bool:
        """Run the requested frame, if any. Returns True when a frame ran."""
        if not self._pending:
            return False
        self._pending = False
        self._tick(now)
        return True


class Session:
    """Owns one World plus its input state, HUD sink and frame scheduler"""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        hud: Optional[HudSink] = None,
        clock: Callable[[], float] = time.perf_counter,
        verbose: int = 0,
    ):
        self.config = config or GameConfig()
        self.world = World.create(self.config, seed=seed)
        self.input = InputState()
        self.hud = hud or HudSink()
        self.clock = clock
        self.verbose = verbose

        self.state = SessionState.IDLE
        self.last_time = 0.0
        self.frame: Optional[Frame] = None
        self.last_events = StepEvents()
        self.games_played = 0

        self.scheduler = FrameScheduler(self._tick)

    @property
    def running(self) -> bool:
        return self.state is SessionState.RUNNING

    # ----------------------------
    # Transitions
    # ----------------------------

    def start(self, now: Optional[float] = None):
        """IDLE/ENDED -> RUNNING with a fresh world"""
        # Input that arrived while not running must not fire shots
        self.input.snapshot()

        self.world.reset()
        self.state = SessionState.RUNNING
        self.last_events = StepEvents()
        self.games_played += 1
        self._publish_hud()
        self.frame = self.render()

        self.last_time = self.clock() if now is None else now
        self.scheduler.request_frame()

        if self.verbose > 0:
            print(f"[Session] Game {self.games_played} started")

    def restart(self, now: Optional[float] = None):
        self.start(now)

    def _end(self):
        self.state = SessionState.ENDED
        self.scheduler.cancel()
        self.hud.game_over(self.world.score)

        if self.verbose > 0:
            print(f"[Session] Game over - final score {self.world.score}")

    # ----------------------------
    # Frame loop
    # ----------------------------

    def _tick(self, now: float):
        if not self.running:
            return

        delta = clamp_delta(now - self.last_time, self.config.max_delta)
        self.last_time = now

        self.step(delta)
        self.frame = self.render()

        if self.running:
            self.scheduler.request_frame()

    def step(self, delta: float) -> StepEvents:
        """Consume one input snapshot and advance the world by delta seconds"""
        if not self.running:
            return StepEvents()

        snapshot = self.input.snapshot()
        events = apply_shots(self.world, snapshot)
        advance(self.world, snapshot, clamp_delta(delta, self.config.max_delta), events)
        self.last_events = events

        self._publish_hud()
        if events.defeated:
            self._end()
        return events

    def render(self) -> Frame:
        return build_frame(self.world, (self.input.pointer_x, self.input.pointer_y))

    def _publish_hud(self):
        self.hud.update(score_text(self.world.score), health_text(self.world.player.health))
