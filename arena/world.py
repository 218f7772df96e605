"""
Session context: everything one play session owns.
Nothing here is module-global, so several sessions can coexist.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import List, Optional

from .config import GameConfig
from .entities import Player, Bullet, Enemy


@dataclass
class World:
    """Player, entity collections, score and spawn timers for one session"""
    config: GameConfig
    player: Player
    bullets: List[Bullet] = field(default_factory=list)
    enemies: List[Enemy] = field(default_factory=list)
    score: int = 0
    spawn_timer: float = 0.0
    spawn_interval: float = 1000.0
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def create(cls, config: Optional[GameConfig] = None, seed: Optional[int] = None) -> "World":
        config = config or GameConfig()
        world = cls(config=config, player=Player(x=0.0, y=0.0), rng=random.Random(seed))
        world.reset()
        return world

    @property
    def width(self) -> int:
        return self.config.width

    @property
    def height(self) -> int:
        return self.config.height

    def reset(self, seed: Optional[int] = None):
        """Clear collections and reinitialize the player, score and timers"""
        if seed is not None:
            self.rng.seed(seed)

        cfg = self.config
        self.bullets.clear()
        self.enemies.clear()
        self.player = Player(
            x=cfg.width / 2,
            y=cfg.height / 2,
            radius=cfg.player_radius,
            speed=cfg.player_speed,
            health=cfg.player_health,
        )
        self.score = 0
        self.spawn_timer = 0.0
        self.spawn_interval = cfg.spawn_interval
