"""
Game configuration for the arena shooter
GameConfig holds every tunable and its default; GAME_CONFIG is the same set as a plain dict.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GameConfig:
    """Immutable game tunables (world units are pixels, times are seconds unless noted)"""

    # Surface
    width: int = 800
    height: int = 600
    max_delta: float = 0.05  # 50 ms max single step

    # Player
    player_radius: float = 18.0
    player_speed: float = 220.0  # px/s
    player_health: float = 100.0
    contact_damage: float = 12.0
    knockback: float = 10.0

    # Bullets
    bullet_speed: float = 1500.0
    bullet_radius: float = 5.0
    bullet_lifetime: float = 1.5
    bullet_muzzle_offset: float = 8.0  # spawn distance beyond the player radius
    offscreen_margin: float = 50.0

    # Enemies
    enemy_radius_range: tuple = (14.0, 22.0)
    enemy_speed_range: tuple = (40.0, 85.0)
    enemy_speed_per_score: float = 0.4
    enemy_speed_bonus_cap: float = 60.0
    enemy_hp_range: tuple = (1.0, 3.0)
    enemy_hp_per_score: float = 0.02
    spawn_margin: float = 20.0
    kill_reward: int = 10

    # Spawn timer (interval units are "ticks" of spawn_rate per second)
    spawn_interval: float = 1000.0
    spawn_interval_floor: float = 350.0
    spawn_interval_step: float = 15.0
    spawn_rate: float = 500.0
    spawn_timer_reset: float = 1.0

    def __post_init__(self):
        self.validate()

    @classmethod
    def from_dict(cls, overrides: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """Build a config from GAME_CONFIG updated with overrides"""
        data = dict(GAME_CONFIG)
        for key, value in (overrides or {}).items():
            if key not in data:
                raise ValueError(f"Unknown game config key: {key}")
            data[key] = value
        return cls(**data)

    def validate(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Surface size must be positive, got {self.width}x{self.height}")
        if self.max_delta <= 0:
            raise ValueError(f"max_delta must be positive, got {self.max_delta}")
        if self.spawn_interval_floor > self.spawn_interval:
            raise ValueError("spawn_interval_floor cannot exceed spawn_interval")
        for name in ("enemy_radius_range", "enemy_speed_range", "enemy_hp_range"):
            lo, hi = getattr(self, name)
            if lo > hi:
                raise ValueError(f"{name} must be (low, high), got {(lo, hi)}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# Default tunables as a dict, for config files and overrides
GAME_CONFIG = GameConfig().to_dict()
