"""
Game entity dataclasses
"""

from dataclasses import dataclass


@dataclass
class Player:
    """Player avatar entity"""
    x: float
    y: float
    radius: float = 18.0
    speed: float = 220.0  # px/s
    vx: float = 0.0
    vy: float = 0.0
    health: float = 100.0


@dataclass
class Enemy:
    """Enemy entity that chases the player"""
    x: float
    y: float
    radius: float = 18.0
    speed: float = 60.0  # px/s
    hp: int = 1


@dataclass
class Bullet:
    """Bullet projectile entity"""
    x: float
    y: float
    vx: float
    vy: float
    radius: float = 5.0
    life: float = 1.5  # seconds
