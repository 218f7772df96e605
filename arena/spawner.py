"""
Enemy spawning: one enemy per call, born just outside a random viewport edge.
Speed and hit points scale with score.
"""

from __future__ import annotations

import math
from typing import Optional

from .entities import Enemy
from .utils import rand_range
from .world import World

EDGES = ("top", "right", "bottom", "left")


def edge_position(world: World, edge: str):
    """Random point along one edge, pushed spawn_margin outside the viewport"""
    rng = world.rng
    m = world.config.spawn_margin
    w, h = world.width, world.height

    if edge == "top":
        return rand_range(rng, -m, w + m), -m
    if edge == "right":
        return w + m, rand_range(rng, -m, h + m)
    if edge == "bottom":
        return rand_range(rng, -m, w + m), h + m
    if edge == "left":
        return -m, rand_range(rng, -m, h + m)
    raise ValueError(f"Unknown edge: {edge}")


def enemy_speed(world: World, score: int) -> float:
    cfg = world.config
    bonus = min(score * cfg.enemy_speed_per_score, cfg.enemy_speed_bonus_cap)
    return rand_range(world.rng, *cfg.enemy_speed_range) + bonus


def enemy_hp(world: World, score: int) -> int:
    cfg = world.config
    hp = math.ceil(rand_range(world.rng, *cfg.enemy_hp_range) + score * cfg.enemy_hp_per_score)
    return max(1, hp)


def spawn_one(world: World, score: Optional[int] = None) -> Enemy:
    """Append exactly one enemy to the world and return it"""
    if score is None:
        score = world.score

    edge = world.rng.choice(EDGES)
    x, y = edge_position(world, edge)

    enemy = Enemy(
        x=x,
        y=y,
        radius=rand_range(world.rng, *world.config.enemy_radius_range),
        speed=enemy_speed(world, score),
        hp=enemy_hp(world, score),
    )
    world.enemies.append(enemy)
    return enemy
