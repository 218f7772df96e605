"""
Simulation step
---------------
advance() moves the player, bullets and enemies, resolves collisions, updates
score/health and runs the spawn timer. The order of the phases matters:

    move player -> clamp -> bullets -> enemies (+ contact damage)
    -> bullet hits -> spawn timer

It only mutates the World it is given and is deterministic for a given world,
input snapshot, delta and random generator state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from .entities import Bullet
from .input_state import InputSnapshot
from .spawner import spawn_one
from .utils import clamp, normalize, circle_collide, heading, finite_or_zero
from .world import World


@dataclass
class StepEvents:
    """What happened during one step (used by the session and the env reward)"""
    shots: int = 0
    hits: int = 0
    kills: int = 0
    damage: float = 0.0
    score_gained: int = 0
    spawned: int = 0
    defeated: bool = False


def clamp_delta(delta: float, max_delta: float) -> float:
    """Clamp a frame delta (seconds) into [0, max_delta]; NaN/inf become 0"""
    delta = finite_or_zero(delta)
    return clamp(delta, 0.0, max_delta)


# ----------------------------
# Shooting
# ----------------------------

def shoot(world: World, target_x: float, target_y: float) -> Bullet:
    """Fire one bullet from the player's muzzle toward a target point"""
    cfg = world.config
    p = world.player
    angle = heading(p.x, p.y, target_x, target_y)
    dx, dy = math.cos(angle), math.sin(angle)

    # Spawn bullet slightly in front of the player
    offset = p.radius + cfg.bullet_muzzle_offset
    bullet = Bullet(
        x=p.x + dx * offset,
        y=p.y + dy * offset,
        vx=dx * cfg.bullet_speed,
        vy=dy * cfg.bullet_speed,
        radius=cfg.bullet_radius,
        life=cfg.bullet_lifetime,
    )
    world.bullets.append(bullet)
    return bullet


def apply_shots(world: World, snapshot: InputSnapshot, events: StepEvents = None) -> StepEvents:
    """Fire every shot requested in the snapshot, in request order"""
    events = events or StepEvents()
    for tx, ty in snapshot.shots:
        shoot(world, tx, ty)
        events.shots += 1
    return events


# ----------------------------
# Step phases
# ----------------------------

def _apply_move(world: World, snapshot: InputSnapshot, delta: float):
    p = world.player
    mx, my = snapshot.axis()

    # normalize diagonal
    nx, ny = normalize(mx, my)
    p.vx = nx * p.speed
    p.vy = ny * p.speed
    p.x += p.vx * delta
    p.y += p.vy * delta

    _clamp_player(world)


def _clamp_player(world: World):
    p = world.player
    r = p.radius
    p.x = clamp(p.x, r, world.width - r)
    p.y = clamp(p.y, r, world.height - r)


def _update_bullets(world: World, delta: float):
    margin = world.config.offscreen_margin
    w, h = world.width, world.height

    for i in range(len(world.bullets) - 1, -1, -1):
        b = world.bullets[i]
        b.x += b.vx * delta
        b.y += b.vy * delta
        b.life -= delta

        if b.life <= 0 or b.x < -margin or b.y < -margin or b.x > w + margin or b.y > h + margin:
            del world.bullets[i]


def _update_enemies(world: World, delta: float, events: StepEvents) -> bool:
    """Chase the player; contact damages the player and consumes the enemy.

    Returns True when the player was defeated, in which case the rest of the
    enemies are left untouched for this step.
    """
    cfg = world.config
    p = world.player

    for i in range(len(world.enemies) - 1, -1, -1):
        e = world.enemies[i]
        angle = heading(e.x, e.y, p.x, p.y)
        e.x += math.cos(angle) * e.speed * delta
        e.y += math.sin(angle) * e.speed * delta

        if not circle_collide(e.x, e.y, e.radius, p.x, p.y, p.radius):
            continue

        p.health -= cfg.contact_damage
        events.damage += cfg.contact_damage

        # Knockback along the collision normal to resolve the overlap
        nx, ny = normalize(p.x - e.x, p.y - e.y)
        p.x += nx * cfg.knockback
        p.y += ny * cfg.knockback
        _clamp_player(world)

        del world.enemies[i]
        if p.health <= 0:
            events.defeated = True
            return True

    return False


def _handle_bullet_hits(world: World, events: StepEvents):
    cfg = world.config

    for i in range(len(world.enemies) - 1, -1, -1):
        e = world.enemies[i]
        for j in range(len(world.bullets) - 1, -1, -1):
            b = world.bullets[j]
            if not circle_collide(e.x, e.y, e.radius, b.x, b.y, b.radius):
                continue

            e.hp -= 1
            del world.bullets[j]
            events.hits += 1

            if e.hp <= 0:
                e.hp = 0
                world.score += cfg.kill_reward
                events.score_gained += cfg.kill_reward
                events.kills += 1
                del world.enemies[i]
                break


def _spawn_logic(world: World, delta: float, events: StepEvents):
    cfg = world.config
    if delta <= 0:
        return
    world.spawn_timer += delta * cfg.spawn_rate
    if world.spawn_timer >= world.spawn_interval:
        world.spawn_timer = cfg.spawn_timer_reset
        spawn_one(world, world.score)
        events.spawned += 1
        # Ramp up difficulty, never below the floor
        world.spawn_interval = max(cfg.spawn_interval_floor, world.spawn_interval - cfg.spawn_interval_step)


def advance(world: World, snapshot: InputSnapshot, delta: float, events: StepEvents = None) -> StepEvents:
    """Advance the world by delta seconds (already clamped by the caller)"""
    events = events or StepEvents()
    delta = finite_or_zero(delta)

    _apply_move(world, snapshot, delta)
    _update_bullets(world, delta)

    if _update_enemies(world, delta, events):
        return events

    _handle_bullet_hits(world, events)
    _spawn_logic(world, delta, events)
    return events
