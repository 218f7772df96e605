"""
Renderer
--------
Turns the current world into an ordered list of draw primitives. Nothing here
touches a window: the arcade front-end (window.py) and the numpy rasterizer
(raster.py) both paint the same Frame, so the picture is identical on screen
and in rgb_array observations.

Coordinates are world coordinates (origin top-left, y down).
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple, Union

from .entities import Player, Enemy, Bullet
from .utils import heading
from .world import World

Color = Tuple[int, int, int, int]  # RGBA, 0-255

# Colors
BACKGROUND: Color = (18, 18, 22, 255)
GRID_C: Color = (255, 255, 255, 15)  # ~6% white
PLAYER_C: Color = (102, 102, 255, 255)
BARREL_C: Color = (17, 17, 34, 255)
BULLET_C: Color = (255, 255, 255, 119)
BULLET_OUTLINE_C: Color = (255, 255, 255, 34)
ENEMY_STRONG_C: Color = (255, 107, 107, 255)  # hp >= 3
ENEMY_HURT_C: Color = (255, 159, 67, 255)  # hp == 2
ENEMY_WEAK_C: Color = (255, 209, 102, 255)  # hp <= 1
ENEMY_OUTLINE_C: Color = (0, 0, 0, 51)
EYE_C: Color = (17, 17, 17, 255)

GRID_GAP = 40


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    fill: Optional[Color] = None
    outline: Optional[Color] = None


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    color: Color
    width: float = 1.0


@dataclass(frozen=True)
class Polygon:
    points: Tuple[Tuple[float, float], ...]
    fill: Color


Shape = Union[Circle, Line, Polygon]


@dataclass(frozen=True)
class Frame:
    """One fully repainted frame"""
    width: int
    height: int
    background: Color
    shapes: Tuple[Shape, ...]


def enemy_color(hp: int) -> Color:
    """Color-code an enemy by remaining hit points"""
    if hp >= 3:
        return ENEMY_STRONG_C
    if hp == 2:
        return ENEMY_HURT_C
    return ENEMY_WEAK_C


@lru_cache(maxsize=8)
def grid_lines(width: int, height: int, gap: int = GRID_GAP) -> Tuple[Line, ...]:
    """Static background grid; depends only on the surface size"""
    lines = []
    for x in range(0, width, gap):
        lines.append(Line(x, 0, x, height, GRID_C))
    for y in range(0, height, gap):
        lines.append(Line(0, y, width, y, GRID_C))
    return tuple(lines)


def _rotate(points, angle: float, ox: float, oy: float):
    c, s = math.cos(angle), math.sin(angle)
    return tuple((ox + px * c - py * s, oy + px * s + py * c) for px, py in points)


def player_shapes(player: Player, pointer: Tuple[float, float]) -> Tuple[Shape, ...]:
    """Body disc plus a barrel rotated toward the pointer"""
    angle = heading(player.x, player.y, pointer[0], pointer[1])
    r = player.radius

    # Barrel: 18x10 rectangle starting just inside the rim
    barrel = ((r - 4, -5), (r + 14, -5), (r + 14, 5), (r - 4, 5))

    return (
        Circle(player.x, player.y, r, fill=PLAYER_C),
        Polygon(_rotate(barrel, angle, player.x, player.y), BARREL_C),
    )


def bullet_shape(bullet: Bullet) -> Circle:
    return Circle(bullet.x, bullet.y, bullet.radius, fill=BULLET_C, outline=BULLET_OUTLINE_C)


def enemy_shapes(enemy: Enemy, player: Player) -> Tuple[Shape, ...]:
    """Body colored by hp plus a small eye looking at the player (cosmetic)"""
    angle = heading(enemy.x, enemy.y, player.x, player.y)
    eye_x = enemy.x + math.cos(angle) * enemy.radius * 0.5
    eye_y = enemy.y + math.sin(angle) * enemy.radius * 0.5

    return (
        Circle(enemy.x, enemy.y, enemy.radius, fill=enemy_color(enemy.hp), outline=ENEMY_OUTLINE_C),
        Circle(eye_x, eye_y, max(2.0, enemy.radius * 0.18), fill=EYE_C),
    )


def build_frame(world: World, pointer: Tuple[float, float]) -> Frame:
    """Describe one frame: grid, player, bullets, enemies (in paint order)"""
    shapes = list(grid_lines(world.width, world.height))
    shapes.extend(player_shapes(world.player, pointer))
    shapes.extend(bullet_shape(b) for b in world.bullets)
    for e in world.enemies:
        shapes.extend(enemy_shapes(e, world.player))

    return Frame(world.width, world.height, BACKGROUND, tuple(shapes))
