import copy
import math

import pytest

from arena.renderer import (
    BACKGROUND,
    BARREL_C,
    BULLET_C,
    ENEMY_HURT_C,
    ENEMY_STRONG_C,
    ENEMY_WEAK_C,
    EYE_C,
    GRID_C,
    PLAYER_C,
    Circle,
    Line,
    Polygon,
    build_frame,
    enemy_color,
    enemy_shapes,
    grid_lines,
    player_shapes,
)

from conftest import make_bullet, make_enemy


def test_enemy_color_thresholds():
    assert enemy_color(5) == ENEMY_STRONG_C
    assert enemy_color(3) == ENEMY_STRONG_C
    assert enemy_color(2) == ENEMY_HURT_C
    assert enemy_color(1) == ENEMY_WEAK_C
    assert enemy_color(0) == ENEMY_WEAK_C


def test_grid_is_static():
    lines = grid_lines(800, 600)
    assert lines is grid_lines(800, 600)
    assert len(lines) == 800 // 40 + 600 // 40
    assert all(isinstance(l, Line) and l.color == GRID_C for l in lines)


def test_frame_paint_order(world):
    world.bullets.append(make_bullet(50, 50))
    world.enemies.append(make_enemy(200, 200, hp=2))
    frame = build_frame(world, (500, 300))

    assert (frame.width, frame.height, frame.background) == (800, 600, BACKGROUND)
    n_grid = len(grid_lines(800, 600))
    assert frame.shapes[:n_grid] == grid_lines(800, 600)

    body, barrel, bullet, enemy_body, eye = frame.shapes[n_grid:]
    assert body.fill == PLAYER_C
    assert barrel.fill == BARREL_C
    assert bullet.fill == BULLET_C
    assert enemy_body.fill == ENEMY_HURT_C
    assert eye.fill == EYE_C


def test_build_frame_does_not_mutate(world):
    world.enemies.append(make_enemy(200, 200, speed=50.0, hp=3))
    world.bullets.append(make_bullet(10, 10, vx=5))
    before = copy.deepcopy((world.player, world.enemies, world.bullets, world.score))
    build_frame(world, (0, 0))
    assert before == (world.player, world.enemies, world.bullets, world.score)


def test_barrel_points_at_pointer(world):
    p = world.player
    for pointer in [(p.x + 100, p.y), (p.x, p.y - 100), (p.x - 50, p.y + 50)]:
        _, barrel = player_shapes(p, pointer)
        assert isinstance(barrel, Polygon)
        cx = sum(x for x, _ in barrel.points) / 4
        cy = sum(y for _, y in barrel.points) / 4
        aim = math.atan2(pointer[1] - p.y, pointer[0] - p.x)
        assert math.atan2(cy - p.y, cx - p.x) == pytest.approx(aim)


def test_barrel_extends_beyond_body(world):
    p = world.player
    _, barrel = player_shapes(p, (p.x + 100, p.y))
    assert max(x for x, _ in barrel.points) == p.x + p.radius + 14


def test_enemy_eye_looks_at_player(world):
    p = world.player
    enemy = make_enemy(p.x - 100, p.y, radius=20, hp=3)
    body, eye = enemy_shapes(enemy, p)
    assert isinstance(body, Circle) and isinstance(eye, Circle)
    assert eye.x == enemy.x + 10
    assert eye.y == enemy.y
    assert eye.radius == pytest.approx(3.6)


def test_small_enemy_eye_has_minimum_size(world):
    _, eye = enemy_shapes(make_enemy(0, 0, radius=5), world.player)
    assert eye.radius == 2.0
