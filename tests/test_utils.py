import math
import random

import pytest

from arena.utils import clamp, distance, normalize, circle_collide, heading, rand_range, finite_or_zero


def test_clamp():
    assert clamp(5, 0, 10) == 5
    assert clamp(-1, 0, 10) == 0
    assert clamp(11, 0, 10) == 10


def test_distance():
    assert distance(0, 0, 3, 4) == 5.0


def test_normalize_unit_length():
    x, y = normalize(3.0, 4.0)
    assert x == pytest.approx(0.6)
    assert y == pytest.approx(0.8)


def test_normalize_zero_vector_is_zero():
    assert normalize(0.0, 0.0) == (0.0, 0.0)


def test_normalize_non_finite_is_zero():
    assert normalize(float("inf"), 1.0) == (0.0, 0.0)


def test_circle_collide_touching_is_not_a_collision():
    # distance 5 == 2 + 3
    assert not circle_collide(0, 0, 2, 3, 4, 3)


def test_circle_collide_overlap():
    assert circle_collide(0, 0, 2, 3, 4, 3.01)
    assert circle_collide(3, 4, 3.01, 0, 0, 2)


def test_heading():
    assert heading(0, 0, 1, 0) == 0.0
    assert heading(0, 0, 0, 1) == pytest.approx(math.pi / 2)
    # same point still gives a valid angle
    assert heading(5, 5, 5, 5) == 0.0


def test_rand_range_bounds():
    rng = random.Random(0)
    for _ in range(200):
        v = rand_range(rng, 14, 22)
        assert 14 <= v < 22


def test_finite_or_zero():
    assert finite_or_zero(1.5) == 1.5
    assert finite_or_zero(float("nan")) == 0.0
    assert finite_or_zero(float("-inf")) == 0.0
