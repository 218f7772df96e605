import pytest

from arena.config import GameConfig
from arena.entities import Enemy, Bullet
from arena.session import HudSink, Session
from arena.world import World


class RecordingHud(HudSink):
    """HUD sink that remembers everything it was told"""

    def __init__(self):
        self.updates = []
        self.final_scores = []

    def update(self, score, health):
        self.updates.append((score, health))

    def game_over(self, final_score):
        self.final_scores.append(final_score)

    @property
    def last(self):
        return self.updates[-1]


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def world(config):
    return World.create(config, seed=1234)


@pytest.fixture
def hud():
    return RecordingHud()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def session(config, hud, clock):
    return Session(config, seed=99, hud=hud, clock=clock)


def make_enemy(x, y, radius=16.0, speed=0.0, hp=1):
    return Enemy(x=x, y=y, radius=radius, speed=speed, hp=hp)


def make_bullet(x, y, vx=0.0, vy=0.0, radius=5.0, life=1.5):
    return Bullet(x=x, y=y, vx=vx, vy=vy, radius=radius, life=life)
