"""Arena - top-down arcade shooter (core game, renderer and gymnasium env)"""

from .config import GAME_CONFIG, GameConfig
from .world import World
from .session import Session, SessionState, HudSink, TextHud
from .env import ArenaEnv, run_random_episode

__all__ = [
    'GAME_CONFIG',
    'GameConfig',
    'World',
    'Session',
    'SessionState',
    'HudSink',
    'TextHud',
    'ArenaEnv',
    'run_random_episode',
]
