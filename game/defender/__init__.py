"""Space Defender - arcade shooter engine, renderer and RL environment"""

from .engine import DefenderEngine, GameMode, InputAction, Snapshot
from .env import DefenderEnv, run_random_episode

__all__ = ['DefenderEngine', 'GameMode', 'InputAction', 'Snapshot', 'DefenderEnv', 'run_random_episode']
