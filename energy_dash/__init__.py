from .config import CHARACTERS, COLLECTIBLE_TYPES, OBSTACLE_TYPES, GameConfig
from .game import EnergyDash
from .scores import ScoreStore
from .state import GameState

__all__ = [
    "CHARACTERS",
    "COLLECTIBLE_TYPES",
    "OBSTACLE_TYPES",
    "EnergyDash",
    "GameConfig",
    "GameState",
    "ScoreStore",
]
