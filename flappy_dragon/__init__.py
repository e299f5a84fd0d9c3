from .game import FlappyDragon, GameMode, Obstacle, Player
from .surface import CellSurface, Key
from .env import GameEnv
from .policy import policy

__version__ = "0.1.0"

__all__ = [
    "FlappyDragon",
    "GameMode",
    "Obstacle",
    "Player",
    "CellSurface",
    "Key",
    "GameEnv",
    "policy",
]
