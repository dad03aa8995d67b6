"""Configuration helpers for game settings and generation limits."""

from .game import DEFAULT_INNINGS, GameConfig, get_game_config, iter_game_configs
from .limits import max_attempts, multi_attempt_factor

__all__ = [
    "DEFAULT_INNINGS",
    "GameConfig",
    "get_game_config",
    "iter_game_configs",
    "max_attempts",
    "multi_attempt_factor",
]
