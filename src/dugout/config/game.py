"""Game configuration for supported game lengths."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Union


@dataclass(frozen=True)
class GameConfig:
    innings: int
    pitchers_per_game: int
    catchers_per_game: int

    def inning_numbers(self) -> range:
        return range(1, self.innings + 1)


_GAME_CONFIGS: Dict[int, GameConfig] = {
    5: GameConfig(innings=5, pitchers_per_game=2, catchers_per_game=2),
    6: GameConfig(innings=6, pitchers_per_game=3, catchers_per_game=3),
}

DEFAULT_INNINGS = 6


def iter_game_configs() -> Iterable[GameConfig]:
    """Return an iterator of all supported game configurations."""

    return _GAME_CONFIGS.values()


def get_game_config(innings: Union[int, str] = DEFAULT_INNINGS) -> GameConfig:
    """Fetch the configuration for a game length, raising KeyError if unsupported."""

    if isinstance(innings, str):
        if not innings.strip().isdigit():
            raise ValueError(f"innings must be a whole number, got {innings!r}")
        innings = int(innings)
    if innings not in _GAME_CONFIGS:
        raise KeyError(f"No game configuration for innings={innings!r}")
    return _GAME_CONFIGS[innings]

