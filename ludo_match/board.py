from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from .config import Config, config
from .types import Color


@dataclass(frozen=True, slots=True)
class Board:
    """Static board topology. Holds no token state."""

    track_length: int
    home_stretch_length: int
    tokens_per_player: int
    start_squares: Mapping[Color, int]
    home_entrances: Mapping[Color, int]
    safe_squares: frozenset[int]
    base_distance: int = field(default=0)

    @classmethod
    def from_config(cls, cfg: Config = config) -> "Board":
        return cls(
            track_length=cfg.TRACK_LENGTH,
            home_stretch_length=cfg.HOME_STRETCH_LENGTH,
            tokens_per_player=cfg.TOKENS_PER_PLAYER,
            start_squares=MappingProxyType(
                {color: cfg.START_SQUARES[color] for color in Color}
            ),
            home_entrances=MappingProxyType(
                {color: cfg.HOME_ENTRANCES[color] for color in Color}
            ),
            safe_squares=frozenset(cfg.SAFE_SQUARES),
            base_distance=cfg.BASE_DISTANCE,
        )

    def start_square(self, color: Color) -> int:
        return self.start_squares[color]

    def home_entrance(self, color: Color) -> int:
        return self.home_entrances[color]

    def is_safe(self, square: int) -> bool:
        return square in self.safe_squares

    def step(self, square: int, steps: int = 1) -> int:
        return (square + steps) % self.track_length

    def squares_to_entrance(self, color: Color, square: int) -> int:
        """Forward steps from ``square`` until the color turns home."""
        return (self.home_entrance(color) - square) % self.track_length


STANDARD_BOARD = Board.from_config()
