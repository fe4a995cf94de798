from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional, Protocol, Sequence

import numpy as np

from .board import Board
from .token import Token
from .types import Color, TokenState


def distance_to_home(board: Board, token: Token, color: Color) -> int:
    state = token.state
    if state is TokenState.FINISHED:
        return 0
    if state is TokenState.HOME_STRETCH:
        return board.home_stretch_length - token.home_stretch_position
    if state is TokenState.BASE:
        return board.base_distance
    return board.squares_to_entrance(color, token.track_position) + board.home_stretch_length


class Strategy(Protocol):
    name: ClassVar[str]

    def select_token(
        self,
        board: Board,
        tokens: Sequence[Token],
        color: Color,
        movable: Sequence[int],
    ) -> Optional[int]:
        ...


@dataclass(slots=True)
class ClosestToHomeStrategy:
    """Moves the legal token with the shortest way left; lowest index on ties.

    No randomness, so a fixed dice sequence always replays the same game.
    """

    name: ClassVar[str] = "closest_to_home"

    def select_token(
        self,
        board: Board,
        tokens: Sequence[Token],
        color: Color,
        movable: Sequence[int],
    ) -> Optional[int]:
        if not movable:
            return None
        distances = np.full(len(tokens), np.inf)
        for idx in movable:
            distances[idx] = distance_to_home(board, tokens[idx], color)
        # argmin returns the first minimum, i.e. the lowest token index
        return int(np.argmin(distances))


def choose_token(
    board: Board, tokens: Sequence[Token], color: Color, movable: Sequence[int]
) -> Optional[int]:
    return ClosestToHomeStrategy().select_token(board, tokens, color, movable)
