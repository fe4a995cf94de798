"""
Movement rules: where a token lands for a given dice value, and which
tokens may move at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from .board import Board
from .token import Token
from .types import Color, TokenState

EXIT_BASE_ROLL = 6


@dataclass(frozen=True, slots=True)
class Destination:
    track_position: int
    in_home_stretch: bool = False
    home_stretch_position: int = 0
    finished: bool = False
    left_base: bool = False
    entered_home_stretch: bool = False

    @property
    def on_track(self) -> bool:
        return not self.in_home_stretch and not self.finished


def _advance_in_stretch(board: Board, position: int, steps: int) -> Optional[Destination]:
    target = position + steps
    if target > board.home_stretch_length:
        return None
    return Destination(
        track_position=-1,
        in_home_stretch=True,
        home_stretch_position=target,
        finished=target == board.home_stretch_length,
    )


def resolve_move(
    board: Board, token: Token, color: Color, dice: int
) -> Optional[Destination]:
    """Landing spot for ``token`` moved ``dice`` squares, or None if illegal.

    Track moves are walked one square at a time so the wrap from 51 back
    to 0 needs no special casing; the first step that lands on the
    color's home entrance turns the token into its stretch (position 0)
    and the remaining steps are spent there.
    """
    state = token.state
    if state is TokenState.FINISHED:
        return None

    if state is TokenState.BASE:
        if dice != EXIT_BASE_ROLL:
            return None
        return Destination(track_position=board.start_square(color), left_base=True)

    if state is TokenState.HOME_STRETCH:
        return _advance_in_stretch(board, token.home_stretch_position, dice)

    entrance = board.home_entrance(color)
    square = token.track_position
    for step in range(1, dice + 1):
        square = board.step(square)
        if square == entrance:
            inside = _advance_in_stretch(board, 0, dice - step)
            if inside is None:
                return None
            return Destination(
                track_position=-1,
                in_home_stretch=True,
                home_stretch_position=inside.home_stretch_position,
                finished=inside.finished,
                entered_home_stretch=True,
            )
    return Destination(track_position=square)


def is_movable(board: Board, token: Token, color: Color, dice: int) -> bool:
    return resolve_move(board, token, color, dice) is not None


def movable_tokens(
    board: Board, tokens: Sequence[Token], color: Color, dice: int
) -> list[int]:
    """Indexes of the tokens that may move ``dice`` squares, in token order."""
    return [t.index for t in tokens if is_movable(board, t, color, dice)]
