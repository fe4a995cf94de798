from __future__ import annotations

from typing import Iterable, Optional

from .board import Board
from .player import Player
from .types import Capture, Color, TokenState


def find_captures(
    board: Board,
    players: Iterable[Player],
    mover_color: Color,
    square: int,
    *,
    exempt_color: Optional[Color] = None,
) -> list[Capture]:
    """Opposing tokens knocked back to base by a token landing on ``square``.

    Only tokens sitting on the track are exposed; nothing is captured on a
    safe square. Tokens of ``mover_color`` and ``exempt_color`` (the
    teammate in team mode) are never captured. Every victim on the square
    is returned. Nothing is mutated here.
    """
    if board.is_safe(square):
        return []
    captures: list[Capture] = []
    for player in players:
        if player.color == mover_color or player.color == exempt_color:
            continue
        for token in player.tokens:
            if token.state is TokenState.TRACK and token.track_position == square:
                captures.append(
                    Capture(
                        player_id=player.id,
                        color=player.color,
                        token_index=token.index,
                        square=square,
                    )
                )
    return captures
