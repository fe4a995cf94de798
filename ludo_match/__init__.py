"""
Ludo match engine.
Rules, turn flow, team play, inactivity handling and auto-play for one room.
"""

from .autoplay import ClosestToHomeStrategy, Strategy, choose_token, distance_to_home
from .board import STANDARD_BOARD, Board
from .capture import find_captures
from .config import Config, config
from .match import Match
from .movement import Destination, movable_tokens, resolve_move
from .player import Player
from .snapshot import MatchSnapshot, PlayerSnapshot
from .teams import assign_teams, team_victory, teammate_color
from .token import Token
from .types import (
    AutoTurnResult,
    Capture,
    Color,
    MoveResult,
    RejectReason,
    Rejected,
    RollResult,
    StartResult,
    Team,
    TokenSnapshot,
    TokenState,
    TurnPhase,
)

__all__ = [
    "AutoTurnResult",
    "Board",
    "Capture",
    "ClosestToHomeStrategy",
    "Color",
    "Config",
    "Destination",
    "Match",
    "MatchSnapshot",
    "MoveResult",
    "Player",
    "PlayerSnapshot",
    "RejectReason",
    "Rejected",
    "RollResult",
    "STANDARD_BOARD",
    "StartResult",
    "Strategy",
    "Team",
    "Token",
    "TokenSnapshot",
    "TokenState",
    "TurnPhase",
    "assign_teams",
    "choose_token",
    "config",
    "distance_to_home",
    "find_captures",
    "movable_tokens",
    "resolve_move",
    "team_victory",
    "teammate_color",
]
