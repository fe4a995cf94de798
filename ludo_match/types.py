from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional, Tuple


class Color(IntEnum):
    RED = 0
    GREEN = 1
    YELLOW = 2
    BLUE = 3

    @property
    def label(self) -> str:
        return self.name.lower()


# Join order: the second seat is diagonal to the first
SEATING_ORDER: Tuple[Color, ...] = (Color.RED, Color.YELLOW, Color.BLUE, Color.GREEN)


class TokenState(Enum):
    BASE = "base"
    TRACK = "track"
    HOME_STRETCH = "home_stretch"
    FINISHED = "finished"


class TurnPhase(Enum):
    LOBBY = "lobby"
    AWAITING_ROLL = "awaiting_roll"
    AWAITING_MOVE = "awaiting_move"
    OVER = "over"


class RejectReason(str, Enum):
    GAME_FULL = "game_full"
    ALREADY_STARTED = "already_started"
    NOT_ENOUGH_PLAYERS = "not_enough_players"
    NOT_IN_PROGRESS = "not_in_progress"
    UNKNOWN_PLAYER = "unknown_player"
    DUPLICATE_PLAYER = "duplicate_player"
    NOT_YOUR_TURN = "not_your_turn"
    ALREADY_ROLLED = "already_rolled"
    ROLL_FIRST = "roll_first"
    ILLEGAL_MOVE = "illegal_move"
    INVALID_DICE = "invalid_dice"
    NOT_A_ROBOT = "not_a_robot"


@dataclass(frozen=True, slots=True)
class Rejected:
    """A request refused before any state was touched."""

    reason: RejectReason
    message: str = ""

    @property
    def ok(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Team:
    name: str
    colors: Tuple[Color, ...]

    def __contains__(self, color: object) -> bool:
        return color in self.colors


@dataclass(frozen=True, slots=True)
class TokenSnapshot:
    index: int
    color: Color
    track_position: int
    in_home_stretch: bool
    home_stretch_position: int
    finished: bool

    @property
    def state(self) -> TokenState:
        if self.finished:
            return TokenState.FINISHED
        if self.in_home_stretch:
            return TokenState.HOME_STRETCH
        if self.track_position < 0:
            return TokenState.BASE
        return TokenState.TRACK


@dataclass(frozen=True, slots=True)
class Capture:
    player_id: str
    color: Color
    token_index: int
    square: int


@dataclass(frozen=True, slots=True)
class StartResult:
    first_player_id: str
    teams: Tuple[Team, ...] = ()

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class RollResult:
    player_id: str
    value: int
    movable_tokens: Tuple[int, ...]
    turn_passed: bool
    rolls_again: bool = False
    forfeited: bool = False  # too many sixes in a row

    @property
    def ok(self) -> bool:
        return True

    @property
    def can_move(self) -> bool:
        return bool(self.movable_tokens)


@dataclass(frozen=True, slots=True)
class MoveResult:
    player_id: str
    moved_color: Color
    token_index: int
    token: TokenSnapshot
    dice_value: int
    captured: Tuple[Capture, ...] = ()
    bonus_turn: bool = False
    finished: bool = False  # the moved token reached the center
    player_finished: bool = False
    game_over: bool = False
    winner_id: Optional[str] = None
    winning_team: Optional[Team] = None
    auto_play: bool = False

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class AutoTurnResult:
    """Outcome of a turn completed without direct human input."""

    player_id: str
    roll: Optional[RollResult] = None
    move: Optional[MoveResult] = None
    missed_turns: int = 0
    eliminated: bool = False
    skipped: bool = False  # current player was already eliminated

    @property
    def ok(self) -> bool:
        return True
