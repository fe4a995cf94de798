from __future__ import annotations

import random
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union
from uuid import uuid4

from loguru import logger

from .autoplay import ClosestToHomeStrategy, Strategy
from .board import Board
from .capture import find_captures
from .config import Config
from .config import config as default_config
from .movement import movable_tokens, resolve_move
from .player import Player, next_seat_color
from .snapshot import MatchSnapshot, PlayerSnapshot
from .teams import assign_teams, controlled_player, team_victory, teammate_color
from .turns import next_turn_index
from .types import (
    AutoTurnResult,
    Color,
    MoveResult,
    RejectReason,
    Rejected,
    RollResult,
    StartResult,
    Team,
    TurnPhase,
)

DICE_FACES = (1, 6)


@dataclass(slots=True)
class Match:
    """One room's game: players, turn pointer, dice and team bookkeeping.

    Every public operation either applies a complete rules transition and
    returns an immutable result, or returns ``Rejected`` without touching
    any state. Callers must serialise operations on a given match.
    """

    team_mode: bool = False
    config: Config = field(default_factory=lambda: default_config)
    strategy: Strategy = field(default_factory=ClosestToHomeStrategy)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    board: Board = field(init=False, repr=False)
    players: list[Player] = field(default_factory=list, init=False)
    current_player_index: int = field(default=0, init=False)
    started: bool = field(default=False, init=False)
    over: bool = field(default=False, init=False)
    winner: Union[Player, Team, None] = field(default=None, init=False)
    last_dice_roll: Optional[int] = field(default=None, init=False)
    consecutive_sixes: int = field(default=0, init=False)
    teams: tuple[Team, ...] = field(default=(), init=False)
    missed_turns: dict[str, int] = field(default_factory=dict, init=False)
    eliminated: set[str] = field(default_factory=set, init=False)
    finish_order: list[str] = field(default_factory=list, init=False)
    turn_started_at: Optional[float] = field(default=None, init=False)
    invariant_recoveries: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.board = Board.from_config(self.config)

    # --- Lookups ---
    @property
    def phase(self) -> TurnPhase:
        if not self.started:
            return TurnPhase.LOBBY
        if self.over:
            return TurnPhase.OVER
        if self.last_dice_roll is None:
            return TurnPhase.AWAITING_ROLL
        return TurnPhase.AWAITING_MOVE

    @property
    def current_player(self) -> Optional[Player]:
        if self.started and 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    @property
    def winner_id(self) -> Optional[str]:
        return self.winner.id if isinstance(self.winner, Player) else None

    @property
    def winning_team(self) -> Optional[Team]:
        return self.winner if isinstance(self.winner, Team) else None

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def is_eliminated(self, player_id: str) -> bool:
        return player_id in self.eliminated

    def movable_tokens(self, player_id: str, dice: int) -> list[int]:
        """Token indexes ``player_id`` could move with ``dice`` right now.

        In team mode a player with all four tokens home is asked about the
        teammate's tokens instead.
        """
        player = self.get_player(player_id)
        if player is None:
            return []
        owner = self._controlled(player)
        return movable_tokens(self.board, owner.tokens, owner.color, dice)

    # --- Lobby ---
    def add_player(
        self, name: str, player_id: Optional[str] = None, *, is_robot: bool = False
    ) -> Union[Player, Rejected]:
        rejected = self._check_seat_available()
        if rejected is not None:
            return rejected
        player_id = player_id or uuid4().hex
        if self.get_player(player_id) is not None:
            return self._reject(
                RejectReason.DUPLICATE_PLAYER, f"{player_id} already seated"
            )

        color = next_seat_color([p.color for p in self.players])
        player = Player(id=player_id, name=name, color=color, is_robot=is_robot)
        self.players.append(player)
        logger.info(f"[Match] {player} joined ({len(self.players)} seated)")
        return player

    def add_robot_player(self) -> Union[Player, Rejected]:
        rejected = self._check_seat_available()
        if rejected is not None:
            return rejected
        robot_id = f"robot-{uuid4().hex[:8]}"
        return self.add_player(
            f"Robo {len(self.players) + 1}", robot_id, is_robot=True
        )

    def remove_player(self, player_id: str) -> bool:
        """Drop a player. Once the match runs, leaving forfeits instead."""
        player = self.get_player(player_id)
        if player is None or self.over:
            return False
        if not self.started:
            self.players.remove(player)
            self.missed_turns.pop(player_id, None)
            logger.info(f"[Match] {player} left the lobby")
            return True
        if player_id in self.eliminated:
            return False
        logger.info(f"[Match] {player} left mid-game and forfeits")
        self._eliminate(player)
        return True

    def set_online(self, player_id: str, online: bool) -> bool:
        player = self.get_player(player_id)
        if player is None:
            return False
        player.online = online
        return True

    def start(self) -> Union[StartResult, Rejected]:
        if self.started:
            return self._reject(RejectReason.ALREADY_STARTED, "Game already started")
        if len(self.players) < self.config.MIN_PLAYERS:
            return self._reject(
                RejectReason.NOT_ENOUGH_PLAYERS,
                f"Need at least {self.config.MIN_PLAYERS} players to start",
            )

        self.started = True
        self.current_player_index = 0
        self.missed_turns = {p.id: 0 for p in self.players}
        if self.team_mode:
            self.teams = assign_teams(p.color for p in self.players)
        logger.info(
            f"[Match] started with {len(self.players)} players"
            + (f", teams {[t.colors for t in self.teams]}" if self.team_mode else "")
        )
        return StartResult(first_player_id=self.players[0].id, teams=self.teams)

    # --- Turn actions ---
    def roll_dice(
        self, player_id: str, value: Optional[int] = None
    ) -> Union[RollResult, Rejected]:
        """Roll for ``player_id``; ``value`` overrides the built-in dice."""
        checked = self._check_turn(player_id)
        if isinstance(checked, Rejected):
            return checked
        if self.last_dice_roll is not None:
            return self._reject(RejectReason.ALREADY_ROLLED, "Move a token first")
        rejected = self._check_dice(value)
        if rejected is not None:
            return rejected

        self.missed_turns[player_id] = 0
        return self._roll(checked, self._dice(value))

    def move_token(self, player_id: str, token_index: int) -> Union[MoveResult, Rejected]:
        checked = self._check_turn(player_id)
        if isinstance(checked, Rejected):
            return checked
        if self.last_dice_roll is None:
            return self._reject(RejectReason.ROLL_FIRST, "Roll dice first")
        if token_index not in self.movable_tokens(player_id, self.last_dice_roll):
            return self._reject(RejectReason.ILLEGAL_MOVE, "Cannot move this token")

        self.missed_turns[player_id] = 0
        return self._move(checked, token_index)

    def handle_timeout(self, value: Optional[int] = None) -> Union[AutoTurnResult, Rejected]:
        """The current player ran out of time: play for them and count the miss.

        Rolls (unless a roll is already pending), moves the token closest to
        home if any move is legal, then records a missed turn for humans
        unless the automatic move earned a bonus turn or ended the match.
        """
        if not self.started or self.over:
            return self._reject(RejectReason.NOT_IN_PROGRESS, "Game not in progress")
        rejected = self._check_dice(value)
        if rejected is not None:
            return rejected

        pointed = self.current_player
        if pointed is not None and pointed.id in self.eliminated:
            logger.warning(f"[Match] timeout for eliminated {pointed}, passing turn")
            self._advance_turn()
            return AutoTurnResult(
                player_id=pointed.id,
                missed_turns=self.missed_turns.get(pointed.id, 0),
                skipped=True,
            )

        player = self._current()
        roll, move = self._auto_turn(player, value)
        kept_turn = move is not None and (move.bonus_turn or move.game_over)
        if player.is_robot or kept_turn:
            return AutoTurnResult(
                player_id=player.id,
                roll=roll,
                move=move,
                missed_turns=self.missed_turns.get(player.id, 0),
            )

        missed, eliminated = self._record_missed_turn(player)
        return AutoTurnResult(
            player_id=player.id,
            roll=roll,
            move=move,
            missed_turns=missed,
            eliminated=eliminated,
        )

    def play_robot_turn(self, value: Optional[int] = None) -> Union[AutoTurnResult, Rejected]:
        """Let the robot whose turn it is roll and, if it can, move."""
        if not self.started or self.over:
            return self._reject(RejectReason.NOT_IN_PROGRESS, "Game not in progress")
        rejected = self._check_dice(value)
        if rejected is not None:
            return rejected
        player = self._current()
        if not player.is_robot:
            return self._reject(RejectReason.NOT_A_ROBOT, f"{player.name} is not a robot")

        roll, move = self._auto_turn(player, value)
        return AutoTurnResult(player_id=player.id, roll=roll, move=move)

    # --- Turn timer (the clock is the caller's) ---
    def start_turn_timer(self, now: float) -> None:
        self.turn_started_at = now

    def remaining_time(self, now: float) -> float:
        if self.turn_started_at is None:
            return self.config.TURN_TIME_LIMIT
        elapsed = now - self.turn_started_at
        return max(0.0, self.config.TURN_TIME_LIMIT - elapsed)

    def turn_expired(self, now: float) -> bool:
        return self.remaining_time(now) <= 0

    # --- Snapshots ---
    def current_snapshot(self) -> MatchSnapshot:
        return MatchSnapshot(
            players=tuple(
                PlayerSnapshot(
                    id=p.id,
                    name=p.name,
                    color=p.color,
                    is_robot=p.is_robot,
                    online=p.online,
                    finished_tokens=p.finished_tokens,
                    eliminated=p.id in self.eliminated,
                    tokens=tuple(t.snapshot() for t in p.tokens),
                )
                for p in self.players
            ),
            current_player_index=self.current_player_index,
            phase=self.phase,
            started=self.started,
            over=self.over,
            team_mode=self.team_mode,
            teams=self.teams,
            last_dice_roll=self.last_dice_roll,
            consecutive_sixes=self.consecutive_sixes,
            missed_turns=MappingProxyType(dict(self.missed_turns)),
            eliminated=tuple(p.id for p in self.players if p.id in self.eliminated),
            finish_order=tuple(self.finish_order),
            winner_id=self.winner_id,
            winning_team=self.winning_team,
            turn_started_at=self.turn_started_at,
            invariant_recoveries=self.invariant_recoveries,
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: Union[MatchSnapshot, Mapping[str, Any]],
        *,
        config: Config = default_config,
        strategy: Optional[Strategy] = None,
        rng: Optional[random.Random] = None,
    ) -> "Match":
        """Rebuild a live match. Dice RNG state is not part of a snapshot."""
        if not isinstance(snapshot, MatchSnapshot):
            snapshot = MatchSnapshot.from_dict(snapshot)

        match = cls(
            team_mode=snapshot.team_mode,
            config=config,
            strategy=strategy or ClosestToHomeStrategy(),
            rng=rng or random.Random(),
        )
        for ps in snapshot.players:
            player = Player(
                id=ps.id,
                name=ps.name,
                color=ps.color,
                is_robot=ps.is_robot,
                online=ps.online,
            )
            player.finished_tokens = ps.finished_tokens
            for token, ts in zip(player.tokens, ps.tokens):
                token.track_position = ts.track_position
                token.in_home_stretch = ts.in_home_stretch
                token.home_stretch_position = ts.home_stretch_position
                token.finished = ts.finished
            match.players.append(player)

        match.current_player_index = snapshot.current_player_index
        match.started = snapshot.started
        match.over = snapshot.over
        match.teams = tuple(snapshot.teams)
        match.last_dice_roll = snapshot.last_dice_roll
        match.consecutive_sixes = snapshot.consecutive_sixes
        match.missed_turns = dict(snapshot.missed_turns)
        match.eliminated = set(snapshot.eliminated)
        match.finish_order = list(snapshot.finish_order)
        match.turn_started_at = snapshot.turn_started_at
        match.invariant_recoveries = snapshot.invariant_recoveries
        if snapshot.winner_id is not None:
            match.winner = match.get_player(snapshot.winner_id)
        elif snapshot.winning_team is not None:
            match.winner = snapshot.winning_team
        return match

    # --- Internals ---
    def _reject(self, reason: RejectReason, message: str) -> Rejected:
        logger.debug(f"[Match] rejected: {reason.value} ({message})")
        return Rejected(reason, message)

    def _check_seat_available(self) -> Optional[Rejected]:
        if self.started:
            return self._reject(RejectReason.ALREADY_STARTED, "Game already started")
        if len(self.players) >= self.config.MAX_PLAYERS:
            return self._reject(RejectReason.GAME_FULL, "Game is full")
        return None

    def _check_dice(self, value: Optional[int]) -> Optional[Rejected]:
        if value is None:
            return None
        low, high = DICE_FACES
        if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
            return self._reject(RejectReason.INVALID_DICE, f"Dice value {value!r}")
        return None

    def _check_turn(self, player_id: str) -> Union[Player, Rejected]:
        if not self.started or self.over:
            return self._reject(RejectReason.NOT_IN_PROGRESS, "Game not in progress")
        if self.get_player(player_id) is None:
            return self._reject(RejectReason.UNKNOWN_PLAYER, f"No player {player_id}")
        current = self._current()
        if current.id != player_id:
            return self._reject(RejectReason.NOT_YOUR_TURN, "Not your turn")
        return current

    def _dice(self, value: Optional[int]) -> int:
        return value if value is not None else self.rng.randint(*DICE_FACES)

    def _is_out(self, index: int) -> bool:
        return self.players[index].id in self.eliminated

    def _current(self) -> Player:
        idx = self.current_player_index
        if not 0 <= idx < len(self.players) or self._is_out(idx):
            self._recover_turn_pointer()
        return self.players[self.current_player_index]

    def _recover_turn_pointer(self) -> None:
        self.invariant_recoveries += 1
        logger.error(
            f"[Match] turn pointer {self.current_player_index} is not a live seat "
            f"({len(self.players)} seated, {len(self.eliminated)} eliminated); "
            f"forcing the turn forward (recovery #{self.invariant_recoveries})"
        )
        if not 0 <= self.current_player_index < len(self.players):
            self.current_player_index = 0
        if self._is_out(self.current_player_index):
            self._advance_turn()
        else:
            self.consecutive_sixes = 0
            self.last_dice_roll = None

    def _advance_turn(self) -> None:
        self.current_player_index = next_turn_index(
            self.current_player_index, len(self.players), self._is_out
        )
        self.consecutive_sixes = 0
        self.last_dice_roll = None

    def _controlled(self, player: Player) -> Player:
        if not self.team_mode:
            return player
        return controlled_player(self.players, player, self.teams)

    def _teammate(self, color: Color) -> Optional[Color]:
        if not self.team_mode:
            return None
        return teammate_color(self.teams, color)

    def _roll(self, player: Player, value: int) -> RollResult:
        if value == 6:
            self.consecutive_sixes += 1
        else:
            self.consecutive_sixes = 0

        if self.consecutive_sixes >= self.config.MAX_CONSECUTIVE_SIXES:
            logger.info(
                f"[Match] {player.name} rolled {self.consecutive_sixes} sixes in a row, turn lost"
            )
            self._advance_turn()
            return RollResult(player.id, value, (), turn_passed=True, forfeited=True)

        movable = self.movable_tokens(player.id, value)
        logger.debug(f"[Match] {player.name} rolled {value}, movable {movable}")
        if not movable:
            self.last_dice_roll = None
            if value == 6:
                return RollResult(player.id, value, (), turn_passed=False, rolls_again=True)
            self._advance_turn()
            return RollResult(player.id, value, (), turn_passed=True)

        self.last_dice_roll = value
        return RollResult(player.id, value, tuple(movable), turn_passed=False)

    def _move(self, player: Player, token_index: int, auto_play: bool = False) -> MoveResult:
        dice = self.last_dice_roll
        owner = self._controlled(player)
        token = owner.tokens[token_index]
        destination = resolve_move(self.board, token, owner.color, dice)
        token.apply(destination)

        captured = ()
        # A token leaving base never captures on its start square
        if destination.on_track and not destination.left_base:
            captured = tuple(
                find_captures(
                    self.board,
                    self.players,
                    owner.color,
                    destination.track_position,
                    exempt_color=self._teammate(owner.color),
                )
            )
            for cap in captured:
                self.get_player(cap.player_id).tokens[cap.token_index].send_to_base()
                logger.debug(
                    f"[Match] {owner.color.label} captured {cap.color.label}_{cap.token_index} on {cap.square}"
                )

        if destination.finished:
            owner.finished_tokens += 1
            if owner.is_finished and owner.id not in self.finish_order:
                self.finish_order.append(owner.id)
                logger.info(f"[Match] {owner} brought all tokens home")

        self._check_victory(owner)

        bonus = not self.over and (
            dice == 6
            or bool(captured)
            or (destination.finished and self.config.FINISH_GRANTS_BONUS)
        )
        self.last_dice_roll = None
        if not bonus and not self.over:
            self._advance_turn()

        logger.debug(
            f"[Match] {player.name} moved {token} with {dice}"
            + (", bonus turn" if bonus else "")
        )
        return MoveResult(
            player_id=player.id,
            moved_color=owner.color,
            token_index=token_index,
            token=token.snapshot(),
            dice_value=dice,
            captured=captured,
            bonus_turn=bonus,
            finished=destination.finished,
            player_finished=owner.is_finished,
            game_over=self.over,
            winner_id=self.winner_id,
            winning_team=self.winning_team,
            auto_play=auto_play,
        )

    def _check_victory(self, owner: Player) -> None:
        if self.team_mode:
            team = team_victory(self.teams, self.players)
            if team is not None:
                self._finish_match(team)
        elif owner.is_finished:
            self._finish_match(owner)

    def _finish_match(self, winner: Union[Player, Team, None]) -> None:
        self.over = True
        self.winner = winner
        self.last_dice_roll = None
        logger.info(f"[Match] game over, winner: {winner}")

    def _auto_turn(
        self, player: Player, value: Optional[int]
    ) -> tuple[Optional[RollResult], Optional[MoveResult]]:
        roll = None
        if self.last_dice_roll is None:
            roll = self._roll(player, self._dice(value))
            if not roll.can_move:
                return roll, None

        owner = self._controlled(player)
        movable = self.movable_tokens(player.id, self.last_dice_roll)
        choice = self.strategy.select_token(self.board, owner.tokens, owner.color, movable)
        if choice is None:
            return roll, None
        return roll, self._move(player, choice, auto_play=True)

    def _record_missed_turn(self, player: Player) -> tuple[int, bool]:
        count = self.missed_turns.get(player.id, 0) + 1
        self.missed_turns[player.id] = count
        logger.info(
            f"[Match] {player.name} missed a turn ({count}/{self.config.MAX_MISSED_TURNS})"
        )
        if count >= self.config.MAX_MISSED_TURNS:
            self._eliminate(player)
            return count, True
        return count, False

    def _eliminate(self, player: Player) -> None:
        if player.id in self.eliminated:
            return
        self.eliminated.add(player.id)
        for token in player.tokens:
            token.retire(self.board.home_stretch_length)
        logger.info(f"[Match] {player} eliminated")

        if all(p.id in self.eliminated for p in self.players):
            logger.warning("[Match] every player eliminated, ending without a winner")
            self._finish_match(None)
        elif self.current_player is player:
            self._advance_turn()
