"""
Read-only views of a match for rendering, broadcast and replay.

``MatchSnapshot.to_dict`` produces plain JSON-safe values; ``from_dict``
reverses it. Turning a snapshot back into a live match is
``Match.from_snapshot``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from .types import Color, Team, TokenSnapshot, TurnPhase


def _color_from(value: Any) -> Color:
    if isinstance(value, str):
        return Color[value.upper()]
    return Color(int(value))


def _token_to_dict(token: TokenSnapshot) -> Dict[str, Any]:
    return {
        "index": token.index,
        "color": token.color.label,
        "track_position": token.track_position,
        "in_home_stretch": token.in_home_stretch,
        "home_stretch_position": token.home_stretch_position,
        "finished": token.finished,
    }


def _token_from_dict(data: Mapping[str, Any]) -> TokenSnapshot:
    return TokenSnapshot(
        index=int(data["index"]),
        color=_color_from(data["color"]),
        track_position=int(data["track_position"]),
        in_home_stretch=bool(data["in_home_stretch"]),
        home_stretch_position=int(data["home_stretch_position"]),
        finished=bool(data["finished"]),
    )


def _team_to_dict(team: Team) -> Dict[str, Any]:
    return {"name": team.name, "colors": [c.label for c in team.colors]}


def _team_from_dict(data: Mapping[str, Any]) -> Team:
    return Team(str(data["name"]), tuple(_color_from(c) for c in data["colors"]))


@dataclass(frozen=True, slots=True)
class PlayerSnapshot:
    id: str
    name: str
    color: Color
    is_robot: bool
    online: bool
    finished_tokens: int
    eliminated: bool
    tokens: Tuple[TokenSnapshot, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "color": self.color.label,
            "is_robot": self.is_robot,
            "online": self.online,
            "finished_tokens": self.finished_tokens,
            "eliminated": self.eliminated,
            "tokens": [_token_to_dict(t) for t in self.tokens],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PlayerSnapshot":
        return cls(
            id=str(data["id"]),
            name=str(data["name"]),
            color=_color_from(data["color"]),
            is_robot=bool(data.get("is_robot", False)),
            online=bool(data.get("online", True)),
            finished_tokens=int(data["finished_tokens"]),
            eliminated=bool(data.get("eliminated", False)),
            tokens=tuple(_token_from_dict(t) for t in data["tokens"]),
        )


@dataclass(frozen=True, slots=True)
class MatchSnapshot:
    players: Tuple[PlayerSnapshot, ...]
    current_player_index: int
    phase: TurnPhase
    started: bool
    over: bool
    team_mode: bool
    teams: Tuple[Team, ...]
    last_dice_roll: Optional[int]
    consecutive_sixes: int
    missed_turns: Mapping[str, int]
    eliminated: Tuple[str, ...]
    finish_order: Tuple[str, ...]
    winner_id: Optional[str] = None
    winning_team: Optional[Team] = None
    turn_started_at: Optional[float] = None
    invariant_recoveries: int = 0

    @property
    def current_player(self) -> Optional[PlayerSnapshot]:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "players": [p.to_dict() for p in self.players],
            "current_player_index": self.current_player_index,
            "phase": self.phase.value,
            "started": self.started,
            "over": self.over,
            "team_mode": self.team_mode,
            "teams": [_team_to_dict(t) for t in self.teams],
            "last_dice_roll": self.last_dice_roll,
            "consecutive_sixes": self.consecutive_sixes,
            "missed_turns": dict(self.missed_turns),
            "eliminated": list(self.eliminated),
            "finish_order": list(self.finish_order),
            "winner_id": self.winner_id,
            "winning_team": (
                _team_to_dict(self.winning_team) if self.winning_team else None
            ),
            "turn_started_at": self.turn_started_at,
            "invariant_recoveries": self.invariant_recoveries,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MatchSnapshot":
        winning_team = data.get("winning_team")
        dice = data.get("last_dice_roll")
        started_at = data.get("turn_started_at")
        return cls(
            players=tuple(PlayerSnapshot.from_dict(p) for p in data["players"]),
            current_player_index=int(data["current_player_index"]),
            phase=TurnPhase(data["phase"]),
            started=bool(data["started"]),
            over=bool(data["over"]),
            team_mode=bool(data["team_mode"]),
            teams=tuple(_team_from_dict(t) for t in data.get("teams", ())),
            last_dice_roll=None if dice is None else int(dice),
            consecutive_sixes=int(data.get("consecutive_sixes", 0)),
            missed_turns=MappingProxyType(
                {str(k): int(v) for k, v in data.get("missed_turns", {}).items()}
            ),
            eliminated=tuple(data.get("eliminated", ())),
            finish_order=tuple(data.get("finish_order", ())),
            winner_id=data.get("winner_id"),
            winning_team=_team_from_dict(winning_team) if winning_team else None,
            turn_started_at=None if started_at is None else float(started_at),
            invariant_recoveries=int(data.get("invariant_recoveries", 0)),
        )
