"""
Team play: diagonal colors share a side. A player whose own four tokens
are home keeps taking turns, but moves the teammate's tokens instead.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .player import Player
from .types import Color, Team

DIAGONAL_PAIRS: tuple[tuple[Color, Color], ...] = (
    (Color.RED, Color.YELLOW),
    (Color.BLUE, Color.GREEN),
)


def assign_teams(colors: Iterable[Color]) -> tuple[Team, Team]:
    """Split the seated colors into the two diagonal sides.

    Colors nobody sits on are dropped, so a two-player match (red and
    yellow) yields one single-color team each.
    """
    present = set(colors)
    sides = [[c for c in pair if c in present] for pair in DIAGONAL_PAIRS]
    if not sides[0] or not sides[1]:
        # Both seats on the same diagonal: each color plays for itself
        seated = sorted(present)
        sides = [seated[: len(seated) // 2], seated[len(seated) // 2 :]]
    return Team("team1", tuple(sides[0])), Team("team2", tuple(sides[1]))


def team_of(teams: Sequence[Team], color: Color) -> Optional[Team]:
    return next((team for team in teams if color in team), None)


def teammate_color(teams: Sequence[Team], color: Color) -> Optional[Color]:
    team = team_of(teams, color)
    if team is None:
        return None
    return next((c for c in team.colors if c != color), None)


def player_by_color(players: Iterable[Player], color: Color) -> Optional[Player]:
    return next((p for p in players if p.color == color), None)


def controlled_player(
    players: Sequence[Player], acting: Player, teams: Sequence[Team]
) -> Player:
    """Whose tokens ``acting`` moves this turn (team mode only)."""
    if not acting.is_finished:
        return acting
    mate = teammate_color(teams, acting.color)
    if mate is None:
        return acting
    return player_by_color(players, mate) or acting


def team_victory(teams: Sequence[Team], players: Sequence[Player]) -> Optional[Team]:
    """First team whose every color has all four tokens home."""
    for team in teams:
        if not team.colors:
            continue
        members = [player_by_color(players, c) for c in team.colors]
        if all(p is not None and p.is_finished for p in members):
            return team
    return None
