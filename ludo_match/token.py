"""
Token representation for a Ludo match.
Each player owns 4 tokens that race from base, around the track, up the
home stretch and into the center.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .types import Color, TokenSnapshot, TokenState

if TYPE_CHECKING:
    from .movement import Destination


@dataclass(slots=True)
class Token:
    """Mutable token state. Rule logic lives in the resolvers, not here.

    ``track_position`` is -1 while in base and an absolute square (0..51)
    while on the track. ``home_stretch_position`` only means something
    while ``in_home_stretch`` is set.
    """

    index: int  # 0..3 per player
    color: Color
    track_position: int = -1
    in_home_stretch: bool = False
    home_stretch_position: int = 0
    finished: bool = False

    @property
    def state(self) -> TokenState:
        if self.finished:
            return TokenState.FINISHED
        if self.in_home_stretch:
            return TokenState.HOME_STRETCH
        if self.track_position < 0:
            return TokenState.BASE
        return TokenState.TRACK

    def is_in_base(self) -> bool:
        return self.state is TokenState.BASE

    def apply(self, destination: "Destination") -> None:
        self.track_position = destination.track_position
        self.in_home_stretch = destination.in_home_stretch
        self.home_stretch_position = destination.home_stretch_position
        self.finished = destination.finished

    def send_to_base(self) -> None:
        self.track_position = -1
        self.in_home_stretch = False
        self.home_stretch_position = 0
        self.finished = False

    def retire(self, home_stretch_length: int) -> None:
        """Take the token off the board for good (player eliminated)."""
        self.track_position = -1
        self.in_home_stretch = False
        self.home_stretch_position = home_stretch_length
        self.finished = True

    def snapshot(self) -> TokenSnapshot:
        return TokenSnapshot(
            index=self.index,
            color=self.color,
            track_position=self.track_position,
            in_home_stretch=self.in_home_stretch,
            home_stretch_position=self.home_stretch_position,
            finished=self.finished,
        )

    def __str__(self) -> str:
        return f"Token({self.color.label}_{self.index}: {self.state.value})"
