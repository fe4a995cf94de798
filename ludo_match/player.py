from __future__ import annotations

from dataclasses import dataclass, field

from .token import Token
from .types import Color, SEATING_ORDER


@dataclass(slots=True)
class Player:
    id: str
    name: str
    color: Color
    is_robot: bool = False
    online: bool = True
    tokens: list[Token] = field(init=False)
    finished_tokens: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.color = Color(self.color)
        self.tokens = [Token(index=i, color=self.color) for i in range(4)]

    @property
    def is_finished(self) -> bool:
        """All four tokens home. Elimination never sets this."""
        return self.finished_tokens == len(self.tokens)

    def __str__(self) -> str:
        kind = "Robot" if self.is_robot else "Player"
        return f"{kind}({self.name}, {self.color.label}, {self.finished_tokens}/4)"


def next_seat_color(taken: list[Color]) -> Color | None:
    """First free color in seating order; the second seat faces the first."""
    for color in SEATING_ORDER:
        if color not in taken:
            return color
    return None
