import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    return bool(int(os.getenv(name, int(default))))


@dataclass(slots=True)
class Config:
    # --- Board layout ---
    TRACK_LENGTH: int = 52  # absolute squares 0..51
    HOME_STRETCH_LENGTH: int = 5  # reaching 5 finishes the token
    TOKENS_PER_PLAYER: int = 4

    # Indexed by Color value: Red, Green, Yellow, Blue
    START_SQUARES: list[int] = field(default_factory=lambda: [0, 13, 26, 39])
    # Stepping onto this square turns the token into its home stretch
    HOME_ENTRANCES: list[int] = field(default_factory=lambda: [50, 11, 24, 37])
    # Entry squares plus the four stars
    SAFE_SQUARES: list[int] = field(
        default_factory=lambda: [0, 8, 13, 21, 26, 34, 39, 47]
    )

    # --- Seating ---
    MIN_PLAYERS: int = 2
    MAX_PLAYERS: int = 4

    # --- Rules ---
    MAX_CONSECUTIVE_SIXES: int = int(os.getenv("MAX_CONSECUTIVE_SIXES", 3))
    MAX_MISSED_TURNS: int = int(os.getenv("MAX_MISSED_TURNS", 5))
    FINISH_GRANTS_BONUS: bool = _env_flag("FINISH_GRANTS_BONUS", True)

    # --- Timer (seconds); the scheduler lives outside the engine ---
    TURN_TIME_LIMIT: float = float(os.getenv("TURN_TIME_LIMIT", 30))

    # Derived (populated in __post_init__ due to slots)
    BASE_DISTANCE: int = 0

    def __post_init__(self):
        # Farther than any token already on the board
        self.BASE_DISTANCE = self.TRACK_LENGTH + self.HOME_STRETCH_LENGTH + 1

        if not 2 <= self.MIN_PLAYERS <= self.MAX_PLAYERS <= 4:
            raise ValueError("Player limits must satisfy 2 <= MIN <= MAX <= 4")
        for name in ("START_SQUARES", "HOME_ENTRANCES"):
            squares = getattr(self, name)
            if len(squares) != 4:
                raise ValueError(f"{name} needs one square per color")
            if any(not 0 <= sq < self.TRACK_LENGTH for sq in squares):
                raise ValueError(f"{name} must lie on the track")
        if self.MAX_CONSECUTIVE_SIXES < 1:
            raise ValueError("MAX_CONSECUTIVE_SIXES must be positive")
        if self.MAX_MISSED_TURNS < 1:
            raise ValueError("MAX_MISSED_TURNS must be positive")


config = Config()
