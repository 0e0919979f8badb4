import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()


def _optional_int(raw: str | None) -> int | None:
    if raw is None or raw.strip() == "":
        return None
    return int(raw)


@dataclass(slots=True)
class Config:
    # --- Geometry (fixed) ---
    TRACK_LEN: int = 52  # shared circular track 0..51
    HOME_LEN: int = 6  # private lane, step 5 is the final slot
    TOKENS_PER_PLAYER: int = 4
    MAX_PLAYERS: int = 4

    # Absolute track indices
    START_SQUARES: list[int] = field(
        default_factory=lambda: [0, 13, 26, 39]
    )  # Red, Green, Yellow, Blue
    HOME_ENTRY: list[int] = field(
        default_factory=lambda: [51, 12, 25, 38]
    )  # Red, Green, Yellow, Blue
    STAR_SQUARES: list[int] = field(default_factory=lambda: [8, 21, 34, 47])

    # --- Dice ---
    DICE_MIN: int = 1
    DICE_MAX: int = 6
    SPAWN_ROLL: int = 6
    MAX_SIXES_IN_A_ROW: int = 3

    # --- Runtime ---
    NUM_PLAYERS: int = int(os.getenv("NUM_PLAYERS", 4))
    DICE_SEED: int | None = _optional_int(os.getenv("DICE_SEED"))
    MAX_TURNS: int = int(os.getenv("MAX_TURNS", 20_000))

    # Derived (populated in __post_init__ due to slots)
    SAFE_SQUARES: frozenset[int] = frozenset()
    HOME_FINAL_STEP: int = 0

    def __post_init__(self):
        self.SAFE_SQUARES = frozenset(self.STAR_SQUARES) | frozenset(self.START_SQUARES)
        self.HOME_FINAL_STEP = self.HOME_LEN - 1

        if self.NUM_PLAYERS < 2 or self.NUM_PLAYERS > self.MAX_PLAYERS:
            raise ValueError("NUM_PLAYERS must be between 2 and 4")


config = Config()
