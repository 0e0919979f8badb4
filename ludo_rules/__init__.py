"""
Ludo rules engine.
Pure, synchronous transforms over immutable game snapshots.
"""

from .board import (
    distance_to_entry,
    entry_index,
    home_length,
    is_blocking_square,
    is_safe_cell,
    occupancy,
    start_index,
    tokens_at,
    track_length,
)
from .config import config
from .errors import (
    GameAlreadyOver,
    IllegalMove,
    InvalidDice,
    NoActiveRoll,
    RulesError,
    SerializationError,
    TokenNotFound,
)
from .game import advance_turn, needs_pass, pass_with_no_move, roll_dice, start_turn
from .moves import apply_move, resolve_move
from .rules import can_advance, is_start_spawn_allowed, legal_moves
from .simulator import Simulator, replay
from .types import (
    Base,
    Color,
    GameState,
    Home,
    HomeStretch,
    MoveEvents,
    OnTrack,
    Token,
    TokenState,
    TurnInfo,
)

__all__ = [
    "config",
    "Color",
    "Base",
    "OnTrack",
    "HomeStretch",
    "Home",
    "TokenState",
    "Token",
    "TurnInfo",
    "GameState",
    "MoveEvents",
    "RulesError",
    "NoActiveRoll",
    "TokenNotFound",
    "IllegalMove",
    "GameAlreadyOver",
    "InvalidDice",
    "SerializationError",
    "track_length",
    "home_length",
    "start_index",
    "entry_index",
    "is_safe_cell",
    "distance_to_entry",
    "tokens_at",
    "is_blocking_square",
    "occupancy",
    "legal_moves",
    "can_advance",
    "is_start_spawn_allowed",
    "apply_move",
    "resolve_move",
    "roll_dice",
    "start_turn",
    "advance_turn",
    "pass_with_no_move",
    "needs_pass",
    "Simulator",
    "replay",
]
