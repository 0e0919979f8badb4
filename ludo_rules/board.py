"""Board geometry and occupancy helpers (no rule logic)."""

from __future__ import annotations

from collections import Counter
from typing import Optional, Tuple

import numpy as np

from .config import config
from .types import Color, GameState, OnTrack, Token


def track_length() -> int:
    return config.TRACK_LEN


def home_length() -> int:
    return config.HOME_LEN


def start_index(color: Color) -> int:
    """Track cell where a color's tokens spawn."""
    return config.START_SQUARES[int(color)]


def entry_index(color: Color) -> int:
    """Last track cell before a color turns into its home stretch."""
    return config.HOME_ENTRY[int(color)]


def is_safe_cell(idx: int) -> bool:
    """Star cells and the four start cells never allow a capture."""
    return idx in config.SAFE_SQUARES


def distance_to_entry(color: Color, from_idx: int) -> int:
    return (entry_index(color) - from_idx + config.TRACK_LEN) % config.TRACK_LEN


def tokens_at(state: GameState, idx: int) -> Tuple[Token, ...]:
    return tuple(
        t for t in state.tokens if isinstance(t.state, OnTrack) and t.state.index == idx
    )


def block_owner(state: GameState, idx: int) -> Optional[Color]:
    """Owner of a 2+ stack on a track cell, if any."""
    here = tokens_at(state, idx)
    if len(here) < 2:
        return None
    counts = Counter(t.owner for t in here)
    for owner, cnt in counts.items():
        if cnt >= 2:
            return owner
    return None


def is_blocking_square(
    state: GameState, idx: int, blocker_owner: Optional[Color] = None
) -> bool:
    """True when a 2+ stack sits on ``idx``.

    With ``blocker_owner`` set, a stack owned by that color does not count.
    Rule checks pass ``None`` so any stack blocks, including the mover's own.
    """
    owner = block_owner(state, idx)
    return owner is not None and (blocker_owner is None or owner != blocker_owner)


def occupancy(state: GameState) -> np.ndarray:
    """Return a (MAX_PLAYERS, TRACK_LEN) array of on-track token counts per color."""
    grid = np.zeros((config.MAX_PLAYERS, config.TRACK_LEN), dtype=np.int64)
    for tok in state.tokens:
        if isinstance(tok.state, OnTrack):
            grid[int(tok.owner), tok.state.index] += 1
    return grid
