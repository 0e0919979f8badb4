"""Move legality for the player whose turn it is."""

from __future__ import annotations

from typing import List, Tuple

from .board import distance_to_entry, is_blocking_square, start_index, tokens_at
from .config import config
from .errors import InvalidDice
from .types import Base, Color, GameState, Home, HomeStretch, OnTrack, Token


def check_dice(dice: int) -> int:
    if isinstance(dice, bool) or not isinstance(dice, int):
        raise InvalidDice(f"Dice must be an int, got {dice!r}")
    if not config.DICE_MIN <= dice <= config.DICE_MAX:
        raise InvalidDice(f"Dice must be in {config.DICE_MIN}..{config.DICE_MAX}, got {dice}")
    return dice


def is_start_spawn_allowed(state: GameState, player: Color) -> bool:
    """A spawn is refused only when an opponent holds a block on the start cell."""
    occupants = tokens_at(state, start_index(player))
    if not occupants:
        return True
    if all(t.owner == player for t in occupants):
        return True
    counts: dict[Color, int] = {}
    for t in occupants:
        counts[t.owner] = counts.get(t.owner, 0) + 1
    return not any(owner != player and cnt >= 2 for owner, cnt in counts.items())


def can_advance_from_track(state: GameState, token: Token, from_idx: int, dice: int) -> bool:
    dist = distance_to_entry(token.owner, from_idx)

    if dice <= dist:
        path = [(from_idx + step) % config.TRACK_LEN for step in range(1, dice + 1)]
        return not any(is_blocking_square(state, idx) for idx in path)

    on_track_path = [(from_idx + step) % config.TRACK_LEN for step in range(1, dist + 1)]
    if any(is_blocking_square(state, idx) for idx in on_track_path):
        return False

    # Loose gate; the landing square is computed separately in moves.landing_state
    steps_in_home = dice - dist - 1
    return 0 <= steps_in_home <= config.HOME_LEN


def can_advance(state: GameState, token: Token, dice: int) -> bool:
    """Whether a token already out of its yard can move ``dice`` cells."""
    st = token.state
    if isinstance(st, Base):
        return False
    if isinstance(st, OnTrack):
        return can_advance_from_track(state, token, st.index, dice)
    if isinstance(st, HomeStretch):
        return st.step + dice <= config.HOME_FINAL_STEP
    if isinstance(st, Home):
        return False
    raise TypeError(f"Unknown token state: {st!r}")


def legal_moves(state: GameState, dice: int) -> Tuple[int, ...]:
    """Token ids the current player may move with ``dice``.

    Spawnable tokens are listed first; the order carries no meaning.
    """
    check_dice(dice)
    player = state.turn.current_player
    mine = state.tokens_of(player)
    in_base = [t for t in mine if isinstance(t.state, Base)]

    selectable: List[int] = []
    if dice == config.SPAWN_ROLL and in_base and is_start_spawn_allowed(state, player):
        selectable.extend(t.id for t in in_base)
    selectable.extend(t.id for t in mine if can_advance(state, t, dice))
    return tuple(selectable)
