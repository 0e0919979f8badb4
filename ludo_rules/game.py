"""Turn sequencing: dice, the triple-six penalty and turn advancement."""

from __future__ import annotations

import random
from typing import Optional

from loguru import logger

from .config import config
from .errors import GameAlreadyOver
from .rules import check_dice, legal_moves
from .types import GameState, TurnInfo

_default_rng = random.Random(config.DICE_SEED)


def roll_dice(rng: Optional[random.Random] = None) -> int:
    return (rng or _default_rng).randint(config.DICE_MIN, config.DICE_MAX)


def clear_turn(state: GameState) -> GameState:
    """Drop dice, extra roll, selectable tokens and six streak for the current player."""
    return state.with_turn(TurnInfo(current_player=state.turn.current_player))


def advance_turn(state: GameState) -> GameState:
    """Hand the turn to the next player still racing; no-op once decided."""
    alive = state.remaining_players()
    if len(alive) <= 1:
        return state
    current = state.turn.current_player
    # A player who has just finished is no longer in ``alive``; play then
    # restarts from the first remaining seat.
    pos = alive.index(current) if current in alive else -1
    nxt = alive[(pos + 1) % len(alive)]
    logger.debug(f"Turn passes from {current.name} to {nxt.name}")
    return state.with_turn(TurnInfo(current_player=nxt))


def start_turn(
    state: GameState,
    rng: Optional[random.Random] = None,
    *,
    dice: Optional[int] = None,
) -> GameState:
    """Roll for the current player and compute the tokens they may move.

    ``dice`` overrides the roll, which replay uses. A third six in a row
    forfeits the turn without moving anything.
    """
    if state.is_over:
        raise GameAlreadyOver("The game is decided; no more turns can start")
    value = check_dice(dice) if dice is not None else roll_dice(rng)
    player = state.turn.current_player

    sixes = state.turn.six_count_in_a_row + 1 if value == config.SPAWN_ROLL else 0
    if sixes >= config.MAX_SIXES_IN_A_ROW:
        logger.info(f"{player.name} rolled {sixes} sixes in a row and forfeits the turn")
        return advance_turn(clear_turn(state))

    selectable = legal_moves(state, value)
    logger.debug(f"{player.name} rolled {value}; selectable tokens {list(selectable)}")
    return state.with_turn(
        TurnInfo(
            current_player=player,
            dice=value,
            extra_roll=value == config.SPAWN_ROLL,
            selectable_token_ids=selectable,
            six_count_in_a_row=sixes,
        )
    )


def needs_pass(state: GameState) -> bool:
    """Dice are rolled but nothing can move."""
    return state.turn.dice is not None and not state.turn.selectable_token_ids


def pass_with_no_move(state: GameState) -> GameState:
    """End the current turn without moving, e.g. when no token is selectable."""
    if state.is_over:
        raise GameAlreadyOver("The game is decided; there is no turn to pass")
    logger.debug(f"{state.turn.current_player.name} passes with no move")
    return advance_turn(clear_turn(state))
