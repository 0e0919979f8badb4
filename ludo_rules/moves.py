"""Applying a chosen move: landing square, captures, finishers and turn keeping."""

from __future__ import annotations

from typing import Iterable, Tuple

from loguru import logger

from .board import distance_to_entry, is_safe_cell, start_index
from .config import config
from .errors import GameAlreadyOver, IllegalMove, NoActiveRoll
from .game import advance_turn
from .rules import legal_moves
from .types import (
    BASE,
    HOME,
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


def _enter_home_stretch(steps: int) -> TokenState:
    return HOME if steps >= config.HOME_FINAL_STEP else HomeStretch(steps)


def move_from_track(token: Token, from_idx: int, dice: int) -> TokenState:
    dist = distance_to_entry(token.owner, from_idx)
    if dice <= dist:
        return OnTrack((from_idx + dice) % config.TRACK_LEN)
    # Two-stage offset: legality gates on steps_in_home, the landing is one
    # further back. Kept as-is, it decides the exact home-lane square.
    steps_in_home = dice - dist - 1
    to_home = steps_in_home - 1
    return _enter_home_stretch(to_home)


def landing_state(token: Token, dice: int) -> TokenState:
    """State the token ends up in after moving ``dice`` (no capture applied)."""
    st = token.state
    if isinstance(st, Base):
        return OnTrack(start_index(token.owner))
    if isinstance(st, OnTrack):
        return move_from_track(token, st.index, dice)
    if isinstance(st, HomeStretch):
        return _enter_home_stretch(st.step + dice)
    if isinstance(st, Home):
        return st
    raise TypeError(f"Unknown token state: {st!r}")


def _opponents_at(tokens: Iterable[Token], idx: int, mover: Color) -> int:
    return sum(
        1
        for t in tokens
        if t.owner != mover and isinstance(t.state, OnTrack) and t.state.index == idx
    )


def capture_if_any(tokens: Tuple[Token, ...], moved: Token) -> Tuple[Token, ...]:
    """Place ``moved`` and send lone opponents on its landing cell back to base."""
    current = tuple(moved if t.id == moved.id else t for t in tokens)

    ms = moved.state
    if not isinstance(ms, OnTrack):
        return current
    idx = ms.index
    if is_safe_cell(idx):
        return current

    here = [
        t
        for t in current
        if t.id != moved.id and isinstance(t.state, OnTrack) and t.state.index == idx
    ]
    if not here:
        return current

    counts: dict[Color, int] = {}
    for t in here:
        counts[t.owner] = counts.get(t.owner, 0) + 1
    if any(cnt >= 2 for cnt in counts.values()):
        return current

    victims = {t.id for t in here if t.owner != moved.owner}
    return tuple(t.with_state(BASE) if t.id in victims else t for t in current)


def did_capture(before: Tuple[Token, ...], after: Tuple[Token, ...], moved: Token) -> bool:
    ms = moved.state
    if not isinstance(ms, OnTrack) or is_safe_cell(ms.index):
        return False
    return (
        _opponents_at(before, ms.index, moved.owner) > 0
        and _opponents_at(after, ms.index, moved.owner) == 0
    )


def update_winners(state: GameState, tokens: Tuple[Token, ...]) -> Tuple[Color, ...]:
    """Append every active player whose tokens are all home; existing order is kept."""
    winners = list(state.winner_order)
    for p in state.active_players:
        if p in winners:
            continue
        mine = [t for t in tokens if t.owner == p]
        if len(mine) == config.TOKENS_PER_PLAYER and all(
            isinstance(t.state, Home) for t in mine
        ):
            winners.append(p)
    return tuple(winners)


def validate_move(state: GameState, token_id: int) -> int:
    """Check a move request and return the dice it will use."""
    dice = state.turn.dice
    if dice is None:
        raise NoActiveRoll("Roll the dice before moving a token")
    if state.is_over:
        raise GameAlreadyOver("The game is decided; no more moves can be made")
    token = state.token(token_id)
    legal = legal_moves(state, dice)
    if token.id not in legal:
        logger.warning(f"Rejected move of token {token_id} with dice {dice}")
        raise IllegalMove(token_id, dice, legal)
    return dice


def resolve_move(state: GameState, token_id: int) -> Tuple[GameState, MoveEvents]:
    """Apply a legal move and report what happened."""
    dice = validate_move(state, token_id)
    token = state.token(token_id)

    moved = token.with_state(landing_state(token, dice))
    after_capture = capture_if_any(state.tokens, moved)
    winners = update_winners(state, after_capture)
    captured = did_capture(state.tokens, after_capture, moved)
    keep_turn = dice == config.SPAWN_ROLL or captured

    victims = tuple(
        old.id
        for old, new in zip(state.tokens, after_capture)
        if old.id != moved.id and not isinstance(old.state, Base) and isinstance(new.state, Base)
    )
    new_winners = winners[len(state.winner_order):]
    logger.debug(
        f"{token.owner.name} token {token_id}: {token.state} -> {moved.state} (dice {dice})"
    )
    if victims:
        logger.debug(f"{token.owner.name} captured tokens {list(victims)}")
    for p in new_winners:
        logger.info(f"{p.name} finished in place {winners.index(p) + 1}")

    next_state = GameState(
        players=state.players,
        active_players=state.active_players,
        tokens=after_capture,
        turn=TurnInfo(
            current_player=state.turn.current_player,
            six_count_in_a_row=state.turn.six_count_in_a_row if keep_turn else 0,
        ),
        winner_order=winners,
    )
    if not keep_turn:
        next_state = advance_turn(next_state)

    events = MoveEvents(
        token_id=token_id,
        dice=dice,
        before=token.state,
        after=moved.state,
        captured=victims,
        finished_token=isinstance(moved.state, Home) and not isinstance(token.state, Home),
        new_winners=new_winners,
        extra_turn=keep_turn,
    )
    return next_state, events


def apply_move(state: GameState, token_id: int, *, strict: bool = False) -> GameState:
    """Move ``token_id`` with the dice rolled this turn.

    Without a roll the state comes back unchanged, or ``NoActiveRoll`` is
    raised when ``strict`` is set. Unknown or unmovable tokens raise
    ``TokenNotFound`` / ``IllegalMove``.
    """
    if state.turn.dice is None and not strict:
        logger.debug("apply_move ignored: no dice rolled this turn")
        return state
    next_state, _ = resolve_move(state, token_id)
    return next_state
