from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Iterable, Optional, Sequence, Tuple, Union

from .config import config
from .errors import TokenNotFound


class Color(IntEnum):
    RED = 0
    GREEN = 1
    YELLOW = 2
    BLUE = 3


# --- Token state: closed set of four variants ---


@dataclass(frozen=True, slots=True)
class Base:
    """Token waiting in its yard, not yet on the track."""


@dataclass(frozen=True, slots=True)
class OnTrack:
    index: int  # 0..51 on the shared track


@dataclass(frozen=True, slots=True)
class HomeStretch:
    # 0..4 in the private lane. Entering from the track with dice one past
    # the entry cell lands on -1, which is kept as-is.
    step: int


@dataclass(frozen=True, slots=True)
class Home:
    """Token has finished."""


TokenState = Union[Base, OnTrack, HomeStretch, Home]

BASE = Base()
HOME = Home()


def token_id_for(color: Color, k: int) -> int:
    return int(color) * 10 + k


@dataclass(frozen=True, slots=True)
class Token:
    id: int
    owner: Color
    state: TokenState = BASE

    def with_state(self, state: TokenState) -> Token:
        return replace(self, state=state)


@dataclass(frozen=True, slots=True)
class TurnInfo:
    current_player: Color
    dice: Optional[int] = None
    extra_roll: bool = False
    selectable_token_ids: Tuple[int, ...] = ()
    six_count_in_a_row: int = 0


def default_players(num_players: int | None = None) -> Tuple[Color, ...]:
    """Seat colors for a game; two players sit opposite each other."""
    n = config.NUM_PLAYERS if num_players is None else num_players
    if n < 2 or n > config.MAX_PLAYERS:
        raise ValueError("A game needs between 2 and 4 players")
    if n == 2:
        return (Color.RED, Color.YELLOW)
    return tuple(Color)[:n]


@dataclass(frozen=True, slots=True)
class GameState:
    """Immutable snapshot of a game.

    Engine operations never mutate a snapshot; they return a new one, so
    keeping older snapshots is enough for undo or replay.
    """

    players: Tuple[Color, ...]
    active_players: Tuple[Color, ...]
    tokens: Tuple[Token, ...]
    turn: TurnInfo
    winner_order: Tuple[Color, ...] = field(default=())

    @classmethod
    def new(cls, players: Sequence[Color] | None = None) -> GameState:
        roster = default_players() if players is None else tuple(Color(p) for p in players)
        if len(roster) < 2 or len(set(roster)) != len(roster):
            raise ValueError("A game needs at least two distinct colors")
        tokens = tuple(
            Token(id=token_id_for(p, k), owner=p)
            for p in roster
            for k in range(config.TOKENS_PER_PLAYER)
        )
        return cls(
            players=roster,
            active_players=roster,
            tokens=tokens,
            turn=TurnInfo(current_player=roster[0]),
        )

    # --- Queries ---

    def token(self, token_id: int) -> Token:
        for tok in self.tokens:
            if tok.id == token_id:
                return tok
        raise TokenNotFound(token_id)

    def tokens_of(self, color: Color) -> Tuple[Token, ...]:
        return tuple(t for t in self.tokens if t.owner == color)

    def remaining_players(self) -> Tuple[Color, ...]:
        """Active players that have not finished yet, in turn order."""
        return tuple(p for p in self.active_players if p not in self.winner_order)

    @property
    def is_over(self) -> bool:
        return len(self.remaining_players()) <= 1

    def standings(self) -> Tuple[Color, ...]:
        """Finish order; once decided the last remaining player is appended."""
        if not self.is_over:
            return self.winner_order
        return self.winner_order + self.remaining_players()

    # --- Copy helpers ---

    def with_tokens(self, tokens: Iterable[Token]) -> GameState:
        return replace(self, tokens=tuple(tokens))

    def with_turn(self, turn: TurnInfo) -> GameState:
        return replace(self, turn=turn)


@dataclass(frozen=True, slots=True)
class MoveEvents:
    """What happened during one applied move, for presentation layers."""

    token_id: int
    dice: int
    before: TokenState
    after: TokenState
    captured: Tuple[int, ...] = ()
    finished_token: bool = False
    new_winners: Tuple[Color, ...] = ()
    extra_turn: bool = False
