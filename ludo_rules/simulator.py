from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from loguru import logger

from .config import config
from .errors import GameAlreadyOver
from .game import needs_pass, pass_with_no_move, roll_dice, start_turn
from .moves import apply_move
from .types import Color, GameState

# ("roll", dice) | ("move", token_id) | ("pass",)
Action = Tuple

Chooser = Callable[[GameState, random.Random], int]


def random_chooser(state: GameState, rng: random.Random) -> int:
    """Pick any selectable token uniformly."""
    return rng.choice(list(state.turn.selectable_token_ids))


def first_chooser(state: GameState, rng: random.Random) -> int:
    return state.turn.selectable_token_ids[0]


def apply_action(state: GameState, action: Action) -> GameState:
    kind = action[0]
    if kind == "roll":
        return start_turn(state, dice=int(action[1]))
    if kind == "move":
        return apply_move(state, int(action[1]), strict=True)
    if kind == "pass":
        return pass_with_no_move(state)
    raise ValueError(f"Unknown action: {action!r}")


def replay(actions: Sequence[Action], initial: Optional[GameState] = None) -> GameState:
    """Rebuild a game from its action log."""
    state = initial if initial is not None else GameState.new()
    for action in actions:
        state = apply_action(state, action)
    return state


@dataclass(slots=True)
class Simulator:
    """Plays seeded games by rolling and letting a chooser pick tokens.

    Every applied action is logged so a game can be replayed or undone.
    """

    seed: Optional[int] = None
    players: Optional[Tuple[Color, ...]] = None
    chooser: Chooser = random_chooser
    rng: random.Random = field(init=False)
    state: GameState = field(init=False)
    actions: List[Action] = field(default_factory=list, init=False)
    history: List[GameState] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        self.rng = random.Random(self.seed)
        self.state = GameState.new(self.players)
        self.history = [self.state]

    def _record(self, action: Action, state: GameState) -> None:
        self.actions.append(action)
        self.history.append(state)
        self.state = state

    def step(self) -> GameState:
        """Play one roll and its follow-up (move, pass or forfeit)."""
        if self.state.is_over:
            raise GameAlreadyOver("The game is decided")
        dice = roll_dice(self.rng)
        self._record(("roll", dice), start_turn(self.state, dice=dice))
        if self.state.turn.dice is None:
            # forfeited on three sixes
            return self.state
        if needs_pass(self.state):
            self._record(("pass",), pass_with_no_move(self.state))
        else:
            token_id = self.chooser(self.state, self.rng)
            self._record(("move", token_id), apply_move(self.state, token_id, strict=True))
        return self.state

    def run(self, max_steps: Optional[int] = None) -> GameState:
        limit = config.MAX_TURNS if max_steps is None else max_steps
        steps = 0
        while not self.state.is_over and steps < limit:
            self.step()
            steps += 1
        if not self.state.is_over:
            logger.warning(f"Stopped after {steps} turns without a result")
        return self.state

    def undo(self) -> GameState:
        """Drop the last logged action and restore the snapshot before it."""
        if len(self.history) > 1:
            self.actions.pop()
            self.history.pop()
            self.state = self.history[-1]
        return self.state
