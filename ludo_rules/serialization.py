"""Plain dict / JSON encoding of game snapshots for saving and replay."""

from __future__ import annotations

import json
from typing import Any, Dict

from .errors import SerializationError
from .types import (
    BASE,
    HOME,
    Base,
    Color,
    GameState,
    Home,
    HomeStretch,
    OnTrack,
    Token,
    TokenState,
    TurnInfo,
)


def token_state_to_dict(st: TokenState) -> Dict[str, Any]:
    if isinstance(st, Base):
        return {"kind": "base"}
    if isinstance(st, OnTrack):
        return {"kind": "on_track", "index": st.index}
    if isinstance(st, HomeStretch):
        return {"kind": "home_stretch", "step": st.step}
    if isinstance(st, Home):
        return {"kind": "home"}
    raise TypeError(f"Unknown token state: {st!r}")


def token_state_from_dict(data: Dict[str, Any]) -> TokenState:
    kind = data.get("kind")
    try:
        if kind == "base":
            return BASE
        if kind == "on_track":
            return OnTrack(int(data["index"]))
        if kind == "home_stretch":
            return HomeStretch(int(data["step"]))
        if kind == "home":
            return HOME
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"Malformed token state {data!r}: {e}") from e
    raise SerializationError(f"Unknown token state kind: {kind!r}")


def _color(value: Any) -> Color:
    try:
        return Color[value] if isinstance(value, str) else Color(int(value))
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"Unknown color: {value!r}") from e


def state_to_dict(state: GameState) -> Dict[str, Any]:
    """Convert a snapshot to JSON-friendly primitives. Colors are stored by name."""
    return {
        "players": [p.name for p in state.players],
        "active_players": [p.name for p in state.active_players],
        "tokens": [
            {"id": t.id, "owner": t.owner.name, "state": token_state_to_dict(t.state)}
            for t in state.tokens
        ],
        "turn": {
            "current_player": state.turn.current_player.name,
            "dice": state.turn.dice,
            "extra_roll": state.turn.extra_roll,
            "selectable_token_ids": list(state.turn.selectable_token_ids),
            "six_count_in_a_row": state.turn.six_count_in_a_row,
        },
        "winner_order": [p.name for p in state.winner_order],
    }


def state_from_dict(data: Dict[str, Any]) -> GameState:
    try:
        turn = data["turn"]
        dice = turn.get("dice")
        return GameState(
            players=tuple(_color(p) for p in data["players"]),
            active_players=tuple(_color(p) for p in data["active_players"]),
            tokens=tuple(
                Token(
                    id=int(t["id"]),
                    owner=_color(t["owner"]),
                    state=token_state_from_dict(t["state"]),
                )
                for t in data["tokens"]
            ),
            turn=TurnInfo(
                current_player=_color(turn["current_player"]),
                dice=None if dice is None else int(dice),
                extra_roll=bool(turn.get("extra_roll", False)),
                selectable_token_ids=tuple(
                    int(i) for i in turn.get("selectable_token_ids", [])
                ),
                six_count_in_a_row=int(turn.get("six_count_in_a_row", 0)),
            ),
            winner_order=tuple(_color(p) for p in data.get("winner_order", [])),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise SerializationError(f"Malformed game state: {e}") from e


def dumps(state: GameState, **kwargs: Any) -> str:
    return json.dumps(state_to_dict(state), **kwargs)


def loads(raw: str) -> GameState:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SerializationError(f"Invalid JSON: {e}") from e
    return state_from_dict(data)
