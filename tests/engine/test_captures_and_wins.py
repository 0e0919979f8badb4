import unittest
from dataclasses import replace

from ludo_rules.moves import apply_move, capture_if_any, did_capture
from ludo_rules.types import (
    BASE,
    HOME,
    Base,
    Color,
    GameState,
    Home,
    HomeStretch,
    OnTrack,
)

SAFE = (8, 21, 34, 47, 0, 13, 26, 39)


def place(state, positions, **turn):
    state = state.with_tokens(t.with_state(positions.get(t.id, t.state)) for t in state.tokens)
    if turn:
        state = state.with_turn(replace(state.turn, **turn))
    return state


class TestCaptures(unittest.TestCase):
    def setUp(self):
        self.game = GameState.new([Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE])

    def test_capture_lone_opponent(self):
        state = place(self.game, {0: OnTrack(14), 10: OnTrack(17)}, dice=3)
        res = apply_move(state, 0)
        self.assertEqual(res.token(0).state, OnTrack(17))
        self.assertIsInstance(res.token(10).state, Base)
        # capture keeps the turn even without a six
        self.assertEqual(res.turn.current_player, Color.RED)
        self.assertIsNone(res.turn.dice)
        self.assertEqual(res.turn.selectable_token_ids, ())

    def test_no_capture_on_star_cell(self):
        state = place(self.game, {0: OnTrack(5), 10: OnTrack(8)}, dice=3)
        res = apply_move(state, 0)
        self.assertEqual(res.token(0).state, OnTrack(8))
        self.assertEqual(res.token(10).state, OnTrack(8))
        self.assertEqual(res.turn.current_player, Color.GREEN)

    def test_no_capture_on_opponent_start_cell(self):
        state = place(self.game, {0: OnTrack(10), 10: OnTrack(13)}, dice=3)
        res = apply_move(state, 0)
        self.assertEqual(res.token(10).state, OnTrack(13))
        self.assertEqual(res.turn.current_player, Color.GREEN)

    def test_spawn_onto_lone_opponent_does_not_capture(self):
        state = place(self.game, {10: OnTrack(0)}, dice=6)
        res = apply_move(state, 0)
        self.assertEqual(res.token(0).state, OnTrack(0))
        self.assertEqual(res.token(10).state, OnTrack(0))
        self.assertEqual(res.turn.current_player, Color.RED)

    def test_capture_never_happens_on_safe_cells(self):
        for idx in SAFE:
            for occupants in ({10: OnTrack(idx)}, {10: OnTrack(idx), 20: OnTrack(idx)}):
                state = place(self.game, occupants)
                moved = state.token(0).with_state(OnTrack(idx))
                after = capture_if_any(state.tokens, moved)
                for tid in occupants:
                    self.assertEqual(
                        next(t for t in after if t.id == tid).state, OnTrack(idx)
                    )
                self.assertFalse(did_capture(state.tokens, after, moved))

    def test_block_is_not_captured(self):
        state = place(self.game, {10: OnTrack(15), 11: OnTrack(15)})
        moved = state.token(0).with_state(OnTrack(15))
        after = capture_if_any(state.tokens, moved)
        self.assertEqual([t.state for t in after if t.owner == Color.GREEN][:2], [OnTrack(15)] * 2)
        self.assertFalse(did_capture(state.tokens, after, moved))

    def test_mixed_occupants_are_all_captured(self):
        state = place(self.game, {0: OnTrack(17), 10: OnTrack(20), 20: OnTrack(20)}, dice=3)
        res = apply_move(state, 0)
        self.assertIsInstance(res.token(10).state, Base)
        self.assertIsInstance(res.token(20).state, Base)
        self.assertEqual(res.turn.current_player, Color.RED)

    def test_own_token_is_never_captured(self):
        state = place(self.game, {0: OnTrack(17), 1: OnTrack(20), 10: OnTrack(20)}, dice=3)
        res = apply_move(state, 0)
        self.assertEqual(res.token(1).state, OnTrack(20))
        self.assertIsInstance(res.token(10).state, Base)


class TestWins(unittest.TestCase):
    def setUp(self):
        self.game = GameState.new([Color.RED, Color.GREEN, Color.YELLOW, Color.BLUE])

    def test_last_token_home_appends_winner(self):
        state = place(self.game, {0: HOME, 1: HOME, 2: HOME, 3: HomeStretch(3)}, dice=2)
        res = apply_move(state, 3)
        self.assertIsInstance(res.token(3).state, Home)
        self.assertEqual(res.winner_order, (Color.RED,))
        self.assertFalse(res.is_over)
        self.assertEqual(res.turn.current_player, Color.GREEN)

    def test_three_tokens_home_is_not_a_win(self):
        state = place(self.game, {0: HOME, 1: HOME, 2: HOME, 3: HomeStretch(0)}, dice=2)
        res = apply_move(state, 3)
        self.assertEqual(res.token(3).state, HomeStretch(2))
        self.assertEqual(res.winner_order, ())

    def test_winner_order_is_append_only(self):
        green_home = {10: HOME, 11: HOME, 12: HOME, 13: HOME}
        state = place(self.game, green_home)
        state = replace(state, winner_order=(Color.GREEN,))
        state = place(state, {0: HOME, 1: HOME, 2: HOME, 3: HomeStretch(4)}, dice=1)
        res = apply_move(state, 3)
        self.assertEqual(res.winner_order, (Color.GREEN, Color.RED))

    def test_three_finishers_decide_four_player_game(self):
        done = {tid: HOME for tid in (10, 11, 12, 13, 20, 21, 22, 23)}
        state = replace(place(self.game, done), winner_order=(Color.GREEN, Color.YELLOW))
        state = place(state, {0: HOME, 1: HOME, 2: HOME, 3: HomeStretch(3)}, dice=2)
        res = apply_move(state, 3)
        self.assertEqual(res.winner_order, (Color.GREEN, Color.YELLOW, Color.RED))
        self.assertTrue(res.is_over)
        self.assertEqual(res.remaining_players(), (Color.BLUE,))
        self.assertEqual(
            res.standings(), (Color.GREEN, Color.YELLOW, Color.RED, Color.BLUE)
        )

    def test_base_state_reset_helper(self):
        self.assertEqual(BASE, Base())


if __name__ == "__main__":
    unittest.main()
