import unittest
from dataclasses import replace

from ludo_rules.moves import resolve_move
from ludo_rules.types import HOME, Color, GameState, HomeStretch, OnTrack


def place(state, positions, **turn):
    state = state.with_tokens(t.with_state(positions.get(t.id, t.state)) for t in state.tokens)
    if turn:
        state = state.with_turn(replace(state.turn, **turn))
    return state


class TestMoveEvents(unittest.TestCase):
    def setUp(self):
        self.game = GameState.new([Color.RED, Color.GREEN])

    def test_capture_sets_extra_turn(self):
        state = place(self.game, {0: OnTrack(2), 10: OnTrack(5)}, dice=3)
        res, events = resolve_move(state, 0)
        self.assertEqual(events.captured, (10,))
        self.assertTrue(events.extra_turn)
        self.assertEqual(events.before, OnTrack(2))
        self.assertEqual(events.after, OnTrack(5))
        self.assertEqual(res.turn.current_player, Color.RED)

    def test_plain_move_passes_turn(self):
        state = place(self.game, {0: OnTrack(2)}, dice=3)
        res, events = resolve_move(state, 0)
        self.assertEqual(events.captured, ())
        self.assertFalse(events.extra_turn)
        self.assertFalse(events.finished_token)
        self.assertEqual(res.turn.current_player, Color.GREEN)

    def test_finishing_reports_winner(self):
        state = place(self.game, {0: HOME, 1: HOME, 2: HOME, 3: HomeStretch(1)}, dice=4)
        res, events = resolve_move(state, 3)
        self.assertTrue(events.finished_token)
        self.assertEqual(events.new_winners, (Color.RED,))
        self.assertTrue(res.is_over)
        self.assertEqual(res.standings(), (Color.RED, Color.GREEN))


if __name__ == "__main__":
    unittest.main()
