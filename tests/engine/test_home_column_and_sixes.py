import unittest

from ludo_match.board import STANDARD_BOARD
from ludo_match.match import Match
from ludo_match.movement import movable_tokens, resolve_move
from ludo_match.token import Token
from ludo_match.types import Color, TurnPhase


def in_stretch(token, position):
    token.track_position = -1
    token.in_home_stretch = True
    token.home_stretch_position = position


class TestHomeStretchMovement(unittest.TestCase):
    def setUp(self):
        self.board = STANDARD_BOARD

    def test_three_from_entrance_rolls_five(self):
        token = Token(index=0, color=Color.RED, track_position=47)
        dest = resolve_move(self.board, token, Color.RED, 5)
        self.assertTrue(dest.in_home_stretch)
        self.assertTrue(dest.entered_home_stretch)
        self.assertEqual(dest.home_stretch_position, 2)
        self.assertFalse(dest.finished)

    def test_landing_on_entrance_starts_the_stretch(self):
        token = Token(index=0, color=Color.GREEN, track_position=9)
        dest = resolve_move(self.board, token, Color.GREEN, 2)
        self.assertTrue(dest.in_home_stretch)
        self.assertEqual(dest.home_stretch_position, 0)

    def test_finish_straight_from_track(self):
        token = Token(index=0, color=Color.RED, track_position=49)
        dest = resolve_move(self.board, token, Color.RED, 6)
        self.assertTrue(dest.finished)
        self.assertEqual(dest.home_stretch_position, 5)

    def test_wraps_past_the_seam(self):
        token = Token(index=0, color=Color.YELLOW, track_position=49)
        dest = resolve_move(self.board, token, Color.YELLOW, 6)
        self.assertFalse(dest.in_home_stretch)
        self.assertEqual(dest.track_position, 3)

    def test_fresh_token_does_not_turn_home(self):
        # Yellow's entrance sits just behind its start square
        token = Token(index=0, color=Color.YELLOW, track_position=26)
        dest = resolve_move(self.board, token, Color.YELLOW, 6)
        self.assertEqual(dest.track_position, 32)
        self.assertFalse(dest.in_home_stretch)

    def test_other_colors_pass_red_entrance(self):
        token = Token(index=0, color=Color.BLUE, track_position=48)
        dest = resolve_move(self.board, token, Color.BLUE, 4)
        self.assertEqual(dest.track_position, 0)
        self.assertFalse(dest.in_home_stretch)

    def test_home_stretch_limits(self):
        token = Token(index=0, color=Color.RED)
        in_stretch(token, 3)
        self.assertIsNone(resolve_move(self.board, token, Color.RED, 3))
        dest = resolve_move(self.board, token, Color.RED, 2)
        self.assertTrue(dest.finished)
        self.assertEqual(movable_tokens(self.board, [token], Color.RED, 6), [])
        self.assertEqual(movable_tokens(self.board, [token], Color.RED, 1), [0])

    def test_finished_token_never_moves(self):
        token = Token(index=0, color=Color.RED)
        in_stretch(token, 5)
        token.finished = True
        for dice in range(1, 7):
            self.assertIsNone(resolve_move(self.board, token, Color.RED, dice))


class TestSixes(unittest.TestCase):
    def setUp(self):
        self.match = Match()
        self.red = self.match.add_player("Ann")
        self.yellow = self.match.add_player("Ben")
        self.match.start()

    def test_three_consecutive_sixes_forfeit_turn(self):
        self.match.roll_dice(self.red.id, 6)
        self.match.move_token(self.red.id, 0)
        self.match.roll_dice(self.red.id, 6)
        self.match.move_token(self.red.id, 0)
        self.assertEqual(self.match.consecutive_sixes, 2)

        res = self.match.roll_dice(self.red.id, 6)
        self.assertTrue(res.forfeited)
        self.assertTrue(res.turn_passed)
        self.assertEqual(res.movable_tokens, ())
        self.assertIs(self.match.current_player, self.yellow)
        self.assertEqual(self.match.consecutive_sixes, 0)
        self.assertIsNone(self.match.last_dice_roll)
        self.assertEqual(self.red.tokens[0].track_position, 6)

    def test_six_without_moves_rolls_again(self):
        for token in self.red.tokens:
            in_stretch(token, 1)
        res = self.match.roll_dice(self.red.id, 6)
        self.assertTrue(res.rolls_again)
        self.assertFalse(res.turn_passed)
        self.assertIs(self.match.current_player, self.red)
        self.assertIs(self.match.phase, TurnPhase.AWAITING_ROLL)
        self.assertEqual(self.match.consecutive_sixes, 1)

        res = self.match.roll_dice(self.red.id, 3)
        self.assertEqual(res.movable_tokens, (0, 1, 2, 3))
        self.assertIs(self.match.phase, TurnPhase.AWAITING_MOVE)

    def test_no_moves_without_six_passes_turn(self):
        res = self.match.roll_dice(self.red.id, 3)
        self.assertTrue(res.turn_passed)
        self.assertFalse(res.can_move)
        self.assertIs(self.match.current_player, self.yellow)
        self.assertIsNone(self.match.last_dice_roll)

    def test_non_six_resets_streak(self):
        self.match.roll_dice(self.red.id, 6)
        self.match.move_token(self.red.id, 0)
        self.match.roll_dice(self.red.id, 2)
        self.assertEqual(self.match.consecutive_sixes, 0)


if __name__ == "__main__":
    unittest.main()
