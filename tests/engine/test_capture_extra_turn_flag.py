import unittest

from ludo_match.config import Config
from ludo_match.match import Match


class TestBonusTurnFlag(unittest.TestCase):
    def _match(self, **overrides):
        match = Match(config=Config(**overrides))
        self.red = match.add_player("Ann")
        self.yellow = match.add_player("Ben")
        match.start()
        return match

    def _put_in_stretch(self, position):
        token = self.red.tokens[0]
        token.in_home_stretch = True
        token.home_stretch_position = position

    def test_capture_sets_flag(self):
        match = self._match()
        self.red.tokens[0].track_position = 15
        self.yellow.tokens[0].track_position = 19
        match.roll_dice(self.red.id, 4)
        res = match.move_token(self.red.id, 0)
        self.assertTrue(res.bonus_turn)
        self.assertEqual(match.current_player.id, self.red.id)

    def test_plain_move_clears_flag(self):
        match = self._match()
        self.red.tokens[0].track_position = 15
        match.roll_dice(self.red.id, 4)
        res = match.move_token(self.red.id, 0)
        self.assertFalse(res.bonus_turn)
        self.assertEqual(match.current_player.id, self.yellow.id)

    def test_finishing_a_token_grants_bonus_by_default(self):
        match = self._match()
        self._put_in_stretch(3)
        match.roll_dice(self.red.id, 2)
        res = match.move_token(self.red.id, 0)
        self.assertTrue(res.finished)
        self.assertFalse(res.game_over)
        self.assertTrue(res.bonus_turn)
        self.assertEqual(match.current_player.id, self.red.id)
        self.assertEqual(self.red.finished_tokens, 1)

    def test_finish_bonus_can_be_switched_off(self):
        match = self._match(FINISH_GRANTS_BONUS=False)
        self._put_in_stretch(3)
        match.roll_dice(self.red.id, 2)
        res = match.move_token(self.red.id, 0)
        self.assertTrue(res.finished)
        self.assertFalse(res.bonus_turn)
        self.assertEqual(match.current_player.id, self.yellow.id)

    def test_six_still_grants_bonus_without_finish_bonus(self):
        match = self._match(FINISH_GRANTS_BONUS=False)
        res_roll = match.roll_dice(self.red.id, 6)
        self.assertTrue(res_roll.can_move)
        res = match.move_token(self.red.id, 0)
        self.assertTrue(res.bonus_turn)


if __name__ == "__main__":
    unittest.main()
