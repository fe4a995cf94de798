import unittest

from ludo_match.autoplay import ClosestToHomeStrategy, choose_token, distance_to_home
from ludo_match.board import STANDARD_BOARD
from ludo_match.player import Player
from ludo_match.types import Color


class TestDistanceToHome(unittest.TestCase):
    def setUp(self):
        self.red = Player(id="r", name="Ann", color=Color.RED)
        self.green = Player(id="g", name="Dee", color=Color.GREEN)

    def test_base_is_farthest(self):
        self.assertEqual(distance_to_home(STANDARD_BOARD, self.red.tokens[0], Color.RED), 58)

    def test_track_distances(self):
        token = self.red.tokens[0]
        token.track_position = 47
        self.assertEqual(distance_to_home(STANDARD_BOARD, token, Color.RED), 8)
        fresh = self.green.tokens[0]
        fresh.track_position = 13
        self.assertEqual(distance_to_home(STANDARD_BOARD, fresh, Color.GREEN), 55)

    def test_stretch_and_finished(self):
        token = self.red.tokens[0]
        token.in_home_stretch = True
        token.home_stretch_position = 2
        self.assertEqual(distance_to_home(STANDARD_BOARD, token, Color.RED), 3)
        token.home_stretch_position = 5
        token.finished = True
        self.assertEqual(distance_to_home(STANDARD_BOARD, token, Color.RED), 0)


class TestClosestToHomeStrategy(unittest.TestCase):
    def setUp(self):
        self.player = Player(id="r", name="Ann", color=Color.RED)
        self.strategy = ClosestToHomeStrategy()

    def test_ties_go_to_lowest_index(self):
        movable = [0, 1, 2, 3]
        self.assertEqual(
            self.strategy.select_token(STANDARD_BOARD, self.player.tokens, Color.RED, movable),
            0,
        )

    def test_only_movable_tokens_are_considered(self):
        self.player.tokens[0].track_position = 40
        self.player.tokens[1].track_position = 10
        choice = choose_token(STANDARD_BOARD, self.player.tokens, Color.RED, [1, 2])
        self.assertEqual(choice, 1)

    def test_nothing_to_move(self):
        self.assertIsNone(choose_token(STANDARD_BOARD, self.player.tokens, Color.RED, []))

    def test_name(self):
        self.assertEqual(ClosestToHomeStrategy.name, "closest_to_home")


if __name__ == "__main__":
    unittest.main()
