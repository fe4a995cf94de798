import unittest

from ludo_match.turns import next_turn_index


def never_out(_):
    return False


class TestNextTurnIndex(unittest.TestCase):
    def test_rotates_and_wraps(self):
        self.assertEqual(next_turn_index(0, 3, never_out), 1)
        self.assertEqual(next_turn_index(2, 3, never_out), 0)

    def test_skips_seats_out_of_play(self):
        self.assertEqual(next_turn_index(0, 4, lambda i: i in (1, 2)), 3)
        self.assertEqual(next_turn_index(3, 4, lambda i: i == 0), 1)

    def test_stays_when_nobody_else_is_left(self):
        self.assertEqual(next_turn_index(2, 4, lambda i: i != 2), 2)

    def test_lone_survivor_from_any_seat(self):
        for current in range(4):
            self.assertEqual(next_turn_index(current, 4, lambda i: i != 2), 2)

    def test_empty_table(self):
        self.assertEqual(next_turn_index(0, 0, never_out), 0)


if __name__ == "__main__":
    unittest.main()
