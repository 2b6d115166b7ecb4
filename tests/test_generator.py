import random
import unittest
from decimal import Decimal

from lottery.core.config import LotteryConfig
from lottery.core.player import InsufficientBalanceError
from lottery.core.ticket import TicketIdAllocator
from lottery.generators import GENERATOR_MAP, register_generator
from lottery.generators.random_generator import MAX_TOTAL_PLAYERS, MIN_TOTAL_PLAYERS, RandomPlayerGenerator


class TestRandomPlayerGenerator(unittest.TestCase):
    """
    Tests for `RandomPlayerGenerator`: population size, naming, and each player's purchase.
      - Total players (human + computer) always lands in [10, 15].
      - Every computer player buys between min and max tickets and pays for them.
    """

    def test_registered_under_random(self):
        self.assertIs(GENERATOR_MAP["random"], RandomPlayerGenerator)

    def test_duplicate_name_rejected(self):
        with self.assertRaises(ValueError):
            @register_generator("random")
            class Duplicate(RandomPlayerGenerator):
                pass
        self.assertIs(GENERATOR_MAP["random"], RandomPlayerGenerator)

    def test_population_and_purchases(self):
        cfg = LotteryConfig(ticket_cost=1, initial_balance=10, min_ticket_count=1, max_ticket_count=10)
        gen = RandomPlayerGenerator(cfg, rng=random.Random(4))
        for _ in range(50):
            players = gen.generate_cpu_players(1)
            self.assertGreaterEqual(len(players), MIN_TOTAL_PLAYERS - 1)
            self.assertLessEqual(len(players), MAX_TOTAL_PLAYERS - 1)
            for p in players:
                self.assertGreaterEqual(len(p.tickets), 1)
                self.assertLessEqual(len(p.tickets), 10)
                self.assertEqual(p.balance, Decimal("10") - len(p.tickets))

    def test_players_are_numbered_in_order(self):
        gen = RandomPlayerGenerator(LotteryConfig(), rng=random.Random(8))
        players = gen.generate_cpu_players(1)
        self.assertEqual([p.player_id for p in players], [f"CPU{i}" for i in range(1, len(players) + 1)])

    def test_human_count_reduces_computer_count(self):
        sizes = set()
        gen = RandomPlayerGenerator(LotteryConfig(), rng=random.Random(21))
        for _ in range(200):
            sizes.add(len(gen.generate_cpu_players(3)))
        self.assertEqual(sizes, set(range(7, 13)))

    def test_ticket_bounds_follow_config(self):
        for low, high in ((1, 5), (5, 10)):
            cfg = LotteryConfig(min_ticket_count=low, max_ticket_count=high)
            players = RandomPlayerGenerator(cfg, rng=random.Random(low)).generate_cpu_players(1)
            for p in players:
                self.assertTrue(low <= len(p.tickets) <= high)

    def test_injected_allocator_numbers_tickets(self):
        allocator = TicketIdAllocator()
        gen = RandomPlayerGenerator(LotteryConfig(), rng=random.Random(6), id_allocator=allocator)
        players = gen.generate_cpu_players(1)
        ids = [t.ticket_id for p in players for t in p.tickets]
        self.assertEqual(ids, list(range(1, len(ids) + 1)))

    def test_unaffordable_purchase_propagates(self):
        # 10 tickets at $2 each can never be paid from a $5 balance
        cfg = LotteryConfig(ticket_cost=2, initial_balance=5, min_ticket_count=10, max_ticket_count=10)
        with self.assertRaises(InsufficientBalanceError):
            RandomPlayerGenerator(cfg, rng=random.Random(1)).generate_cpu_players(1)

    def test_missing_config_rejected(self):
        with self.assertRaises(ValueError):
            RandomPlayerGenerator(None)


if __name__ == '__main__':
    unittest.main()
