import random
import unittest
from decimal import Decimal

from lottery.core.config import LotteryConfig
from lottery.core.game import GameStateError, LotteryGame, group_winners_by_player
from lottery.core.player import InsufficientBalanceError, InvalidTicketCountError
from lottery.core.prizes import StandardPrizeCalculator
from lottery.core.results import DrawResults
from lottery.core.ticket import TicketIdAllocator
from lottery.generators.random_generator import RandomPlayerGenerator

from fakes import BrokePlayerGenerator, FixedPlayerGenerator, FixedPrizeCalculator


def make_game(cfg=None, seed=0):
    cfg = cfg or LotteryConfig()
    allocator = TicketIdAllocator()
    generator = RandomPlayerGenerator(cfg, rng=random.Random(seed), id_allocator=allocator)
    calculator = StandardPrizeCalculator(cfg, rng=random.Random(seed + 1))
    return LotteryGame(generator, calculator, cfg, id_allocator=allocator)


class TestGameInitialization(unittest.TestCase):
    """
    Tests for `LotteryGame.initialize` and the one-way NOT_INITIALIZED -> INITIALIZED (or FAILED) transition.
    """

    def test_human_player_and_population(self):
        cfg = LotteryConfig(ticket_cost=1, initial_balance=10, min_ticket_count=1, max_ticket_count=10)
        for seed in range(10):
            game = make_game(cfg, seed)
            game.initialize(5)
            self.assertEqual(game.status, "INITIALIZED")
            self.assertEqual(game.human_player.player_id, "You")
            self.assertEqual(len(game.human_player.tickets), 5)
            self.assertEqual(game.human_player.balance, Decimal("5"))
            self.assertTrue(9 <= len(game.cpu_players) <= 14)
            self.assertTrue(10 <= game.total_player_count <= 15)
            for p in game.cpu_players:
                self.assertTrue(1 <= len(p.tickets) <= 10)
                self.assertEqual(p.balance, 10 - len(p.tickets))

    def test_refused_human_purchase_allows_retry(self):
        game = make_game()
        with self.assertRaises(InvalidTicketCountError):
            game.initialize(11)
        self.assertEqual(game.status, "NOT_INITIALIZED")
        self.assertIsNone(game.human_player)
        game.initialize(3)
        self.assertEqual(len(game.human_player.tickets), 3)

    def test_insufficient_human_balance(self):
        cfg = LotteryConfig(initial_balance=3)
        game = make_game(cfg)
        with self.assertRaises(InsufficientBalanceError):
            game.initialize(4)
        self.assertEqual(game.status, "NOT_INITIALIZED")

    def test_initialize_twice_rejected(self):
        game = make_game()
        game.initialize(2)
        with self.assertRaises(GameStateError):
            game.initialize(2)

    def test_use_before_initialize_rejected(self):
        game = make_game()
        with self.assertRaises(GameStateError):
            game.get_all_tickets()
        with self.assertRaises(GameStateError):
            game.draw_winners()

    def test_generator_failure_marks_game_failed(self):
        game = LotteryGame(BrokePlayerGenerator(), FixedPrizeCalculator(), LotteryConfig())
        with self.assertRaises(InsufficientBalanceError):
            game.initialize(3)
        self.assertEqual(game.status, "FAILED")
        self.assertIsNone(game.human_player)
        self.assertEqual(game.cpu_players, [])
        with self.assertRaises(GameStateError):
            game.initialize(3)
        with self.assertRaises(GameStateError):
            game.get_all_tickets()

    def test_generator_is_asked_for_one_human(self):
        gen = FixedPlayerGenerator()
        game = LotteryGame(gen, StandardPrizeCalculator(LotteryConfig()), LotteryConfig())
        game.initialize(1)
        self.assertEqual(gen.calls, [1])

    def test_missing_collaborators_rejected(self):
        cfg = LotteryConfig()
        with self.assertRaises(ValueError):
            LotteryGame(None, StandardPrizeCalculator(cfg), cfg)
        with self.assertRaises(ValueError):
            LotteryGame(FixedPlayerGenerator(), None, cfg)
        with self.assertRaises(ValueError):
            LotteryGame(FixedPlayerGenerator(), StandardPrizeCalculator(cfg), None)


class TestGameTickets(unittest.TestCase):
    def test_all_tickets_human_first_then_cpu_order(self):
        game = make_game(seed=3)
        game.initialize(4)
        tickets = game.get_all_tickets()
        expected = list(game.human_player.tickets)
        for p in game.cpu_players:
            expected.extend(p.tickets)
        self.assertEqual(tickets, expected)
        self.assertEqual(tickets, game.get_all_tickets())
        ids = [t.ticket_id for t in tickets]
        self.assertEqual(ids, sorted(ids))
        self.assertEqual(len(ids), len(set(ids)))


class TestGameResults(unittest.TestCase):
    """
    Tests for `LotteryGame.get_game_results`: prize amounts, grouping by player, and the
    reconciliation revenue == grand prize + tier payouts + house profit.
    """

    def assertReconciles(self, results):
        paid = results.grand_prize_amount + results.second_tier_total + results.third_tier_total
        self.assertEqual(paid + results.house_profit, results.total_revenue)

    def test_reconciliation_holds_for_many_configurations(self):
        configs = [
            LotteryConfig(),
            LotteryConfig(ticket_cost=3, initial_balance=30, grand_prize_percentage=0.37,
                          second_tier_percentage=0.29, third_tier_percentage=0.13),
            LotteryConfig(ticket_cost="0.75", initial_balance=20, grand_prize_percentage=0.5,
                          second_tier_percentage=0.25, third_tier_percentage=0.25),
            LotteryConfig(grand_prize_percentage=1, second_tier_percentage=0, third_tier_percentage=0),
        ]
        for i, cfg in enumerate(configs):
            for seed in range(5):
                game = make_game(cfg, seed * 10 + i)
                game.initialize(cfg.min_ticket_count)
                draw = game.draw_winners()
                results = game.get_game_results(draw)
                tickets = game.get_all_tickets()
                self.assertEqual(results.total_revenue, len(tickets) * cfg.ticket_cost)
                self.assertEqual(results.grand_prize_amount, results.total_revenue * cfg.grand_prize_percentage)
                self.assertReconciles(results)

    def test_winner_grouping_matches_draw(self):
        game = make_game(seed=9)
        game.initialize(10)
        draw = game.draw_winners()
        results = game.get_game_results(draw)
        self.assertEqual(results.grand_prize_winner, draw.grand_prize_winners[0].owner.player_id)
        self.assertEqual(sum(results.second_tier_winners.values()), len(draw.second_tier_winners))
        self.assertEqual(sum(results.third_tier_winners.values()), len(draw.third_tier_winners))
        owners = {p.player_id for p in [game.human_player] + game.cpu_players}
        self.assertTrue(set(results.second_tier_winners) <= owners)
        self.assertTrue(set(results.third_tier_winners) <= owners)

    def test_per_winner_prizes_use_actual_winner_counts(self):
        cfg = LotteryConfig()
        game = make_game(cfg, seed=2)
        game.initialize(5)
        tickets = game.get_all_tickets()
        # a short draw: one second tier winner, no third tier winners
        draw = DrawResults(grand_prize_winners=[tickets[0]], second_tier_winners=[tickets[1]])
        results = game.get_game_results(draw)
        self.assertEqual(results.second_tier_prize_per_winner, (len(tickets) * Decimal("0.3")) // 1)
        self.assertEqual(results.third_tier_prize_per_winner, Decimal("0"))
        self.assertEqual(results.third_tier_winners, {})
        self.assertReconciles(results)

    def test_draw_without_grand_prize_winner_rejected(self):
        game = make_game(seed=4)
        game.initialize(2)
        with self.assertRaises(GameStateError):
            game.get_game_results(DrawResults())

    def test_group_winners_counts_repeat_owners(self):
        game = LotteryGame(FixedPlayerGenerator(), FixedPrizeCalculator(), LotteryConfig())
        game.initialize(1)
        cpu1, cpu2 = game.cpu_players[0], game.cpu_players[1]
        grouped = group_winners_by_player([cpu1.tickets[0], cpu2.tickets[0], cpu1.tickets[1]])
        self.assertEqual(grouped, {"CUSTOM1": 2, "CUSTOM2": 1})
        self.assertEqual(list(grouped), ["CUSTOM1", "CUSTOM2"])


if __name__ == '__main__':
    unittest.main()
