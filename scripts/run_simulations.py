"""run_simulations.py
Play many independent single-shot lottery games and print aggregate statistics.
Every game checks that grand prize + tier payouts + house profit equals revenue.

Usage: python scripts/run_simulations.py --games 1000 --seed 7
"""
import argparse
import json
import random
from decimal import Decimal
from typing import Any, Dict, Optional

from lottery.core.config import LotteryConfig, load_config
from lottery.core.game import HUMAN_PLAYER_ID
from lottery.ui.console import build_game


def run_game(cfg: LotteryConfig, rng: random.Random, generator_name: str = "random") -> Dict[str, Any]:
    """
    Run a single game with a random human ticket count the human can afford.
    Args:
        cfg (LotteryConfig): Game configuration.
        rng (random.Random): Source for the human's ticket count and the game seeds.
        generator_name (str): Registered player generator to use.
    Returns:
        dict: Per-game statistics.
    """
    affordable = int(cfg.initial_balance // cfg.ticket_cost)
    high = min(cfg.max_ticket_count, affordable)
    if high < cfg.min_ticket_count:
        raise SystemExit("The configured balance cannot afford the minimum ticket purchase")
    human_tickets = rng.randint(cfg.min_ticket_count, high)

    game = build_game(cfg, generator_name, seed=rng.getrandbits(64))
    game.initialize(human_tickets)
    draw = game.draw_winners()
    results = game.get_game_results(draw)

    paid = results.grand_prize_amount + results.second_tier_total + results.third_tier_total
    if paid + results.house_profit != results.total_revenue:
        raise AssertionError(f"Prizes do not reconcile: {paid} + {results.house_profit} != {results.total_revenue}")

    return {
        "players": game.total_player_count,
        "tickets": len(game.get_all_tickets()),
        "revenue": results.total_revenue,
        "house_profit": results.house_profit,
        "human_won_grand": results.grand_prize_winner == HUMAN_PLAYER_ID,
    }


def summarize(number_of_games: int, cfg: LotteryConfig, seed: Optional[int] = None) -> Dict[str, Any]:
    rng = random.Random(seed)
    total_revenue = Decimal("0")
    total_profit = Decimal("0")
    total_tickets = 0
    human_grand_wins = 0

    for _ in range(number_of_games):
        stats = run_game(cfg, rng)
        total_revenue += stats["revenue"]
        total_profit += stats["house_profit"]
        total_tickets += stats["tickets"]
        human_grand_wins += int(stats["human_won_grand"])

    summary = {"games": number_of_games}
    if number_of_games > 0:
        summary["avg_tickets"] = total_tickets / number_of_games
        summary["avg_revenue"] = str(total_revenue / number_of_games)
        summary["avg_house_profit"] = str(total_profit / number_of_games)
        summary["human_grand_prize_rate"] = human_grand_wins / number_of_games
    return summary


def main():
    parser = argparse.ArgumentParser(description="Run many lottery games and report aggregate statistics.")
    parser.add_argument("--games", type=int, default=100)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", default=None, help="Path to a JSON settings file")
    args = parser.parse_args()

    cfg = load_config(args.config) if args.config else LotteryConfig().validate()
    summary = summarize(args.games, cfg, args.seed)
    print(json.dumps(summary, indent=2))


if __name__ == "__main__":
    main()
