import argparse
import random
import sys
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List, Optional

from lottery.core.config import ConfigurationError, LotteryConfig, load_config
from lottery.core.game import LotteryGame
from lottery.core.player import Player, PurchaseError
from lottery.core.prizes import StandardPrizeCalculator
from lottery.core.results import GameResults
from lottery.generators import GENERATOR_MAP


class ConsoleWrapper(ABC):
    """
    Text input/output capability used by the console interface. Swapped for a scripted console in tests.
    """

    @abstractmethod
    def write_line(self, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def write(self, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def read_line(self) -> Optional[str]:
        """Return the next input line, or None when input has ended."""
        raise NotImplementedError


class StdConsole(ConsoleWrapper):
    def write_line(self, text: str) -> None:
        print(text)

    def write(self, text: str) -> None:
        print(text, end="", flush=True)

    def read_line(self) -> Optional[str]:
        try:
            return input()
        except EOFError:
            return None


def format_money(amount: Decimal) -> str:
    return f"${amount:,.2f}"


class ConsoleInterface:
    """
    Prompts the human player and prints the game outcome through a ConsoleWrapper.
    """
    def __init__(self, console: ConsoleWrapper, config: LotteryConfig):
        self.console = console
        self.config = config

    def display_welcome(self):
        self.console.write_line("Welcome to the Lottery!")
        self.console.write_line(f"You start with a balance of {format_money(self.config.initial_balance)}.")
        self.console.write_line(f"Each ticket costs {format_money(self.config.ticket_cost)}.")
        self.console.write_line("")

    def get_ticket_count(self) -> int:
        """
        Ask for a ticket count until a whole number within the configured bounds is entered.
        Returns:
            int: The requested ticket count.
        Raises:
            EOFError: If input ends before a valid count is entered.
        """
        low, high = self.config.min_ticket_count, self.config.max_ticket_count
        while True:
            self.console.write(f"How many tickets would you like to buy? ({low}-{high}): ")
            line = self.console.read_line()
            if line is None:
                raise EOFError("Input ended before a ticket count was entered")
            try:
                count = int(line.strip())
            except ValueError:
                self.console.write_line("Invalid input. Please enter a valid number.")
                continue
            if low <= count <= high:
                return count
            self.console.write_line(f"Invalid input. Please enter a number between {low} and {high}.")

    def display_error(self, message: str):
        self.console.write_line(f"Error: {message}")

    def display_cpu_players(self, cpu_players: List[Player]):
        self.console.write_line("")
        self.console.write_line("CPU Players:")
        for player in cpu_players:
            self.console.write_line(f"{player.player_id}: {len(player.tickets)} ticket(s) purchased")
        self.console.write_line("")

    def _display_tier(self, title: str, winners, prize_per_winner: Decimal):
        self.console.write_line(f"{title}:")
        for player_id, count in winners.items():
            ticket_text = "ticket" if count == 1 else "tickets"
            self.console.write_line(f"  {player_id} ({count} {ticket_text}): {format_money(prize_per_winner * count)}")
        self.console.write_line("")

    def display_results(self, results: GameResults):
        self.console.write_line("=== DRAW RESULTS ===")
        self.console.write_line("")
        self.console.write_line(
            f"Grand Prize Winner: {results.grand_prize_winner} - {format_money(results.grand_prize_amount)}")
        self.console.write_line("")
        self._display_tier("Second Tier Winners", results.second_tier_winners, results.second_tier_prize_per_winner)
        self._display_tier("Third Tier Winners", results.third_tier_winners, results.third_tier_prize_per_winner)
        self.console.write_line(f"House Profit: {format_money(results.house_profit)}")


def build_game(config: LotteryConfig, generator_name: str = "random", seed: Optional[int] = None) -> LotteryGame:
    """
    Wire a LotteryGame with the named generator and the standard prize calculator.
    Generator and calculator each get their own random number generator.
    Raises:
        ValueError: If the generator name is unknown.
    """
    name = generator_name.lower()
    if name not in GENERATOR_MAP:
        raise ValueError(f"Unknown generator: {generator_name}. Supported: {sorted(GENERATOR_MAP)}")
    seeder = random.Random(seed)
    generator = GENERATOR_MAP[name](config, rng=random.Random(seeder.getrandbits(64)))
    calculator = StandardPrizeCalculator(config, rng=random.Random(seeder.getrandbits(64)))
    return LotteryGame(generator, calculator, config)


def play(console: ConsoleWrapper, game: LotteryGame) -> GameResults:
    """
    Play one game: prompt for tickets (re-prompting when the human purchase is refused), draw, and print the results.
    Raises:
        PurchaseError: If a computer player's purchase is refused.
        EOFError: If input ends before the human has bought tickets.
    """
    ui = ConsoleInterface(console, game.config)
    ui.display_welcome()
    while True:
        ticket_count = ui.get_ticket_count()
        try:
            game.initialize(ticket_count)
            break
        except PurchaseError as e:
            if game.status == "FAILED":
                # the human bought; a generated player could not
                raise
            ui.display_error(str(e))
    ui.display_cpu_players(game.cpu_players)
    results = game.get_game_results(game.draw_winners())
    ui.display_results(results)
    return results


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play a single lottery draw against computer players.")
    parser.add_argument("--config", help="Path to a JSON settings file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible games")
    parser.add_argument("--generator", default="random", help=f"Player generator ({', '.join(sorted(GENERATOR_MAP))})")
    return parser.parse_args(argv)


def main(argv=None, console: Optional[ConsoleWrapper] = None) -> int:
    args = parse_args(argv)
    console = console or StdConsole()
    try:
        config = load_config(args.config) if args.config else LotteryConfig().validate()
    except ConfigurationError as e:
        console.write_line(f"Configuration error: {e}")
        return 2
    if args.generator.lower() not in GENERATOR_MAP:
        console.write_line(f"Unknown generator: {args.generator}. Supported: {sorted(GENERATOR_MAP)}")
        return 2
    try:
        play(console, build_game(config, args.generator, args.seed))
    except PurchaseError as e:
        console.write_line(f"Game aborted: {e}")
        return 1
    except (EOFError, KeyboardInterrupt):
        console.write_line("")
        console.write_line("Exiting.")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
