
"""
game.py
Implements the LotteryGame class, which seats the human player, generates the computer players,
runs the draw and reconciles prizes against revenue.
Related modules:
- config.py: LotteryConfig supplies the human player's rules and the ticket cost.
- generators: PlayerGenerator produces the computer players.
- prizes.py: PrizeCalculator draws winners and prices the prizes.
- results.py: DrawResults and GameResults.
"""

from typing import Dict, List, Optional

from .config import LotteryConfig
from .player import Player
from .prizes import PrizeCalculator
from .results import DrawResults, GameResults
from .ticket import Ticket, TicketIdAllocator
from ..generators.base import PlayerGenerator
from ..utils.logger import get_logger

logger = get_logger(__name__)

HUMAN_PLAYER_ID = "You"


class GameStateError(Exception):
    """
    Raised when the game is used out of order (initializing twice, drawing before initializing).
    """
    pass


class LotteryGame:
    """
    Orchestrates one single-shot lottery round.
    Status moves one way from NOT_INITIALIZED to INITIALIZED, or to FAILED when setup breaks.
    """
    def __init__(self,
                 player_generator: PlayerGenerator,
                 prize_calculator: PrizeCalculator,
                 config: LotteryConfig,
                 id_allocator: Optional[TicketIdAllocator] = None):
        """
        Args:
            player_generator (PlayerGenerator): Source of computer players.
            prize_calculator (PrizeCalculator): Draws winners and prices prizes.
            config (LotteryConfig): Validated game settings.
            id_allocator (TicketIdAllocator, optional): Ticket id source for the human player.
        Raises:
            ValueError: If a collaborator is missing.
        """
        if player_generator is None:
            raise ValueError("player_generator is required")
        if prize_calculator is None:
            raise ValueError("prize_calculator is required")
        if config is None:
            raise ValueError("config is required")
        self.player_generator = player_generator
        self.prize_calculator = prize_calculator
        self.config = config
        self._id_allocator = id_allocator
        self.status = "NOT_INITIALIZED"
        self.human_player: Optional[Player] = None
        self.cpu_players: List[Player] = []

    @property
    def total_player_count(self) -> int:
        return 1 + len(self.cpu_players)

    def _require_initialized(self) -> None:
        if self.status != "INITIALIZED":
            raise GameStateError("Game has not been initialized")

    def initialize(self, human_ticket_count: int) -> None:
        """
        Seat the human player, buy their tickets, then generate the computer players.
        A refused human purchase leaves the game NOT_INITIALIZED so the caller can retry.
        If generating the computer players fails, the game moves to FAILED and cannot be used again.
        Args:
            human_ticket_count (int): Tickets the human player wants to buy.
        Raises:
            GameStateError: If the game was already initialized or has failed.
            PurchaseError: If the human purchase, or a computer player's purchase, is refused.
        """
        if self.status != "NOT_INITIALIZED":
            raise GameStateError(f"Game cannot be initialized from status {self.status}")

        cfg = self.config
        human = Player(HUMAN_PLAYER_ID,
                       cfg.initial_balance,
                       cfg.ticket_cost,
                       cfg.min_ticket_count,
                       cfg.max_ticket_count,
                       id_allocator=self._id_allocator)
        human.purchase_tickets(human_ticket_count)

        try:
            cpu_players = self.player_generator.generate_cpu_players(1)
        except Exception:
            self.status = "FAILED"
            raise

        self.human_player = human
        self.cpu_players = cpu_players
        self.status = "INITIALIZED"
        logger.info(f"Game initialized with {self.total_player_count} players and {len(self.get_all_tickets())} tickets")

    def get_all_tickets(self) -> List[Ticket]:
        """
        All tickets in play: the human player's first, then each computer player's in seating order.
        """
        self._require_initialized()
        all_tickets = list(self.human_player.tickets)
        for cpu_player in self.cpu_players:
            all_tickets.extend(cpu_player.tickets)
        return all_tickets

    def draw_winners(self) -> DrawResults:
        self._require_initialized()
        return self.prize_calculator.draw_winners(self.get_all_tickets())

    def get_game_results(self, draw_results: DrawResults) -> GameResults:
        """
        Price the draw and group the winners by player.
        Per-winner prizes use the actual number of winners drawn. House profit is the exact residual
        revenue - (grand prize + tier payouts), so every rounding remainder goes to the house.
        Args:
            draw_results (DrawResults): Outcome of draw_winners().
        Returns:
            GameResults: Grouped winners, prize amounts and house profit.
        Raises:
            GameStateError: If the game is not initialized or the draw has no grand prize winner.
        """
        self._require_initialized()
        if not draw_results.grand_prize_winners:
            raise GameStateError("Draw has no grand prize winner")
        all_tickets = self.get_all_tickets()
        calc = self.prize_calculator
        second_count = len(draw_results.second_tier_winners)
        third_count = len(draw_results.third_tier_winners)

        results = GameResults(
            grand_prize_amount=calc.calculate_grand_prize(all_tickets),
            second_tier_prize_per_winner=calc.calculate_second_tier_prize_per_winner(all_tickets, second_count),
            third_tier_prize_per_winner=calc.calculate_third_tier_prize_per_winner(all_tickets, third_count),
        )

        distributed_prizes = (results.grand_prize_amount
                              + results.second_tier_prize_per_winner * second_count
                              + results.third_tier_prize_per_winner * third_count)
        results.total_revenue = len(all_tickets) * self.config.ticket_cost
        results.house_profit = results.total_revenue - distributed_prizes

        results.grand_prize_winner = draw_results.grand_prize_winners[0].owner_id
        results.second_tier_winners = group_winners_by_player(draw_results.second_tier_winners)
        results.third_tier_winners = group_winners_by_player(draw_results.third_tier_winners)

        logger.info(f"Revenue ${results.total_revenue}, prizes ${distributed_prizes}, house ${results.house_profit}")
        return results


def group_winners_by_player(tickets: List[Ticket]) -> Dict[str, int]:
    """
    Count winning tickets per owner, keyed in first-seen order.
    """
    grouped: Dict[str, int] = {}
    for ticket in tickets:
        grouped[ticket.owner_id] = grouped.get(ticket.owner_id, 0) + 1
    return grouped
