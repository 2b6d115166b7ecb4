
"""
results.py
Defines the result dataclasses of a lottery draw: DrawResults (raw winning tickets) and
GameResults (winners grouped by player, with prize amounts and house profit).
Related modules:
- prizes.py: PrizeCalculator.draw_winners produces DrawResults.
- game.py: LotteryGame.get_game_results turns DrawResults into GameResults.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List

from .ticket import Ticket


@dataclass
class DrawResults:
    """
    Winning tickets of one draw. The three lists never share a ticket.
    Fields:
        grand_prize_winners (list[Ticket]): The single grand prize ticket (empty only if no tickets were sold).
        second_tier_winners (list[Ticket]): Second tier tickets, in draw order.
        third_tier_winners (list[Ticket]): Third tier tickets, in draw order.
    """
    grand_prize_winners: List[Ticket] = field(default_factory=list)
    second_tier_winners: List[Ticket] = field(default_factory=list)
    third_tier_winners: List[Ticket] = field(default_factory=list)

    def all_winners(self) -> List[Ticket]:
        return self.grand_prize_winners + self.second_tier_winners + self.third_tier_winners


@dataclass
class GameResults:
    """
    Human-readable outcome of a game.
    Fields:
        grand_prize_winner (str): Id of the player holding the grand prize ticket.
        grand_prize_amount (Decimal): Grand prize, paid in full.
        second_tier_winners (dict[str, int]): Player id -> number of second tier tickets won.
        second_tier_prize_per_winner (Decimal): Payout per second tier ticket.
        third_tier_winners (dict[str, int]): Player id -> number of third tier tickets won.
        third_tier_prize_per_winner (Decimal): Payout per third tier ticket.
        house_profit (Decimal): Revenue left after all payouts.
        total_revenue (Decimal): Money taken for all tickets sold.
    """
    grand_prize_winner: str = ""
    grand_prize_amount: Decimal = Decimal("0")
    second_tier_winners: Dict[str, int] = field(default_factory=dict)
    second_tier_prize_per_winner: Decimal = Decimal("0")
    third_tier_winners: Dict[str, int] = field(default_factory=dict)
    third_tier_prize_per_winner: Decimal = Decimal("0")
    house_profit: Decimal = Decimal("0")
    total_revenue: Decimal = Decimal("0")

    @property
    def second_tier_total(self) -> Decimal:
        return self.second_tier_prize_per_winner * sum(self.second_tier_winners.values())

    @property
    def third_tier_total(self) -> Decimal:
        return self.third_tier_prize_per_winner * sum(self.third_tier_winners.values())
