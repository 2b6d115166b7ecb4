
"""
prizes.py
Implements revenue and prize pool arithmetic and the winner draw.
The draw samples tickets without replacement: grand prize first, then the second tier, then the third tier,
each tier drawing from what the previous tiers left in the pool.
Related modules:
- config.py: Ticket cost and pool percentages.
- results.py: DrawResults returned by draw_winners.
- game.py: LotteryGame depends on the PrizeCalculator contract defined here.
"""

import math
import random
from abc import ABC, abstractmethod
from decimal import ROUND_FLOOR, Decimal
from typing import List, Optional, Sequence

from .config import LotteryConfig
from .results import DrawResults
from .ticket import Ticket
from ..utils.logger import get_logger

logger = get_logger(__name__)

# Winner quotas are fractions of tickets sold, independent of the pool percentages.
GRAND_PRIZE_WINNER_COUNT = 1
SECOND_TIER_WINNER_FRACTION = Decimal("0.10")
THIRD_TIER_WINNER_FRACTION = Decimal("0.20")


def per_winner_prize(pool: Decimal, winner_count: int) -> Decimal:
    """
    Split a pool evenly, rounding each share down to a whole currency unit.
    Args:
        pool (Decimal): Amount to split.
        winner_count (int): Number of winning tickets sharing the pool.
    Returns:
        Decimal: Share per winning ticket; 0 when there are no winners.
    """
    if winner_count == 0:
        return Decimal("0")
    return (pool / winner_count).to_integral_value(rounding=ROUND_FLOOR)


def tier_winner_count(ticket_count: int, fraction: Decimal) -> int:
    return math.floor(ticket_count * fraction)


class PrizeCalculator(ABC):
    """
    Contract for drawing winners and pricing prizes. LotteryGame only talks to this interface.
    """

    @abstractmethod
    def draw_winners(self, tickets: Sequence[Ticket]) -> DrawResults:
        raise NotImplementedError

    @abstractmethod
    def calculate_grand_prize(self, tickets: Sequence[Ticket]) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def calculate_second_tier_prize_per_winner(self, tickets: Sequence[Ticket], winner_count: int) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def calculate_third_tier_prize_per_winner(self, tickets: Sequence[Ticket], winner_count: int) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def calculate_house_profit(self, tickets: Sequence[Ticket]) -> Decimal:
        raise NotImplementedError


class StandardPrizeCalculator(PrizeCalculator):
    """
    Prize calculator driven by a LotteryConfig, with its own random number generator.
    """
    def __init__(self, config: LotteryConfig, rng: Optional[random.Random] = None):
        """
        Args:
            config (LotteryConfig): Ticket cost and pool percentages.
            rng (random.Random, optional): Generator used for the draw.
        Raises:
            ValueError: If config is None.
        """
        if config is None:
            raise ValueError("config is required")
        self.config = config
        self.rng = rng or random.Random()

    def calculate_total_revenue(self, tickets: Sequence[Ticket]) -> Decimal:
        return len(tickets) * self.config.ticket_cost

    def calculate_grand_prize(self, tickets: Sequence[Ticket]) -> Decimal:
        return self.calculate_total_revenue(tickets) * self.config.grand_prize_percentage

    def calculate_second_tier_pool(self, tickets: Sequence[Ticket]) -> Decimal:
        return self.calculate_total_revenue(tickets) * self.config.second_tier_percentage

    def calculate_third_tier_pool(self, tickets: Sequence[Ticket]) -> Decimal:
        return self.calculate_total_revenue(tickets) * self.config.third_tier_percentage

    def calculate_house_profit(self, tickets: Sequence[Ticket]) -> Decimal:
        """
        Revenue left after the three pools, before per-winner rounding.
        LotteryGame replaces this with an exact residual once the winners are known.
        """
        total_prizes = (self.calculate_grand_prize(tickets)
                        + self.calculate_second_tier_pool(tickets)
                        + self.calculate_third_tier_pool(tickets))
        return self.calculate_total_revenue(tickets) - total_prizes

    @staticmethod
    def second_tier_winner_count(ticket_count: int) -> int:
        return tier_winner_count(ticket_count, SECOND_TIER_WINNER_FRACTION)

    @staticmethod
    def third_tier_winner_count(ticket_count: int) -> int:
        return tier_winner_count(ticket_count, THIRD_TIER_WINNER_FRACTION)

    def _draw(self, pool: List[Ticket], count: int) -> List[Ticket]:
        """
        Remove up to count tickets from pool, each chosen uniformly from what remains.
        Draws fewer than count when the pool runs out.
        """
        drawn = []
        for _ in range(count):
            if not pool:
                logger.warning(f"Ticket pool exhausted after {len(drawn)} of {count} draws")
                break
            drawn.append(pool.pop(self.rng.randrange(len(pool))))
        return drawn

    def draw_winners(self, tickets: Sequence[Ticket]) -> DrawResults:
        """
        Draw the grand prize ticket, then the second and third tier tickets, without replacement.
        Tier quotas come from the full ticket count, not the shrinking pool.
        Args:
            tickets (Sequence[Ticket]): All tickets sold. Not modified.
        Returns:
            DrawResults: Disjoint winner lists for the three tiers.
        """
        total = len(tickets)
        pool = list(tickets)
        results = DrawResults()
        results.grand_prize_winners = self._draw(pool, GRAND_PRIZE_WINNER_COUNT)
        results.second_tier_winners = self._draw(pool, self.second_tier_winner_count(total))
        results.third_tier_winners = self._draw(pool, self.third_tier_winner_count(total))
        logger.debug(
            f"Drew {len(results.grand_prize_winners)}/{len(results.second_tier_winners)}/"
            f"{len(results.third_tier_winners)} winners from {total} tickets"
        )
        return results

    def calculate_second_tier_prize_per_winner(self, tickets: Sequence[Ticket], winner_count: int) -> Decimal:
        return per_winner_prize(self.calculate_second_tier_pool(tickets), winner_count)

    def calculate_third_tier_prize_per_winner(self, tickets: Sequence[Ticket], winner_count: int) -> Decimal:
        return per_winner_prize(self.calculate_third_tier_pool(tickets), winner_count)
