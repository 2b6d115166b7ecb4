import random
from typing import List, Optional

from .base import PlayerGenerator
from ..core.config import LotteryConfig
from ..core.player import Player
from ..core.ticket import TicketIdAllocator
from ..utils.logger import get_logger
from . import register_generator

logger = get_logger(__name__)

MIN_TOTAL_PLAYERS = 10
MAX_TOTAL_PLAYERS = 15


@register_generator("random")
class RandomPlayerGenerator(PlayerGenerator):
    """
    Fills the game up to a random total of 10-15 players. Each computer player ("CPU1".."CPUn")
    starts with the configured balance and buys a random number of tickets within the configured bounds.
    """
    def __init__(self,
                 config: LotteryConfig,
                 rng: Optional[random.Random] = None,
                 id_allocator: Optional[TicketIdAllocator] = None):
        """
        Args:
            config: Balance, ticket cost and ticket bounds for every generated player.
            rng: Optional random number generator.
            id_allocator: Ticket id source handed to each player; defaults to the process-wide one.
        """
        if config is None:
            raise ValueError("config is required")
        self.config = config
        self.rng = rng or random.Random()
        self.id_allocator = id_allocator

    def generate_cpu_players(self, human_player_count: int) -> List[Player]:
        """
        Requires human_player_count <= MIN_TOTAL_PLAYERS. Purchase errors propagate to the caller.
        """
        total_players = self.rng.randint(MIN_TOTAL_PLAYERS, MAX_TOTAL_PLAYERS)
        cpu_player_count = total_players - human_player_count

        cfg = self.config
        cpu_players = []
        for i in range(cpu_player_count):
            player = Player(f"CPU{i + 1}",
                            cfg.initial_balance,
                            cfg.ticket_cost,
                            cfg.min_ticket_count,
                            cfg.max_ticket_count,
                            id_allocator=self.id_allocator)
            player.purchase_tickets(self.rng.randint(cfg.min_ticket_count, cfg.max_ticket_count))
            cpu_players.append(player)

        logger.debug(f"Generated {len(cpu_players)} computer players (total {total_players})")
        return cpu_players
