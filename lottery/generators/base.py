from abc import ABC, abstractmethod
from typing import List

from ..core.player import Player


class PlayerGenerator(ABC):
    """
    Abstract base class for producers of computer-controlled players.
    Implementations return players that have already bought their tickets.
    """

    @abstractmethod
    def generate_cpu_players(self, human_player_count: int) -> List[Player]:
        """
        Build the computer players for one game.
        Args:
            human_player_count (int): Number of human players already seated.
        Returns:
            list[Player]: Generated players, in generation order.
        """
        raise NotImplementedError
