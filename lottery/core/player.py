
"""
player.py
Defines the Player entity and the errors raised when a ticket purchase is refused.
Related modules:
- ticket.py: Tickets are created here, numbered by a TicketIdAllocator.
- generators: Computer players are built and filled with tickets by a PlayerGenerator.
- game.py: The human player is created by LotteryGame.initialize.
"""

from decimal import Decimal
from typing import List, Optional

from .config import to_decimal
from .ticket import DEFAULT_ALLOCATOR, Ticket, TicketIdAllocator
from ..utils.logger import get_logger

logger = get_logger(__name__)


class PurchaseError(Exception):
    """
    Base class for refused ticket purchases. A refused purchase leaves the player unchanged.
    """
    pass


class InvalidTicketCountError(PurchaseError, ValueError):
    """
    Raised when the requested ticket count is outside the player's allowed range.
    """
    def __init__(self, requested: int, min_count: int, max_count: int):
        self.requested = requested
        self.min_count = min_count
        self.max_count = max_count
        super().__init__(f"Ticket count must be between {min_count} and {max_count} (got {requested})")


class InsufficientBalanceError(PurchaseError):
    """
    Raised when the purchase costs more than the player's current balance.
    """
    def __init__(self, required: Decimal, available: Decimal):
        self.required = required
        self.available = available
        super().__init__(f"Insufficient balance. Required: ${required}, Available: ${available}")


class Player:
    """
    A lottery participant with a balance and the tickets bought with it.
    Ticket bounds and cost are plain parameters, so players with different rules can share a game.
    """
    def __init__(self,
                 player_id: str,
                 initial_balance,
                 ticket_cost=Decimal("1"),
                 min_ticket_count: int = 1,
                 max_ticket_count: int = 10,
                 id_allocator: Optional[TicketIdAllocator] = None):
        """
        Args:
            player_id: Identifier, unique within a game (e.g. "You", "CPU3").
            initial_balance: Starting balance.
            ticket_cost: Price of one ticket for this player.
            min_ticket_count: Fewest tickets allowed in one purchase.
            max_ticket_count: Most tickets allowed in one purchase.
            id_allocator: Source of ticket ids; defaults to the process-wide allocator.
        """
        self.player_id = player_id
        self.balance = to_decimal(initial_balance)
        self.ticket_cost = to_decimal(ticket_cost)
        self.min_ticket_count = min_ticket_count
        self.max_ticket_count = max_ticket_count
        self.tickets: List[Ticket] = []
        self._id_allocator = id_allocator or DEFAULT_ALLOCATOR

    def purchase_tickets(self, ticket_count: int) -> List[Ticket]:
        """
        Buy ticket_count tickets, all or nothing.
        Args:
            ticket_count (int): Number of tickets to buy.
        Returns:
            list[Ticket]: The newly created tickets, in creation order.
        Raises:
            InvalidTicketCountError: If ticket_count is not a whole number within
                [min_ticket_count, max_ticket_count].
            InsufficientBalanceError: If the total cost exceeds the current balance.
        """
        if isinstance(ticket_count, bool) or not isinstance(ticket_count, int):
            raise InvalidTicketCountError(ticket_count, self.min_ticket_count, self.max_ticket_count)
        if ticket_count < self.min_ticket_count or ticket_count > self.max_ticket_count:
            raise InvalidTicketCountError(ticket_count, self.min_ticket_count, self.max_ticket_count)

        total_cost = ticket_count * self.ticket_cost
        if total_cost > self.balance:
            raise InsufficientBalanceError(total_cost, self.balance)

        self.balance -= total_cost
        new_tickets = [Ticket(self._id_allocator.next_id(), self) for _ in range(ticket_count)]
        self.tickets.extend(new_tickets)
        logger.debug(f"{self.player_id} bought {ticket_count} ticket(s) for ${total_cost}, balance ${self.balance}")
        return new_tickets

    @property
    def ticket_count(self) -> int:
        return len(self.tickets)

    def __repr__(self) -> str:
        return f"Player({self.player_id!r}, balance={self.balance}, tickets={len(self.tickets)})"
