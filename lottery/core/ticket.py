
"""
ticket.py
Defines the Ticket model and the TicketIdAllocator that hands out globally unique ticket numbers.
Related modules:
- player.py: Tickets are only created by a successful Player.purchase_tickets call.
- prizes.py: Tickets are the units drawn as winners.
"""

import threading
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .player import Player


class TicketIdAllocator:
    """
    Hands out strictly increasing ticket ids, never reusing one.
    Increments are guarded by a lock so several games may share one allocator.
    """
    def __init__(self, start: int = 1):
        self._next = start
        self._lock = threading.Lock()

    def next_id(self) -> int:
        with self._lock:
            value = self._next
            self._next += 1
            return value

    def peek(self) -> int:
        """Return the id the next call to next_id() will hand out."""
        with self._lock:
            return self._next


# process-wide allocator used by players that are not given their own
DEFAULT_ALLOCATOR = TicketIdAllocator()


@dataclass(frozen=True, eq=False)
class Ticket:
    """
    A single lottery ticket.
    Args:
        ticket_id (int): Unique sequential identifier.
        owner (Player): The player who bought the ticket (back-reference only).
    """
    ticket_id: int
    owner: "Player"

    @property
    def owner_id(self) -> str:
        return self.owner.player_id

    def __repr__(self) -> str:
        return f"Ticket(ticket_id={self.ticket_id}, owner={self.owner.player_id!r})"
