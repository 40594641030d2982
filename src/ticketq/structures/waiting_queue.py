"""Waiting queue of tickets in arrival order."""

from collections import deque
from collections.abc import Iterator

from ticketq.data_models.ticket import Priority, Ticket


class WaitingQueue:
    """
    Insertion-ordered double-ended sequence of tickets.

    New arrivals go to the tail. The head is the oldest waiting ticket,
    except after an undone dispatch, which puts the ticket back at the head.
    """

    def __init__(self) -> None:
        self._tickets: deque[Ticket] = deque()

    def enqueue(self, ticket: Ticket) -> None:
        self._tickets.append(ticket)

    def push_front(self, ticket: Ticket) -> None:
        """Put a ticket back at the head of the queue."""
        self._tickets.appendleft(ticket)

    def peek_oldest(self) -> Ticket | None:
        return self._tickets[0] if self._tickets else None

    def pop_oldest(self) -> Ticket | None:
        return self._tickets.popleft() if self._tickets else None

    def find_by_id(self, ticket_id: str) -> Ticket | None:
        for ticket in self._tickets:
            if ticket.id == ticket_id:
                return ticket
        return None

    def remove_by_id(self, ticket_id: str) -> Ticket | None:
        """
        Remove the first ticket (front to back) whose id matches.

        Args:
            ticket_id: Identifier to look for

        Returns:
            The removed ticket, or None if no ticket has that id
        """
        for index, ticket in enumerate(self._tickets):
            if ticket.id == ticket_id:
                del self._tickets[index]
                return ticket
        return None

    def remove_instance(self, ticket: Ticket) -> bool:
        """
        Remove this exact ticket object, leaving lookalikes untouched.

        Returns:
            True if the instance was in the queue
        """
        for index, queued in enumerate(self._tickets):
            if queued is ticket:
                del self._tickets[index]
                return True
        return False

    def extract_first_urgent(self) -> Ticket | None:
        """
        Remove and return the oldest URGENT ticket.

        The relative order of the remaining tickets is preserved.

        Returns:
            The URGENT ticket, or None if every waiting ticket is NORMAL
        """
        for index, ticket in enumerate(self._tickets):
            if ticket.is_urgent:
                del self._tickets[index]
                return ticket
        return None

    def count_priority(self, priority: Priority) -> int:
        return sum(1 for ticket in self._tickets if ticket.priority == priority)

    def snapshot(self) -> list[Ticket]:
        """Tickets in queue order, as a new list."""
        return list(self._tickets)

    def clear(self) -> None:
        self._tickets.clear()

    def size(self) -> int:
        return len(self._tickets)

    def is_empty(self) -> bool:
        return not self._tickets

    def __len__(self) -> int:
        return len(self._tickets)

    def __iter__(self) -> Iterator[Ticket]:
        # Callers must not mutate the queue while iterating.
        return iter(self._tickets)

    def __contains__(self, ticket: object) -> bool:
        return any(queued is ticket for queued in self._tickets)
