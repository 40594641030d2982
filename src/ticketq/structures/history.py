"""Service history of dispatched tickets."""

from collections.abc import Iterator

from ticketq.data_models.ticket import Priority, Ticket


class ServiceHistory:
    """
    Ordered record of tickets that have been pulled into service.

    Grows by one on every dispatch and only shrinks when a dispatch or a
    finish is undone.
    """

    def __init__(self) -> None:
        self._tickets: list[Ticket] = []

    def append(self, ticket: Ticket) -> None:
        self._tickets.append(ticket)

    def remove_by_identity(self, ticket: Ticket) -> bool:
        """
        Remove the most recently appended occurrence of this exact instance.

        Undo walks the action log in LIFO order, so in practice this is the
        tail element.

        Returns:
            True if the instance was present
        """
        for index in range(len(self._tickets) - 1, -1, -1):
            if self._tickets[index] is ticket:
                del self._tickets[index]
                return True
        return False

    def contains_instance(self, ticket: Ticket) -> bool:
        return any(served is ticket for served in self._tickets)

    def find_by_id(self, ticket_id: str) -> Ticket | None:
        for ticket in self._tickets:
            if ticket.id == ticket_id:
                return ticket
        return None

    def filter_by_request_type(self, request_type: str) -> list[Ticket]:
        """Served tickets whose request type matches, ignoring case."""
        wanted = request_type.casefold()
        return [t for t in self._tickets if t.request_type.casefold() == wanted]

    def served_by_priority(self, priority: Priority) -> list[Ticket]:
        return [t for t in self._tickets if t.priority == priority]

    def average_wait_minutes(self) -> float:
        """
        Mean wait over all served tickets that have a service start time.

        Each wait is truncated to whole minutes before averaging, so waits of
        3m10s and 5m50s average to 4.0.

        Returns:
            Average in minutes, 0.0 when there is nothing to average
        """
        waits = [
            minutes
            for minutes in (ticket.wait_minutes() for ticket in self._tickets)
            if minutes is not None
        ]
        if not waits:
            return 0.0
        return sum(waits) / len(waits)

    def snapshot(self) -> list[Ticket]:
        return list(self._tickets)

    def clear(self) -> None:
        self._tickets.clear()

    def count(self) -> int:
        return len(self._tickets)

    def __len__(self) -> int:
        return len(self._tickets)

    def __iter__(self) -> Iterator[Ticket]:
        return iter(self._tickets)
