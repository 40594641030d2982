import pytest
from datetime import datetime, timedelta

from ticketq.data_models.ticket import Priority, Ticket
from ticketq.engine.scheduler import SchedulingEngine


class FakeClock:
    """Manually advanced clock for deterministic timestamps."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 9, 0, 0))


@pytest.fixture
def make_ticket(clock):
    """Factory for tickets arriving at the fake clock's current time."""

    def _make(ticket_id: str, priority: str = "normal", request_type: str = "Soporte") -> Ticket:
        return Ticket(
            id=ticket_id,
            name=f"Customer {ticket_id}",
            request_type=request_type,
            priority=Priority(priority),
            problem_description="Laptop does not boot",
            arrival_time=clock(),
        )

    return _make


@pytest.fixture
def engine(clock):
    return SchedulingEngine(clock=clock)
