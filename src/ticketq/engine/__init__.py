"""TicketQ scheduling engine.

The dispatch policy, service slot and undo interpreter.
"""

from ticketq.engine.scheduler import SchedulingEngine

__all__ = [
    "SchedulingEngine",
]
