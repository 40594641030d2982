"""TicketQ state containers.

The queue, history and action log the scheduling engine is built from.
"""

from ticketq.structures.action_log import ActionLog
from ticketq.structures.history import ServiceHistory
from ticketq.structures.waiting_queue import WaitingQueue

__all__ = [
    "ActionLog",
    "ServiceHistory",
    "WaitingQueue",
]
