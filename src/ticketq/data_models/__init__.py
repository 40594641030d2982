"""TicketQ data models.

Core data structures used throughout TicketQ for representing tickets,
action log entries, operation results and invariant violations.
"""

from ticketq.data_models.action import ActionKind, ActionRecord
from ticketq.data_models.result import EngineError, EngineSummary, OperationResult
from ticketq.data_models.ticket import Priority, Ticket
from ticketq.data_models.violation import Violation

__all__ = [
    "ActionKind",
    "ActionRecord",
    "EngineError",
    "EngineSummary",
    "OperationResult",
    "Priority",
    "Ticket",
    "Violation",
]
