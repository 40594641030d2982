"""TicketQ - Service-ticket intake queue with priority dispatch and undo."""

# Data models
from ticketq.data_models.action import ActionKind, ActionRecord
from ticketq.data_models.result import EngineError, EngineSummary, OperationResult
from ticketq.data_models.ticket import Priority, Ticket
from ticketq.data_models.violation import Violation

# State containers
from ticketq.structures.action_log import ActionLog
from ticketq.structures.history import ServiceHistory
from ticketq.structures.waiting_queue import WaitingQueue

# Validation
from ticketq.validation.checker import InvariantChecker
from ticketq.validation.validator import RequestValidator

# Engine
from ticketq.engine.scheduler import SchedulingEngine

__version__ = "0.1.0"

__all__ = [
    # Data models
    "Ticket",
    "Priority",
    "ActionRecord",
    "ActionKind",
    "OperationResult",
    "EngineError",
    "EngineSummary",
    "Violation",
    # State containers
    "WaitingQueue",
    "ServiceHistory",
    "ActionLog",
    # Validation
    "RequestValidator",
    "InvariantChecker",
    # Engine
    "SchedulingEngine",
]
