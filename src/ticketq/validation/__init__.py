"""TicketQ validation.

Pre-condition checks for engine requests and invariant checks for engine state.
"""

from ticketq.validation.checker import InvariantChecker
from ticketq.validation.validator import RequestValidator, find_ticket_location

__all__ = [
    "InvariantChecker",
    "RequestValidator",
    "find_ticket_location",
]
