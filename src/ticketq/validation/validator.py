"""Request validator for TicketQ engine operations."""

import logging

from ticketq.data_models.result import EngineError, OperationResult
from ticketq.data_models.ticket import Ticket
from ticketq.structures.action_log import ActionLog
from ticketq.structures.history import ServiceHistory
from ticketq.structures.waiting_queue import WaitingQueue

logger = logging.getLogger("ticketq.validation")


def find_ticket_location(
    ticket_id: str,
    queue: WaitingQueue,
    in_service: Ticket | None,
    history: ServiceHistory,
) -> str | None:
    """
    Find where a ticket id currently lives in the engine.

    Args:
        ticket_id: Caller-assigned ticket id
        queue: Waiting queue to search
        in_service: Ticket held in the service slot, if any
        history: Service history to search

    Returns:
        "queue", "service_slot" or "history" if found, None otherwise
    """
    if queue.find_by_id(ticket_id) is not None:
        return "queue"
    if in_service is not None and in_service.id == ticket_id:
        return "service_slot"
    if history.find_by_id(ticket_id) is not None:
        return "history"
    return None


class RequestValidator:
    """
    Checks the pre-conditions of engine operations before any state changes.

    Every check returns ``(is_valid, failure)``; the engine returns the
    failure unchanged, so a rejected request never leaves partial state.
    """

    def validate_enqueue(
        self,
        ticket: Ticket,
        queue: WaitingQueue,
        in_service: Ticket | None,
        history: ServiceHistory,
    ) -> tuple[bool, OperationResult | None]:
        """Reject tickets whose id is already known to the engine."""
        location = find_ticket_location(ticket.id, queue, in_service, history)
        if location is not None:
            return self._reject(
                EngineError.INVALID_INPUT,
                f"ticket id {ticket.id!r} already present in {location}",
            )
        return True, None

    def validate_dispatch(
        self, queue: WaitingQueue, in_service: Ticket | None
    ) -> tuple[bool, OperationResult | None]:
        """The slot must be free and somebody must be waiting."""
        if in_service is not None:
            return self._reject(
                EngineError.SLOT_OCCUPIED,
                f"ticket {in_service.id!r} is still in service",
            )
        if queue.is_empty():
            return self._reject(EngineError.EMPTY_QUEUE, "no tickets waiting")
        return True, None

    def validate_finish(
        self, in_service: Ticket | None, diagnosis: str | None
    ) -> tuple[bool, OperationResult | None]:
        """A non-blank diagnosis is required, and a ticket must be in service."""
        if diagnosis is None or not diagnosis.strip():
            return self._reject(EngineError.INVALID_INPUT, "diagnosis text is empty")
        if in_service is None:
            return self._reject(EngineError.NOT_FOUND, "no ticket in service")
        return True, None

    def validate_undo(self, action_log: ActionLog) -> tuple[bool, OperationResult | None]:
        if action_log.is_empty():
            return self._reject(EngineError.NOTHING_TO_UNDO, "action log is empty")
        return True, None

    def _reject(
        self, error: EngineError, message: str
    ) -> tuple[bool, OperationResult | None]:
        logger.warning("Rejected request (%s): %s", error.value, message)
        return False, OperationResult.failure(error, message)
