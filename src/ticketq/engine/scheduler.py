"""SchedulingEngine - Core dispatch and undo engine for TicketQ."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime

from ticketq.config import MIN_BOOST_THRESHOLD, PRIORITY_BOOST_THRESHOLD
from ticketq.data_models.action import ActionKind, ActionRecord
from ticketq.data_models.result import EngineError, EngineSummary, OperationResult
from ticketq.data_models.ticket import Priority, Ticket
from ticketq.data_models.violation import Violation
from ticketq.structures.action_log import ActionLog
from ticketq.structures.history import ServiceHistory
from ticketq.structures.waiting_queue import WaitingQueue
from ticketq.validation.checker import InvariantChecker
from ticketq.validation.validator import RequestValidator

logger = logging.getLogger("ticketq.engine")


class SchedulingEngine:
    """
    Service-ticket intake engine.

    Owns the waiting queue, the single service slot, the service history,
    the action log and the consecutive-normal counter of the dispatch
    policy. All mutations go through the public operations, each of which
    runs under one lock guarding the five fields together. Failures are
    returned as ``OperationResult`` values and leave the state untouched.
    """

    def __init__(
        self,
        boost_threshold: int = PRIORITY_BOOST_THRESHOLD,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize an empty engine.

        Args:
            boost_threshold: NORMAL services in a row before an URGENT ticket
                is pulled ahead of the queue
            clock: Zero-argument callable returning the current time
        """
        if boost_threshold < MIN_BOOST_THRESHOLD:
            raise ValueError(
                f"boost_threshold must be >= {MIN_BOOST_THRESHOLD}, got {boost_threshold}"
            )
        self.boost_threshold = boost_threshold
        self._clock = clock or datetime.now

        # State variables
        self.queue = WaitingQueue()
        self.history = ServiceHistory()
        self.action_log = ActionLog()
        self.in_service: Ticket | None = None
        self._consecutive_normal_served = 0

        self._validator = RequestValidator()
        self._checker = InvariantChecker()
        self._lock = threading.RLock()

    @property
    def consecutive_normal_served(self) -> int:
        """NORMAL tickets served in a row since the last priority boost."""
        return self._consecutive_normal_served

    # ------------------------------------------------------------------
    # Mutating operations
    # ------------------------------------------------------------------

    def enqueue(self, ticket: Ticket) -> OperationResult:
        """
        Add a ticket at the tail of the waiting queue and log ADD.

        Args:
            ticket: New ticket; its id must not already be known to the engine

        Returns:
            Success carrying the ticket, or an INVALID_INPUT failure
        """
        with self._lock:
            valid, failure = self._validator.validate_enqueue(
                ticket, self.queue, self.in_service, self.history
            )
            if not valid:
                return failure

            self.queue.enqueue(ticket)
            record = self._log(ActionKind.ADD, ticket)
            logger.info("Enqueued %s (%d waiting)", ticket, self.queue.size())
            return OperationResult.success(ticket=ticket, action=record)

    def remove_waiting(self, ticket_id: str) -> OperationResult:
        """
        Remove a waiting ticket by id and log REMOVE.

        Returns:
            Success carrying the removed ticket, or a NOT_FOUND failure
        """
        with self._lock:
            ticket = self.queue.remove_by_id(ticket_id)
            if ticket is None:
                logger.warning("Cannot remove %r: not waiting", ticket_id)
                return OperationResult.failure(
                    EngineError.NOT_FOUND, f"ticket {ticket_id!r} is not waiting"
                )

            record = self._log(ActionKind.REMOVE, ticket)
            logger.info("Removed %s from the queue", ticket)
            return OperationResult.success(ticket=ticket, action=record)

    def dispatch_next(self) -> OperationResult:
        """
        Pull the next ticket into the service slot.

        Policy:
        1. Below the boost threshold, serve strictly FIFO; a NORMAL ticket
           bumps the counter, an URGENT one leaves it alone
        2. At or above the threshold, serve the oldest URGENT ticket and
           reset the counter; with no URGENT waiting, fall back to FIFO
           and keep counting NORMALs
        3. Stamp the service start, occupy the slot, append to history,
           log SERVE

        Returns:
            Success carrying the dispatched ticket, or a SLOT_OCCUPIED /
            EMPTY_QUEUE failure
        """
        with self._lock:
            valid, failure = self._validator.validate_dispatch(self.queue, self.in_service)
            if not valid:
                return failure

            ticket = self._select_next()
            ticket.service_start_time = self._clock()
            self.in_service = ticket
            self.history.append(ticket)
            record = self._log(ActionKind.SERVE, ticket)

            logger.info(
                "Dispatched %s (streak=%d, %d waiting)",
                ticket,
                self._consecutive_normal_served,
                self.queue.size(),
            )
            return OperationResult.success(ticket=ticket, action=record)

    def finish_service(self, diagnosis: str) -> OperationResult:
        """
        Record the diagnosis for the in-service ticket and free the slot.

        The ticket was already added to history when it was dispatched; it
        is only appended again if an undo took that entry away.

        Args:
            diagnosis: Non-blank diagnosis text

        Returns:
            Success carrying the finished ticket, or an INVALID_INPUT /
            NOT_FOUND failure
        """
        with self._lock:
            valid, failure = self._validator.validate_finish(self.in_service, diagnosis)
            if not valid:
                return failure

            ticket = self.in_service
            ticket.diagnosis = diagnosis.strip()
            if not self.history.contains_instance(ticket):
                self.history.append(ticket)
            record = self._log(ActionKind.FINISH, ticket)
            self.in_service = None

            logger.info("Finished service for %s", ticket)
            return OperationResult.success(ticket=ticket, action=record)

    def undo_last(self) -> OperationResult:
        """
        Reverse the most recent logged action.

        - ADD: drop the ticket from the queue
        - REMOVE: put the ticket back at the queue tail (its old position
          is not restored)
        - SERVE: take the ticket out of history and the slot, clear its
          service start, put it back at the queue head, and give back one
          NORMAL from the counter (never below zero)
        - FINISH: take the ticket out of history and put it back in the
          slot; its diagnosis is kept

        Returns:
            Success carrying the undone record, or a NOTHING_TO_UNDO failure
        """
        with self._lock:
            valid, failure = self._validator.validate_undo(self.action_log)
            if not valid:
                return failure

            record = self.action_log.pop()
            ticket = record.ticket

            if record.kind == ActionKind.ADD:
                self.queue.remove_instance(ticket)

            elif record.kind == ActionKind.REMOVE:
                self.queue.enqueue(ticket)

            elif record.kind == ActionKind.SERVE:
                self.history.remove_by_identity(ticket)
                ticket.service_start_time = None
                self.queue.push_front(ticket)
                if self.in_service is ticket:
                    self.in_service = None
                if not ticket.is_urgent:
                    self._consecutive_normal_served = max(
                        0, self._consecutive_normal_served - 1
                    )

            elif record.kind == ActionKind.FINISH:
                self.history.remove_by_identity(ticket)
                self.in_service = ticket

            else:
                raise AssertionError(f"Unhandled action kind: {record.kind!r}")

            logger.info("Undid %s", record)
            return OperationResult.success(ticket=ticket, action=record)

    def reset_priority_counter(self) -> None:
        """Administrative reset of the consecutive-normal counter. Not logged."""
        with self._lock:
            logger.info(
                "Priority counter reset (was %d)", self._consecutive_normal_served
            )
            self._consecutive_normal_served = 0

    def clear(self) -> None:
        """Drop all tickets, history and log entries, and reset the counter."""
        with self._lock:
            self.queue.clear()
            self.history.clear()
            self.action_log.clear()
            self.in_service = None
            self._consecutive_normal_served = 0
            logger.info("Engine state cleared")

    # ------------------------------------------------------------------
    # Read accessors
    # ------------------------------------------------------------------

    def queue_length(self) -> int:
        with self._lock:
            return self.queue.size()

    def waiting_tickets(self) -> list[Ticket]:
        with self._lock:
            return self.queue.snapshot()

    def in_service_ticket(self) -> Ticket | None:
        with self._lock:
            return self.in_service

    def history_all(self) -> list[Ticket]:
        with self._lock:
            return self.history.snapshot()

    def history_by_type(self, request_type: str) -> list[Ticket]:
        with self._lock:
            return self.history.filter_by_request_type(request_type)

    def history_by_id(self, ticket_id: str) -> Ticket | None:
        with self._lock:
            return self.history.find_by_id(ticket_id)

    def served_count(self) -> int:
        with self._lock:
            return self.history.count()

    def average_wait_minutes(self) -> float:
        with self._lock:
            return self.history.average_wait_minutes()

    def action_log_reversed(self) -> list[ActionRecord]:
        with self._lock:
            return self.action_log.reversed()

    def last_action(self) -> ActionRecord | None:
        """The action ``undo_last`` would reverse next, without popping it."""
        with self._lock:
            return self.action_log.peek()

    def get_state_summary(self) -> EngineSummary:
        """
        Get a summary of the current engine state.

        Returns:
            EngineSummary with queue, history and counter figures
        """
        with self._lock:
            return EngineSummary(
                waiting=self.queue.size(),
                urgent_waiting=self.queue.count_priority(Priority.URGENT),
                served=self.history.count(),
                urgent_served=len(self.history.served_by_priority(Priority.URGENT)),
                in_service_id=self.in_service.id if self.in_service is not None else None,
                consecutive_normal_served=self._consecutive_normal_served,
                logged_actions=self.action_log.size(),
                average_wait_minutes=self.history.average_wait_minutes(),
            )

    def export_state(self) -> dict:
        """Snapshot of queue, slot, history and counter for invariant checks."""
        with self._lock:
            return {
                "queue": self.queue.snapshot(),
                "in_service": self.in_service,
                "history": self.history.snapshot(),
                "consecutive_normal_served": self._consecutive_normal_served,
            }

    def check_invariants(self) -> list[Violation]:
        return self._checker.check(self.export_state())

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _select_next(self) -> Ticket:
        """Apply the dispatch policy. The queue is known to be non-empty."""
        if self._consecutive_normal_served >= self.boost_threshold:
            urgent = self.queue.extract_first_urgent()
            if urgent is not None:
                logger.debug(
                    "Priority boost after %d normals: %s",
                    self._consecutive_normal_served,
                    urgent,
                )
                self._consecutive_normal_served = 0
                return urgent
            logger.debug("Boost threshold reached but no urgent waiting; serving FIFO")

        ticket = self.queue.pop_oldest()
        if not ticket.is_urgent:
            self._consecutive_normal_served += 1
        return ticket

    def _log(self, kind: ActionKind, ticket: Ticket) -> ActionRecord:
        record = ActionRecord(kind=kind, ticket=ticket, timestamp=self._clock())
        self.action_log.push(record)
        return record
