"""Invariant checker for TicketQ engine state."""

from collections import Counter

from ticketq.data_models.violation import Violation


class InvariantChecker:
    """
    Checks the cross-structure invariants of the engine state.

    Invariants:
    1. A ticket id lives in at most one of: waiting queue, service slot,
       history entries other than the in-service ticket
    2. The ticket in the service slot is not waiting in the queue
    3. The consecutive-normal counter is never negative
    """

    def check(self, engine_state: dict) -> list[Violation]:
        """
        Check all invariants against an engine state snapshot.

        Args:
            engine_state: Dictionary containing:
                - queue: list[Ticket]
                - in_service: Ticket | None
                - history: list[Ticket]
                - consecutive_normal_served: int

        Returns:
            List of violations (empty if every invariant holds)
        """
        violations = []

        violations.extend(self._check_unique_ids(engine_state))
        violations.extend(self._check_slot_not_waiting(engine_state))
        violations.extend(self._check_counter(engine_state))

        return violations

    def _check_unique_ids(self, engine_state: dict) -> list[Violation]:
        queue = engine_state["queue"]
        in_service = engine_state["in_service"]
        # The in-service ticket is recorded in history at dispatch time;
        # that entry is the same placement, not a second one.
        history = [t for t in engine_state["history"] if t is not in_service]

        placements = [t.id for t in queue] + [t.id for t in history]
        if in_service is not None:
            placements.append(in_service.id)

        return [
            Violation(type="duplicate_id", details={"ticket_id": ticket_id, "count": count})
            for ticket_id, count in Counter(placements).items()
            if count > 1
        ]

    def _check_slot_not_waiting(self, engine_state: dict) -> list[Violation]:
        in_service = engine_state["in_service"]
        if in_service is None:
            return []
        if any(t is in_service for t in engine_state["queue"]):
            return [Violation(type="slot_in_queue", details={"ticket_id": in_service.id})]
        return []

    def _check_counter(self, engine_state: dict) -> list[Violation]:
        counter = engine_state["consecutive_normal_served"]
        if counter < 0:
            return [Violation(type="negative_counter", details={"value": counter})]
        return []
