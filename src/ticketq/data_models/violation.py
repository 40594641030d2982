"""Violation data model for broken engine invariants."""

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """
    Represents an invariant that does not hold for the current engine state.

    A healthy engine never produces violations; they exist so that tests and
    diagnostics can check the state after arbitrary operation sequences.
    """

    type: str = Field(
        description="Type of violation: duplicate_id, slot_in_queue, negative_counter"
    )
    details: dict = Field(
        default_factory=dict,
        description="Additional context: ticket_id, locations, counter value, etc."
    )

    def __str__(self) -> str:
        """Human-readable string representation."""
        details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
        return f"{self.type}: {details_str}"
