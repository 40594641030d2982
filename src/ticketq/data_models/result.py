"""Result data models returned across the engine boundary."""

from enum import Enum

from pydantic import BaseModel, Field

from ticketq.data_models.action import ActionRecord
from ticketq.data_models.ticket import Ticket


class EngineError(str, Enum):
    NOT_FOUND = "not_found"
    EMPTY_QUEUE = "empty_queue"
    SLOT_OCCUPIED = "slot_occupied"
    INVALID_INPUT = "invalid_input"
    NOTHING_TO_UNDO = "nothing_to_undo"


class OperationResult(BaseModel):
    """
    Outcome of an engine operation.

    Failures are values, not exceptions: ``ok`` is False and ``error`` names
    the reason. A result is truthy exactly when the operation succeeded.
    """

    ok: bool = Field(description="True if the operation was applied")
    error: EngineError | None = Field(default=None, description="Failure reason")
    ticket: Ticket | None = Field(default=None, description="Ticket the operation touched")
    action: ActionRecord | None = Field(
        default=None, description="Log entry pushed or undone by the operation"
    )
    message: str = Field(default="", description="Short diagnostic text for logs")

    @classmethod
    def success(
        cls,
        ticket: Ticket | None = None,
        action: ActionRecord | None = None,
        message: str = "",
    ) -> "OperationResult":
        return cls(ok=True, ticket=ticket, action=action, message=message)

    @classmethod
    def failure(cls, error: EngineError, message: str = "") -> "OperationResult":
        return cls(ok=False, error=error, message=message)

    def __bool__(self) -> bool:
        return self.ok

    def __str__(self) -> str:
        """Human-readable string representation."""
        if self.ok:
            target = f" {self.ticket.id}" if self.ticket is not None else ""
            return f"OK{target}"
        return f"FAILED {self.error.value}: {self.message}"


class EngineSummary(BaseModel):
    """Point-in-time counters describing the engine state."""

    waiting: int = Field(ge=0, description="Tickets in the waiting queue")
    urgent_waiting: int = Field(ge=0, description="URGENT tickets in the waiting queue")
    served: int = Field(ge=0, description="Tickets in the service history")
    urgent_served: int = Field(ge=0, description="URGENT tickets in the service history")
    in_service_id: str | None = Field(default=None, description="Ticket currently in service")
    consecutive_normal_served: int = Field(ge=0, description="Dispatch policy counter")
    logged_actions: int = Field(ge=0, description="Entries in the action log")
    average_wait_minutes: float = Field(ge=0, description="Mean truncated wait")

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"EngineSummary(waiting={self.waiting} ({self.urgent_waiting} urgent), "
            f"served={self.served}, in_service={self.in_service_id}, "
            f"streak={self.consecutive_normal_served}, "
            f"avg_wait={self.average_wait_minutes:.1f}m)"
        )
