"""Action log entry model for TicketQ."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from ticketq.data_models.ticket import Ticket


class ActionKind(str, Enum):
    ADD = "add"
    REMOVE = "remove"
    SERVE = "serve"
    FINISH = "finish"


class ActionRecord(BaseModel):
    """
    One reversible mutation of the engine state.

    Records are created together with the mutation they document and are
    never modified afterwards. The ticket is a shared reference to the
    instance the engine holds, not a copy.
    """

    model_config = ConfigDict(frozen=True)

    kind: ActionKind = Field(description="Which mutation happened")
    ticket: Ticket = Field(description="The ticket affected by the mutation")
    timestamp: datetime = Field(default_factory=datetime.now, description="Creation time")

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Action({self.kind.value} {self.ticket.id} @ {self.timestamp:%H:%M:%S})"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return (
            f"ActionRecord(kind={self.kind.value!r}, ticket={self.ticket.id!r}, "
            f"timestamp={self.timestamp.isoformat()!r})"
        )
