"""Ticket data model for TicketQ."""

from datetime import datetime, timedelta
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Priority(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"


class Ticket(BaseModel):
    """
    One customer's service request.

    A ticket moves from intake to the waiting queue, into the service slot
    and finally into the service history. The engine passes tickets around
    by reference; two tickets are "the same" only if they are the same
    object.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: str = Field(
        min_length=1, frozen=True, description="Caller-assigned unique identifier"
    )
    name: str = Field(description="Customer name")
    request_type: str = Field(description="Kind of request, e.g. Soporte or Reclamo")
    priority: Priority = Field(default=Priority.NORMAL, description="Dispatch priority")
    problem_description: str = Field(default="", description="Problem reported at intake")
    registration_date: str | None = Field(
        default=None, description="Registration date as captured by the intake form"
    )
    diagnosis: str | None = Field(default=None, description="Set when service finishes")
    arrival_time: datetime = Field(
        default_factory=datetime.now,
        frozen=True,
        description="When the ticket entered the system",
    )
    service_start_time: datetime | None = Field(
        default=None, description="When the ticket was pulled into the service slot"
    )

    @field_validator("arrival_time", "service_start_time")
    @classmethod
    def to_local_naive(cls, v: datetime | None) -> datetime | None:
        """Store timestamps as naive local time so they compare with the engine clock."""
        if v is not None and v.tzinfo is not None:
            return v.astimezone().replace(tzinfo=None)
        return v

    @property
    def is_urgent(self) -> bool:
        return self.priority == Priority.URGENT

    def wait_minutes(self) -> int | None:
        """
        Whole minutes between arrival and service start, truncated.

        A service start earlier than the arrival (clock skew, DST change)
        counts as no wait.

        Returns:
            Truncated minutes, or None if the ticket was never served
        """
        if self.service_start_time is None:
            return None
        delta = self.service_start_time - self.arrival_time
        if delta < timedelta(0):
            return 0
        return delta // timedelta(minutes=1)

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Ticket({self.id}, {self.priority.value}, {self.request_type})"

    def __repr__(self) -> str:
        """Developer-friendly representation."""
        return (
            f"Ticket(id={self.id!r}, name={self.name!r}, "
            f"request_type={self.request_type!r}, priority={self.priority.value!r}, "
            f"service_start_time={self.service_start_time}, diagnosis={self.diagnosis!r})"
        )
