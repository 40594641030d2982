"""Last-in-first-out log of reversible actions."""

from ticketq.data_models.action import ActionRecord


class ActionLog:
    """Stack of ActionRecords; the top is the most recent mutation."""

    def __init__(self) -> None:
        self._records: list[ActionRecord] = []

    def push(self, record: ActionRecord) -> None:
        self._records.append(record)

    def pop(self) -> ActionRecord | None:
        return self._records.pop() if self._records else None

    def peek(self) -> ActionRecord | None:
        return self._records[-1] if self._records else None

    def reversed(self) -> list[ActionRecord]:
        """Records from most recent to oldest, as a new list."""
        return self._records[::-1]

    def clear(self) -> None:
        self._records.clear()

    def size(self) -> int:
        return len(self._records)

    def is_empty(self) -> bool:
        return not self._records

    def __len__(self) -> int:
        return len(self._records)
