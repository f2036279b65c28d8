"""Step trace infrastructure - separate from transformer state.

A trace records which transformers were stepped, in which order, with
what input and output. It is how effect ordering is made observable:
a traced transformer that is skipped leaves no record for that step.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


@dataclass(frozen=True)
class Evidence:
    """A single recorded step.

    Attributes:
        action: Label of the transformer that was stepped
        id: Sequence number within the trace
        timestamp: Wall-clock time of the record
        info: Additional context, typically ``input`` and ``output``
    """

    action: str
    id: int = 0
    timestamp: datetime = field(default_factory=lambda: datetime.now(UTC))
    info: dict[str, Any] = field(default_factory=dict)


class Trace:
    """Mutable recorder of step evidence.

    A trace is shared by every transformer it is handed to, and outlives
    the immutable transformer values that write to it. Evidence append
    is O(1); a disabled trace records nothing.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._events: list[Evidence] = []
        self._next_id: int = 0

    def record(self, action: str, info: dict[str, Any] | None = None) -> int | None:
        """Record an evidence event.

        Args:
            action: What was stepped (e.g., "counter", "fallback")
            info: Additional context

        Returns:
            Event ID, or None if tracing disabled
        """
        if not self.enabled:
            return None

        event_id = self._next_id
        self._next_id += 1
        self._events.append(
            Evidence(
                action=action,
                id=event_id,
                timestamp=datetime.now(UTC),
                info=info or {},
            )
        )
        return event_id

    def get_events(self) -> list[Evidence]:
        """Get all recorded events."""
        return list(self._events)

    def actions(self) -> list[str]:
        """Get the recorded action labels in order."""
        return [ev.action for ev in self._events]

    def __len__(self) -> int:
        return len(self._events)

    def clear(self) -> None:
        """Clear all events (for reuse)."""
        self._events.clear()
        self._next_id = 0
