"""Events recorded by the pool and router for off-chain observers.

Each event carries the economically meaningful quantities of one operation.
The log is a participant in atomic execution: a rolled-back call leaves no
events behind.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class Deposit:
    """Shares minted against newly deposited reserves."""

    sender: str
    recipient: str
    amount_native: int
    amount_token: int
    shares: int


@dataclass(frozen=True)
class Withdraw:
    """Shares burned and reserves paid out."""

    sender: str
    recipient: str
    amount_native: int
    amount_token: int
    shares: int


@dataclass(frozen=True)
class Swap:
    """Net amounts that entered and left the pool in one swap."""

    sender: str
    recipient: str
    amount_native_in: int
    amount_token_in: int
    amount_native_out: int
    amount_token_out: int


@dataclass(frozen=True)
class Sync:
    """Recorded reserves after any reserve update."""

    reserve_native: int
    reserve_token: int


@dataclass(frozen=True)
class SharesTransferred:
    """Share ownership moved (mint and burn use the zero address)."""

    sender: str
    recipient: str
    amount: int


@dataclass(frozen=True)
class Refund:
    """Excess native value returned to a router caller."""

    recipient: str
    amount: int


Event = Deposit | Withdraw | Swap | Sync | SharesTransferred | Refund


class EventLog:
    """Append-only list of events with snapshot/restore by position.

    Unbounded by default, so it doubles as a full audit trail for the life of
    a deployment. With `max_events` set, the oldest events are dropped once
    the log is full; positions keep counting every event ever emitted, so
    snapshots taken before a drop still restore correctly.
    """

    def __init__(self, max_events: int | None = None) -> None:
        if max_events is not None and max_events <= 0:
            raise ValueError(f"max_events must be positive, got {max_events}")
        self._events: list[Event] = []
        self._max_events = max_events
        self._dropped = 0

    @property
    def dropped(self) -> int:
        """Number of old events discarded to respect max_events."""
        return self._dropped

    def emit(self, event: Event) -> None:
        self._events.append(event)
        if self._max_events is not None and len(self._events) > self._max_events:
            overflow = len(self._events) - self._max_events
            del self._events[:overflow]
            self._dropped += overflow

    def of_type(self, event_type: type) -> list[Event]:
        """Return all retained events of the given class, oldest first."""
        return [e for e in self._events if isinstance(e, event_type)]

    def last(self, event_type: type | None = None) -> Event | None:
        """Return the most recent event (optionally of a given class)."""
        for event in reversed(self._events):
            if event_type is None or isinstance(event, event_type):
                return event
        return None

    def snapshot(self) -> int:
        return self._dropped + len(self._events)

    def restore(self, snapshot: int) -> None:
        del self._events[max(snapshot - self._dropped, 0) :]

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[Event]:
        return iter(self._events)

    def __repr__(self) -> str:
        return f"EventLog({len(self._events)} events)"
