"""All-or-nothing execution for pool and router entry points.

A participant is anything that can hand out a snapshot of its state and later
be put back into exactly that state. `atomic` snapshots every participant,
runs the body, and restores all of them if the body raises, so a failed call
leaves no partial transfers, mints or events behind.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Protocol, runtime_checkable

import structlog

logger = structlog.get_logger()


@runtime_checkable
class Stateful(Protocol):
    """Protocol for objects that can be rolled back."""

    def snapshot(self) -> Any:
        """Return an opaque copy of the current state."""
        ...

    def restore(self, snapshot: Any) -> None:
        """Replace the current state with a previously taken snapshot."""
        ...


@contextmanager
def atomic(*participants: Stateful) -> Iterator[None]:
    """Run the enclosed block as one unit of work.

    Participants are de-duplicated by identity, so passing the same ledger
    twice is harmless. Nesting is allowed: an inner failure rolls back the
    inner participants and then propagates to the outer block.

    Raises:
        Whatever the body raised, after every participant is restored.
    """
    unique: dict[int, Stateful] = {}
    for participant in participants:
        unique.setdefault(id(participant), participant)

    snapshots = [(participant, participant.snapshot()) for participant in unique.values()]
    try:
        yield
    except BaseException as err:
        for participant, snapshot in reversed(snapshots):
            participant.restore(snapshot)
        logger.debug(
            "atomic_rollback",
            error=type(err).__name__,
            participants=len(snapshots),
        )
        raise
