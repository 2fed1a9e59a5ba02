"""
Wake-up tokens and poll results.

An endpoint operation is driven by *polling*. Each poll either completes with
a byte count or reports `PENDING` after parking the caller's waker in the
pipe. Whoever later makes progress on the other endpoint signals that waker,
and the waiting caller polls again.

Any object with a `wake()` method can act as a waker. Two are provided:

- `FutureWaker` resolves an asyncio future; the async endpoint methods await
  it between polls.
- `NoopWaker` ignores the signal, for poll callers that re-poll on their own
  schedule. `try_write`/`try_read` do not need one because they never park.
"""

from __future__ import annotations

import asyncio
from enum import Enum
from typing import Final, Protocol


class Waker(Protocol):
    """Token that causes the originating task to be polled again."""

    def wake(self) -> None:
        """Signal the task. May be called after the task stopped waiting."""
        ...


class Pending(Enum):
    """Outcome of a poll that made no progress."""

    PENDING = "pending"

    def __repr__(self) -> str:
        return "PENDING"


PENDING: Final = Pending.PENDING
"""The single pending marker returned by `poll_read` / `poll_write`."""

Poll = int | Pending
"""Result of one poll: a ready byte count or `PENDING`."""


class NoopWaker:
    """Waker that discards every signal."""

    __slots__ = ()

    def wake(self) -> None:
        """Do nothing."""

    def __repr__(self) -> str:
        return "NoopWaker()"


NOOP_WAKER: Final = NoopWaker()
"""Shared no-op waker instance."""


class FutureWaker:
    """
    Waker backed by an asyncio future.

    Signalling resolves the future, which resumes the coroutine awaiting it.
    Signalling a future that is already done (resolved or cancelled) is a
    no-op, so a stale waker left in the slot by a cancelled task is harmless.
    """

    __slots__ = ("_future",)

    def __init__(self, future: asyncio.Future[None]) -> None:
        """Wrap the given future."""
        self._future = future

    @classmethod
    def for_running_loop(cls) -> FutureWaker:
        """Create a waker around a fresh future on the running event loop."""
        return cls(asyncio.get_running_loop().create_future())

    @property
    def future(self) -> asyncio.Future[None]:
        """The future resolved by `wake()`."""
        return self._future

    @property
    def woken(self) -> bool:
        """True once the waker has been signalled (or its future finished)."""
        return self._future.done()

    def wake(self) -> None:
        """Resolve the future if nobody has resolved or cancelled it yet."""
        if not self._future.done():
            self._future.set_result(None)

    def __repr__(self) -> str:
        return f"FutureWaker(woken={self.woken})"
