"""Wakers that record how often they were signalled."""

from __future__ import annotations


class CountingWaker:
    """Waker that counts `wake()` calls."""

    def __init__(self, name: str = "") -> None:
        """Start with zero signals."""
        self.name = name
        self.wake_count = 0

    @property
    def woken(self) -> bool:
        """Whether the waker has been signalled at least once."""
        return self.wake_count > 0

    def wake(self) -> None:
        """Record one signal."""
        self.wake_count += 1

    def __repr__(self) -> str:
        return f"CountingWaker({self.name!r}, wake_count={self.wake_count})"
