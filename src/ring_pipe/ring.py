"""
Shared ring state behind a pipe.

The backing store is a fixed `bytearray`. Two cursors track the logical read
and write positions, and a single slot holds the waker of whichever endpoint
last had to wait.


DOUBLED MODULUS
---------------
Cursors live in `[0, 2 * capacity)` while physical positions are the cursor
reduced modulo `capacity`. Using twice the range keeps "empty" and "full"
apart without sacrificing a slot::

    empty:  read_idx == write_idx
    full:   (write_idx - read_idx) mod 2*capacity == capacity

Example with capacity 4 after writing 4 bytes::

    read_idx = 0, write_idx = 4        -> buffered = 4 (full)
    physical:  [A B C D]
                ^ read and write both at physical 0


CONTIGUOUS SPANS
----------------
`readable()` and `writable()` report only the span that ends at the physical
end of the store. A transfer never wraps around; the caller polls again for
the rest::

    capacity 6, read at 4, write at 2 (wrapped)
    physical:  [x x . . x x]
                    ^w  ^r
    readable() == 2     (positions 4..5, not 4..5 + 0..1)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from .exceptions import WakerDisplacedError
from .waker import Waker

logger = logging.getLogger(__name__)


class Side(Enum):
    """The two endpoints of a pipe."""

    WRITER = "writer"
    READER = "reader"


@dataclass(slots=True)
class RingState:
    """
    Backing store, cursors and waker slot shared by a writer and a reader.

    Not thread-safe. Every method runs to completion without suspending, so
    a single event loop driving both endpoints never observes a half-applied
    update.
    """

    capacity: int
    """Size of the backing store in bytes."""

    strict_wakers: bool = False
    """Raise `WakerDisplacedError` instead of warning on a cross-endpoint park."""

    data: bytearray = field(init=False, repr=False)
    """Backing store of exactly `capacity` bytes."""

    read_idx: int = 0
    """Read cursor in `[0, 2 * capacity)`."""

    write_idx: int = 0
    """Write cursor in `[0, 2 * capacity)`."""

    waker: Waker | None = None
    """Waker of the endpoint that last reported pending, if any."""

    waker_side: Side | None = None
    """Endpoint that owns `waker`."""

    total_written: int = 0
    """Bytes accepted from the writer over the pipe's lifetime."""

    total_read: int = 0
    """Bytes delivered to the reader over the pipe's lifetime."""

    dropped: set[Side] = field(default_factory=set)
    """Endpoints that have released their handle on this state."""

    def __post_init__(self) -> None:
        """Allocate the backing store."""
        if self.capacity < 0:
            raise ValueError(f"Ring capacity must be non-negative, got {self.capacity}")
        self.data = bytearray(self.capacity)

    # -----------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------

    def physical(self, idx: int) -> int:
        """Reduce a cursor to a position in `data`."""
        if idx >= self.capacity:
            idx -= self.capacity
        return idx

    @property
    def buffered(self) -> int:
        """Number of bytes written but not yet read."""
        write_idx = self.write_idx
        if write_idx < self.read_idx:
            write_idx += 2 * self.capacity
        return write_idx - self.read_idx

    def __len__(self) -> int:
        return self.buffered

    @property
    def is_empty(self) -> bool:
        """True when no bytes are buffered."""
        return self.read_idx == self.write_idx

    @property
    def is_full(self) -> bool:
        """True when every byte of the store is occupied."""
        return self.buffered == self.capacity

    @property
    def has_waker(self) -> bool:
        """True when an endpoint is parked."""
        return self.waker is not None

    def readable(self) -> int:
        """Bytes readable in one contiguous span from the read position."""
        if self.read_idx == self.write_idx:
            return 0

        read_pos = self.physical(self.read_idx)
        write_pos = self.physical(self.write_idx)
        if read_pos < write_pos:
            # [x r x w]
            #     ^-^
            return write_pos - read_pos

        # Data wraps; stop at the end of the store.
        # [w x x r x x]
        #        ^---^
        return self.capacity - read_pos

    def writable(self) -> int:
        """Bytes writable in one contiguous span from the write position."""
        free = self.capacity - self.buffered
        space_before_end = self.capacity - self.physical(self.write_idx)
        return min(free, space_before_end)

    # -----------------------------------------------------------------
    # Mutations
    # -----------------------------------------------------------------

    def advance_read(self, n: int) -> None:
        """
        Move the read cursor past `n` consumed bytes.

        Raises:
            ValueError: If `n` is negative or exceeds `readable()`.
        """
        if not 0 <= n <= self.readable():
            raise ValueError(f"Cannot advance read by {n}: only {self.readable()} readable")
        self.read_idx = self._advance(self.read_idx, n)
        self.total_read += n

    def advance_write(self, n: int) -> None:
        """
        Move the write cursor past `n` produced bytes.

        Raises:
            ValueError: If `n` is negative or exceeds `writable()`.
        """
        if not 0 <= n <= self.writable():
            raise ValueError(f"Cannot advance write by {n}: only {self.writable()} writable")
        self.write_idx = self._advance(self.write_idx, n)
        self.total_written += n

    def _advance(self, idx: int, n: int) -> int:
        idx += n
        if idx >= 2 * self.capacity:
            idx -= 2 * self.capacity
        return idx

    def park(self, waker: Waker, side: Side) -> None:
        """
        Store `waker` in the slot, replacing any previous one unsignalled.

        An endpoint re-parking over its own waker is routine: it was polled
        again before any progress. Replacing the *other* endpoint's waker
        means both sides wait at once and the earlier task is lost.

        Raises:
            WakerDisplacedError: On a cross-endpoint replacement in strict mode.
        """
        if self.waker is not None and self.waker_side is not side:
            assert self.waker_side is not None
            if self.strict_wakers:
                raise WakerDisplacedError(side.value, self.waker_side.value)
            logger.warning(
                "%s parked over the %s waker; the %s task will not be woken",
                side.value,
                self.waker_side.value,
                self.waker_side.value,
            )

        self.waker = waker
        self.waker_side = side
        logger.debug("%s parked (buffered=%d/%d)", side.value, self.buffered, self.capacity)

    def unpark(self, waker: Waker) -> bool:
        """Clear the slot if it still holds `waker`. Returns True if cleared."""
        if self.waker is not waker:
            return False
        self.waker = None
        self.waker_side = None
        return True

    def wake(self) -> None:
        """Take the parked waker, if any, and signal it."""
        waker = self.waker
        if waker is None:
            return

        side = self.waker_side
        self.waker = None
        self.waker_side = None
        logger.debug("waking %s", side.value if side is not None else "unknown")
        waker.wake()

    def release(self, side: Side, *, wake: bool) -> None:
        """
        Record that `side` dropped its endpoint.

        With `wake`, a parked waker is signalled so the surviving endpoint gets
        re-polled. It observes the same buffered bytes as before; no
        end-of-stream marker is produced.
        """
        self.dropped.add(side)
        logger.debug("%s dropped (buffered=%d/%d)", side.value, self.buffered, self.capacity)
        if wake:
            self.wake()
