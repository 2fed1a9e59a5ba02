"""
Writer and reader endpoints of a pipe.

Each endpoint offers three layers over the shared `RingState`:

1. Poll API (`poll_write`, `poll_read`): one non-blocking attempt. Returns a
   byte count, or parks the given waker and returns `PENDING`.
2. Async API (`write`, `readinto`, `read`): polls with a `FutureWaker` and
   awaits it until the poll is ready. Drives on any asyncio event loop.
3. Convenience (`write_all`, `readexactly`, `try_write`, `try_read`):
   loops over, or single-shot forms of, the above.

A single transfer never crosses the wrap point of the store, so a write may
accept fewer bytes than offered and a read may deliver fewer than the buffer
holds even though more are buffered. Loop, or use `write_all`/`readexactly`.

Both endpoints must be driven from the same event loop. There is one waker
slot per pipe: if both endpoints wait at once, the later park replaces the
earlier waker, whose task is then never woken.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from types import TracebackType
from typing import ClassVar, Self

from .exceptions import EndpointDroppedError
from .ring import RingState, Side
from .waker import PENDING, FutureWaker, Pending, Poll, Waker

BytesLike = bytes | bytearray | memoryview
"""Read-only byte buffers accepted by the writer."""

WritableBuffer = bytearray | memoryview
"""Mutable byte buffers filled by the reader."""


def _byte_view(buffer: BytesLike) -> memoryview:
    """View any contiguous buffer as a flat sequence of unsigned bytes."""
    view = memoryview(buffer)
    if view.format != "B" or view.ndim != 1:
        view = view.cast("B")
    return view


class _Endpoint:
    """State and lifecycle shared by both endpoints."""

    __slots__ = ("_ring", "_wake_on_drop")

    side: ClassVar[Side]
    """Which end of the pipe this is."""

    def __init__(self, ring: RingState, *, wake_on_drop: bool = True) -> None:
        """Attach the endpoint to the shared ring state."""
        self._ring: RingState | None = ring
        self._wake_on_drop = wake_on_drop

    def _state(self, operation: str) -> RingState:
        ring = self._ring
        if ring is None:
            raise EndpointDroppedError(self.side.value, operation)
        return ring

    @property
    def capacity(self) -> int:
        """Size of the pipe's backing store."""
        return self._state("query capacity").capacity

    @property
    def buffered(self) -> int:
        """Bytes currently held in the pipe."""
        return self._state("query buffered bytes").buffered

    @property
    def is_dropped(self) -> bool:
        """True once this endpoint has been dropped."""
        return self._ring is None

    @property
    def is_peer_dropped(self) -> bool:
        """True once the other endpoint has been dropped."""
        peer = Side.READER if self.side is Side.WRITER else Side.WRITER
        return peer in self._state("query peer").dropped

    def drop(self) -> None:
        """
        Release this endpoint's handle on the shared state.

        Further operations on this endpoint raise `EndpointDroppedError`. The
        other endpoint keeps working. Dropping twice is a no-op.
        """
        ring = self._ring
        if ring is None:
            return
        self._ring = None
        ring.release(self.side, wake=self._wake_on_drop)

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.drop()

    async def _drive(self, poll: Callable[[Waker], Poll]) -> int:
        """Poll until ready, awaiting a fresh waker after every pending result."""
        while True:
            waker = FutureWaker.for_running_loop()
            result = poll(waker)
            if not isinstance(result, Pending):
                return result

            try:
                await waker.future
            except asyncio.CancelledError:
                # Leave no dead waker behind for the other endpoint to trip over.
                if self._ring is not None:
                    self._ring.unpark(waker)
                raise

    def __repr__(self) -> str:
        if self._ring is None:
            return f"{self.__class__.__name__}(dropped)"
        return (
            f"{self.__class__.__name__}("
            f"buffered={self._ring.buffered}, capacity={self._ring.capacity})"
        )


class Writer(_Endpoint):
    """Producing end of a pipe."""

    __slots__ = ()

    side = Side.WRITER

    def _transfer(self, ring: RingState, view: memoryview) -> int:
        """Copy as much of `view` as fits in one contiguous span."""
        n = min(ring.writable(), len(view))
        if n == 0:
            return 0

        begin = ring.physical(ring.write_idx)
        ring.data[begin : begin + n] = view[:n]
        ring.advance_write(n)
        ring.wake()
        return n

    def poll_write(self, data: BytesLike, waker: Waker) -> Poll:
        """
        Attempt to deposit a prefix of `data` without suspending.

        Args:
            data: Bytes to write.
            waker: Signalled once space frees up, if this poll is pending.

        Returns:
            Number of bytes accepted (0 for empty `data` when space is
            available), or `PENDING` after parking `waker` when the pipe has
            no contiguous space.
        """
        ring = self._state("write")
        view = _byte_view(data)
        if len(view) == 0 and ring.writable() > 0:
            return 0

        n = self._transfer(ring, view)
        if n == 0:
            ring.park(waker, Side.WRITER)
            return PENDING
        return n

    def try_write(self, data: BytesLike) -> int:
        """Write what fits right now without parking. Returns 0 when full."""
        return self._transfer(self._state("write"), _byte_view(data))

    async def write(self, data: BytesLike) -> int:
        """
        Write a prefix of `data`, waiting until at least one byte fits.

        Returns:
            Bytes accepted; at most one contiguous span of the store.
        """
        return await self._drive(lambda waker: self.poll_write(data, waker))

    async def write_all(self, data: BytesLike) -> None:
        """Write every byte of `data`, waiting for space as often as needed."""
        view = _byte_view(data)
        offset = 0
        while offset < len(view):
            offset += await self.write(view[offset:])

    async def flush(self) -> None:
        """Complete immediately; the ring is the only buffer."""

    async def close(self) -> None:
        """
        Complete immediately without ending the stream.

        The reader is not told anything. Use `drop()` to release the endpoint.
        """


class Reader(_Endpoint):
    """Consuming end of a pipe."""

    __slots__ = ()

    side = Side.READER

    def _transfer(self, ring: RingState, view: memoryview) -> int:
        """Fill the front of `view` from one contiguous span of buffered bytes."""
        n = min(ring.readable(), len(view))
        if n == 0:
            return 0

        begin = ring.physical(ring.read_idx)
        view[:n] = ring.data[begin : begin + n]
        ring.advance_read(n)
        ring.wake()
        return n

    def poll_read(self, buf: WritableBuffer, waker: Waker) -> Poll:
        """
        Attempt to fill the front of `buf` without suspending.

        Args:
            buf: Destination buffer; only its first `n` bytes are touched.
            waker: Signalled once bytes arrive, if this poll is pending.

        Returns:
            Number of bytes delivered (0 for an empty `buf` when bytes are
            available), or `PENDING` after parking `waker` when the pipe is empty.
        """
        ring = self._state("read")
        view = _byte_view(buf)
        if len(view) == 0 and ring.readable() > 0:
            return 0

        n = self._transfer(ring, view)
        if n == 0:
            ring.park(waker, Side.READER)
            return PENDING
        return n

    def try_read(self, n: int) -> bytes:
        """Read up to `n` bytes available right now without parking."""
        if n < 0:
            raise ValueError(f"Read size must be non-negative, got {n}")
        buf = bytearray(n)
        got = self._transfer(self._state("read"), memoryview(buf))
        return bytes(buf[:got])

    async def readinto(self, buf: WritableBuffer) -> int:
        """
        Fill the front of `buf`, waiting until at least one byte is available.

        Returns:
            Bytes delivered; at most one contiguous span of the store.
        """
        return await self._drive(lambda waker: self.poll_read(buf, waker))

    async def read(self, n: int) -> bytes:
        """Read up to `n` bytes, waiting until at least one is available."""
        if n < 0:
            raise ValueError(f"Read size must be non-negative, got {n}")
        buf = bytearray(n)
        got = await self.readinto(buf)
        return bytes(buf[:got])

    async def readexactly(self, n: int) -> bytes:
        """
        Read exactly `n` bytes, waiting across as many transfers as needed.

        There is no end of stream, so this waits forever if the writer never
        supplies enough bytes. Bound it with `asyncio.wait_for` if needed.
        """
        if n < 0:
            raise ValueError(f"Read size must be non-negative, got {n}")
        buf = bytearray(n)
        view = memoryview(buf)
        offset = 0
        while offset < n:
            offset += await self.readinto(view[offset:])
        return bytes(buf)
