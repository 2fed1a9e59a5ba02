"""
Bounded single-producer/single-consumer byte pipe for asyncio.

Usage::

    from ring_pipe import pipe

    writer, reader = pipe(4096)

    await writer.write_all(b"hello")
    data = await reader.readexactly(5)

A full pipe suspends the writer and an empty one suspends the reader; each
side's progress wakes the other. Both ends must run on the same event loop.
"""

from __future__ import annotations

from .config import DEFAULT_CAPACITY, PipeConfig
from .endpoints import Reader, Writer
from .exceptions import EndpointDroppedError, PipeError, WakerDisplacedError
from .pipe import pipe, pipe_from_config
from .ring import RingState, Side
from .waker import NOOP_WAKER, PENDING, FutureWaker, NoopWaker, Pending, Poll, Waker

__all__ = [
    # Constructors
    "pipe",
    "pipe_from_config",
    # Endpoints
    "Writer",
    "Reader",
    # Ring state
    "RingState",
    "Side",
    # Polling
    "Waker",
    "FutureWaker",
    "NoopWaker",
    "NOOP_WAKER",
    "Pending",
    "PENDING",
    "Poll",
    # Configuration
    "PipeConfig",
    "DEFAULT_CAPACITY",
    # Errors
    "PipeError",
    "EndpointDroppedError",
    "WakerDisplacedError",
]
