"""Constructors for a paired writer and reader sharing one ring."""

from __future__ import annotations

from typing import Any

from .config import DEFAULT_CAPACITY, PipeConfig
from .endpoints import Reader, Writer
from .ring import RingState


def pipe_from_config(config: PipeConfig) -> tuple[Writer, Reader]:
    """Create a pipe described by `config`."""
    ring = RingState(capacity=config.capacity, strict_wakers=config.strict_wakers)
    writer = Writer(ring, wake_on_drop=config.wake_on_drop)
    reader = Reader(ring, wake_on_drop=config.wake_on_drop)
    return writer, reader


def pipe(capacity: int = DEFAULT_CAPACITY, **options: Any) -> tuple[Writer, Reader]:
    """
    Create a bounded in-process byte pipe.

    Args:
        capacity: Size of the backing store in bytes (non-negative).
        **options: Remaining `PipeConfig` fields (`wake_on_drop`, `strict_wakers`).

    Returns:
        The writer and reader ends, sharing one ring.

    Raises:
        pydantic.ValidationError: If the capacity or an option is invalid.
    """
    return pipe_from_config(PipeConfig(capacity=capacity, **options))
