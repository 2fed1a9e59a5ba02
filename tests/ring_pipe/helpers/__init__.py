"""Test helpers for ring_pipe tests."""

from __future__ import annotations

from ring_pipe import RingState

from .model import PipeModel
from .wakers import CountingWaker


def assert_ring_invariants(ring: RingState) -> None:
    """Check the cursor and occupancy invariants that hold between operations."""
    assert len(ring.data) == ring.capacity
    if ring.capacity == 0:
        assert ring.read_idx == 0
        assert ring.write_idx == 0
    else:
        assert 0 <= ring.read_idx < 2 * ring.capacity
        assert 0 <= ring.write_idx < 2 * ring.capacity
    assert ring.buffered == (ring.write_idx - ring.read_idx) % max(2 * ring.capacity, 1)
    assert 0 <= ring.buffered <= ring.capacity
    assert ring.is_empty == (ring.read_idx == ring.write_idx)


__all__ = [
    # Oracle
    "PipeModel",
    # Wakers
    "CountingWaker",
    # Assertions
    "assert_ring_invariants",
]
