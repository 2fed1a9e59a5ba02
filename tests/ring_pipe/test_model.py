"""Property tests driving the pipe and a reference model in lockstep."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from ring_pipe import PENDING, pipe
from tests.ring_pipe.helpers import CountingWaker, PipeModel, assert_ring_invariants

# A write carries its payload; a read carries the size of the caller's buffer.
operations = st.lists(
    st.one_of(
        st.binary(max_size=300),
        st.integers(min_value=0, max_value=255),
    ),
    max_size=60,
)


class TestPipeModel:
    """Sanity tests for the oracle itself."""

    def test_write_caps_at_capacity(self) -> None:
        """The model accepts only what fits."""
        model = PipeModel(3)
        assert model.write(b"abcd") == 3
        assert model.write(b"e") == 0
        assert len(model) == 3

    def test_read_is_fifo(self) -> None:
        """The model yields leading bytes first."""
        model = PipeModel(8)
        model.write(b"abc")
        assert model.read(2) == b"ab"
        assert model.read(5) == b"c"
        assert model.read(5) == b""


@given(capacity=st.integers(min_value=0, max_value=255), ops=operations)
@settings(max_examples=300)
def test_pipe_matches_model(capacity: int, ops: list[bytes | int]) -> None:
    """Everything the pipe transfers matches the model, in order and value."""
    model = PipeModel(capacity)
    writer, reader = pipe(capacity)
    ring = writer._ring
    assert ring is not None

    for op in ops:
        if isinstance(op, bytes):
            written = writer.try_write(op)

            # The pipe may accept less than the model due to wrapping.
            assert model.write(op[:written]) == written
        else:
            data = reader.try_read(op)

            # The pipe may deliver less than the model due to wrapping.
            assert model.read(len(data)) == data

        assert_ring_invariants(ring)
        assert ring.buffered == len(model)


@given(capacity=st.integers(min_value=1, max_value=64), ops=operations)
@settings(max_examples=200)
def test_transfers_never_split(capacity: int, ops: list[bytes | int]) -> None:
    """No single transfer crosses the physical end of the store."""
    writer, reader = pipe(capacity)
    ring = writer._ring
    assert ring is not None

    for op in ops:
        if isinstance(op, bytes):
            limit = capacity - ring.physical(ring.write_idx)
            written = writer.try_write(op)
            assert written <= limit
            assert written <= len(op)
        else:
            limit = capacity - ring.physical(ring.read_idx)
            data = reader.try_read(op)
            assert len(data) <= limit
            assert len(data) <= op


@given(capacity=st.integers(min_value=0, max_value=32), ops=operations)
@settings(max_examples=200)
def test_progress_signals_parked_waker(capacity: int, ops: list[bytes | int]) -> None:
    """Every successful poll empties the slot, waking whoever was parked."""
    writer, reader = pipe(capacity)
    ring = writer._ring
    assert ring is not None

    for op in ops:
        waker = CountingWaker()
        parked = ring.waker

        if isinstance(op, bytes):
            result = writer.poll_write(op, waker)
        else:
            result = reader.poll_read(bytearray(op), waker)

        if result is PENDING:
            assert ring.waker is waker
            assert waker.wake_count == 0
        elif result > 0:
            assert not ring.has_waker
            if isinstance(parked, CountingWaker):
                assert parked.woken
        else:
            # Zero-length buffers with room to move neither park nor wake.
            assert ring.waker is parked

        assert_ring_invariants(ring)
