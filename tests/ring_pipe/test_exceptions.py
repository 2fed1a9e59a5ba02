"""Tests for the pipe exception hierarchy."""

from __future__ import annotations

from ring_pipe import EndpointDroppedError, PipeError, WakerDisplacedError


class TestExceptions:
    """Tests for exception attributes and messages."""

    def test_hierarchy(self) -> None:
        """All pipe errors derive from PipeError."""
        assert issubclass(EndpointDroppedError, PipeError)
        assert issubclass(WakerDisplacedError, PipeError)

    def test_endpoint_dropped_attributes(self) -> None:
        """EndpointDroppedError records the endpoint and the operation."""
        err = EndpointDroppedError("reader", "read")
        assert err.endpoint == "reader"
        assert err.operation == "read"
        assert err.message == "Cannot read: reader has been dropped"
        assert str(err) == err.message

    def test_waker_displaced_attributes(self) -> None:
        """WakerDisplacedError records both endpoints."""
        err = WakerDisplacedError("reader", "writer")
        assert err.parking == "reader"
        assert err.parked == "writer"
        assert "writer is still parked" in err.message

    def test_repr(self) -> None:
        """The repr shows the class and message."""
        err = PipeError("boom")
        assert repr(err) == "PipeError('boom')"
