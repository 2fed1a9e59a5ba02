"""Exception hierarchy for pipe misuse.

Transfers on live endpoints never fail; these exceptions only report
operations the single-producer/single-consumer contract forbids.
"""

from __future__ import annotations


class PipeError(Exception):
    """
    Base exception for all pipe errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class EndpointDroppedError(PipeError):
    """
    Raised when an operation is invoked on an endpoint after it was dropped.

    Attributes:
        endpoint: Name of the dropped endpoint ("writer" or "reader").
        operation: The operation that was attempted.
    """

    def __init__(self, endpoint: str, operation: str) -> None:
        self.endpoint = endpoint
        self.operation = operation
        super().__init__(f"Cannot {operation}: {endpoint} has been dropped")


class WakerDisplacedError(PipeError):
    """
    Raised in strict mode when one endpoint parks over the other's waker.

    Both endpoints parked without any progress in between. The earlier task
    would never be woken, so strict pipes refuse the second park instead.

    Attributes:
        parking: The endpoint trying to park.
        parked: The endpoint whose waker is still in the slot.
    """

    def __init__(self, parking: str, parked: str) -> None:
        self.parking = parking
        self.parked = parked
        super().__init__(
            f"{parking} tried to park while {parked} is still parked; "
            f"both endpoints are waiting on a pipe that cannot make progress"
        )
