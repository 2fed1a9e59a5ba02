"""
Pipe configuration.

Module-level constants hold the defaults; `PipeConfig` bundles them into a
validated, immutable object that `pipe_from_config` consumes.
"""

from typing import Final

from pydantic import Field

from .base import StrictBaseModel

DEFAULT_CAPACITY: Final = 64 * 1024
"""Default backing store size in bytes."""

WAKE_ON_DROP: Final = True
"""Signal a parked waker when either endpoint is dropped."""

STRICT_WAKERS: Final = False
"""Raise instead of warn when one endpoint displaces the other's parked waker."""


class PipeConfig(StrictBaseModel):
    """Runtime configuration for a single pipe."""

    capacity: int = Field(default=DEFAULT_CAPACITY, ge=0)
    """
    Size of the backing store in bytes.

    Zero is legal but yields a pipe on which no transfer ever happens.
    """

    wake_on_drop: bool = WAKE_ON_DROP
    """
    Whether dropping an endpoint signals the waker parked in the shared slot.

    Without it, a counterpart parked at drop time is never re-polled.
    """

    strict_wakers: bool = STRICT_WAKERS
    """
    Whether a park that displaces the other endpoint's waker is an error.

    The displaced task would otherwise never be woken.
    """
