"""Strict pydantic base model shared by the pipe's configuration types."""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict


class StrictBaseModel(BaseModel):
    """
    An immutable pydantic model that rejects unknown fields and loose types.

    Strict mode means `capacity="16"` or `capacity=True` is a validation error
    rather than a silent coercion.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        strict=True,
        validate_default=True,
    )

    def copy(self: Self, **kwargs: Any) -> Self:
        """Validated copy with fields replaced, e.g. `PipeConfig().copy(capacity=8)`."""
        return self.__class__(**(self.model_dump(exclude_unset=True) | kwargs))
