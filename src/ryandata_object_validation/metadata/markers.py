"""Declarative suppression markers.

A type decorated with ``@validate_never`` is excluded from validation
together with everything nested beneath it. A single property is excluded
with ``Annotated[T, ValidateNever()]`` (or dataclass
``field(metadata={"validate_never": True})``); its siblings are still
validated.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, TypeVar

T = TypeVar("T")

VALIDATE_NEVER_ATTR = "__validate_never__"
VALIDATE_NEVER_FIELD_KEY = "validate_never"
CONSTRAINTS_FIELD_KEY = "constraints"


@dataclass(frozen=True)
class ValidateNever:
    """Marker placed in ``Annotated`` extras to suppress one property."""


def validate_never(cls: type[T]) -> type[T]:
    """Class decorator marking a type (and subclasses) as never validated.

    Example:
        @validate_never
        @dataclass
        class RawPayload:
            body: bytes
    """
    setattr(cls, VALIDATE_NEVER_ATTR, True)
    return cls


def is_validate_never(model_type: Any) -> bool:
    """Check whether a type carries the ``validate_never`` marker."""
    return bool(getattr(model_type, VALIDATE_NEVER_ATTR, False))
