"""Value types shared between the engine, rules and callers."""

from ryandata_object_validation.models.errors import (
    DEFAULT_MAX_ALLOWED_ERRORS,
    ModelError,
    ModelErrorDictionary,
)
from ryandata_object_validation.models.results import (
    InvocationContext,
    ValidationContext,
    ValidationResult,
)
from ryandata_object_validation.models.state import (
    ValidationStateDictionary,
    ValidationStateEntry,
)

__all__ = [
    "DEFAULT_MAX_ALLOWED_ERRORS",
    "InvocationContext",
    "ModelError",
    "ModelErrorDictionary",
    "ValidationContext",
    "ValidationResult",
    "ValidationStateDictionary",
    "ValidationStateEntry",
]
