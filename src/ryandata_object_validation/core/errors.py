"""Package-identified error classes.

Precondition failures (missing configuration, missing call context, bad
options) are raised as ``ObjectValidationError``. Validation findings are
never raised; they are written into a ``ModelErrorDictionary``.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticCustomError

# Package identifier for error context
PACKAGE_NAME = "ryandata_object_validation"

# Finding codes recorded by the engine itself
LIMIT_EXCEEDED_CODE = "validation_limit_exceeded"
TOO_MANY_ERRORS_CODE = "too_many_errors"


class ObjectValidationError(PydanticCustomError):
    """Pydantic custom error carrying the package identifier in its context.

    Inherits from PydanticCustomError (and therefore ValueError) so callers
    can handle it alongside other pydantic errors.
    """

    def __new__(
        cls,
        error_type: str,
        message_template: str,
        context: dict[str, Any] | None = None,
    ) -> ObjectValidationError:
        ctx = {"package": PACKAGE_NAME, **(context or {})}
        return super().__new__(cls, error_type, message_template, ctx)

    @classmethod
    def missing_argument(cls, argument: str) -> ObjectValidationError:
        """Build the error raised when a required argument is None.

        Args:
            argument: Name of the missing argument.

        Returns:
            ObjectValidationError of type ``missing_argument``.
        """
        return cls(
            "missing_argument",
            "{argument} must not be None",
            {"argument": argument},
        )

    @classmethod
    def invalid_option(cls, option: str, value: Any) -> ObjectValidationError:
        """Build the error raised for an out-of-range configuration value."""
        return cls(
            "invalid_option",
            "{option} must be a positive integer, got {value}",
            {"option": option, "value": value},
        )

    @classmethod
    def from_pydantic_error(cls, error: PydanticCustomError) -> ObjectValidationError:
        """Wrap a PydanticCustomError with package identification."""
        return cls(error.type, error.message_template, error.context)
