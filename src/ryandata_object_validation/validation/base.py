"""Abstract base class for validation rules.

Rules produced by validator providers implement ``ValidatorEntryProtocol``;
subclassing ``BaseValidatorEntry`` is the convenient way to do so.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from ryandata_object_validation.models.results import ValidationContext, ValidationResult


class BaseValidatorEntry(ABC):
    """Abstract base class for rules.

    Example:
        class NonNegativeValidator(BaseValidatorEntry):
            @property
            def name(self) -> str:
                return "non_negative"

            def validate(self, context: ValidationContext) -> list[ValidationResult]:
                if context.model is not None and context.model < 0:
                    return [ValidationResult("Must not be negative", code=self.name)]
                return []
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Name of this rule, used as the default finding code."""
        ...

    @abstractmethod
    def validate(self, context: ValidationContext) -> Iterable[ValidationResult]:
        """Validate the node described by ``context``.

        Args:
            context: Node being validated.

        Returns:
            Findings; empty when the node satisfies the rule.
        """
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
