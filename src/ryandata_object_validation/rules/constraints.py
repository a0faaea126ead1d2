"""Declarative rule markers and the rules they create.

Markers are attached to properties through ``typing.Annotated`` (or
dataclass ``field(metadata={"constraints": (...)})``) and turned into rules
by ``ConstraintValidatorProvider``. Custom markers subclass
``ValidationConstraint`` and implement ``create_validator``.

Example:
    @dataclass
    class Customer:
        name: Annotated[str | None, Required(), Length(max_length=80)]
        age: Annotated[int | None, Range(0, 150)] = None
"""

from __future__ import annotations

import re
from collections.abc import Sized
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from ryandata_object_validation.models.results import ValidationContext, ValidationResult
from ryandata_object_validation.validation.base import BaseValidatorEntry


@dataclass(frozen=True)
class ValidationConstraint:
    """Base class for rule markers.

    Markers must be hashable; they take part in the metadata cache key.
    """

    message: str | None = field(default=None, kw_only=True)

    def create_validator(self) -> BaseValidatorEntry:
        """Create the rule enforcing this marker."""
        raise NotImplementedError

    def format_message(self, default: str, **values: Any) -> str:
        return (self.message or default).format(**values)


class ConstraintValidator(BaseValidatorEntry):
    """Rule backed by a constraint marker; null values pass by default."""

    code = "constraint"

    def __init__(self, constraint: ValidationConstraint) -> None:
        self.constraint = constraint

    @property
    def name(self) -> str:
        return self.code

    def validate(self, context: ValidationContext) -> list[ValidationResult]:
        if context.model is None:
            return []
        message = self.check(context.model, context.metadata.display_name)
        if message is None:
            return []
        return [ValidationResult(message, code=self.code)]

    def check(self, value: Any, display_name: str) -> str | None:
        """Return an error message for ``value`` or None when it is valid."""
        raise NotImplementedError


# -----------------------------------------------------------------------------
# Required
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Required(ValidationConstraint):
    """The value must not be None (nor blank, unless ``allow_empty_strings``)."""

    allow_empty_strings: bool = False

    def create_validator(self) -> RequiredValidator:
        return RequiredValidator(self)


class RequiredValidator(ConstraintValidator):
    code = "required"
    constraint: Required

    def validate(self, context: ValidationContext) -> list[ValidationResult]:
        value = context.model
        missing = value is None or (
            isinstance(value, str) and not self.constraint.allow_empty_strings and not value.strip()
        )
        if not missing:
            return []
        message = self.constraint.format_message(
            "The {name} field is required.", name=context.metadata.display_name
        )
        return [ValidationResult(message, code=self.code)]


# -----------------------------------------------------------------------------
# Range
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Range(ValidationConstraint):
    """The value must lie within ``[minimum, maximum]`` (either bound optional)."""

    minimum: Any = None
    maximum: Any = None

    def create_validator(self) -> RangeValidator:
        return RangeValidator(self)


class RangeValidator(ConstraintValidator):
    code = "range"
    constraint: Range

    def check(self, value: Any, display_name: str) -> str | None:
        minimum, maximum = self.constraint.minimum, self.constraint.maximum
        try:
            in_range = (minimum is None or value >= minimum) and (
                maximum is None or value <= maximum
            )
        except TypeError:
            in_range = False
        if in_range:
            return None

        if minimum is not None and maximum is not None:
            default = "The field {name} must be between {minimum} and {maximum}."
        elif minimum is not None:
            default = "The field {name} must be greater than or equal to {minimum}."
        else:
            default = "The field {name} must be less than or equal to {maximum}."
        return self.constraint.format_message(
            default, name=display_name, minimum=minimum, maximum=maximum
        )


# -----------------------------------------------------------------------------
# Length
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Length(ValidationConstraint):
    """A string or collection must have between ``min_length`` and ``max_length`` items."""

    min_length: int = 0
    max_length: int | None = None

    def create_validator(self) -> LengthValidator:
        return LengthValidator(self)


class LengthValidator(ConstraintValidator):
    code = "length"
    constraint: Length

    def check(self, value: Any, display_name: str) -> str | None:
        if not isinstance(value, Sized):
            return None
        size = len(value)
        min_length, max_length = self.constraint.min_length, self.constraint.max_length
        if size >= min_length and (max_length is None or size <= max_length):
            return None

        if max_length is None:
            default = "The field {name} must have a minimum length of {min_length}."
        else:
            default = (
                "The field {name} must have a length between {min_length} and {max_length}."
            )
        return self.constraint.format_message(
            default, name=display_name, min_length=min_length, max_length=max_length
        )


# -----------------------------------------------------------------------------
# Pattern
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Pattern(ValidationConstraint):
    """A string value must fully match ``regex``."""

    regex: str

    def create_validator(self) -> PatternValidator:
        return PatternValidator(self)


class PatternValidator(ConstraintValidator):
    code = "pattern"
    constraint: Pattern

    @cached_property
    def compiled(self) -> re.Pattern[str]:
        return re.compile(self.constraint.regex)

    def check(self, value: Any, display_name: str) -> str | None:
        if not isinstance(value, str) or self.compiled.fullmatch(value):
            return None
        return self.constraint.format_message(
            "The field {name} must match the regular expression '{regex}'.",
            name=display_name,
            regex=self.constraint.regex,
        )
