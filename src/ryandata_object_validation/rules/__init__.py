"""Built-in rules and validator providers."""

from ryandata_object_validation.rules.constraints import (
    ConstraintValidator,
    Length,
    LengthValidator,
    Pattern,
    PatternValidator,
    Range,
    RangeValidator,
    Required,
    RequiredValidator,
    ValidationConstraint,
)
from ryandata_object_validation.rules.providers import (
    ConstraintValidatorProvider,
    PipelineValidatorEntry,
    PipelineValidatorProvider,
    SelfValidatingValidatorProvider,
    SelfValidationEntry,
    SuppressTypesValidatorProvider,
    ValidatorProviderFactory,
)

__all__ = [
    # Markers
    "ValidationConstraint",
    "Required",
    "Range",
    "Length",
    "Pattern",
    # Rules
    "ConstraintValidator",
    "RequiredValidator",
    "RangeValidator",
    "LengthValidator",
    "PatternValidator",
    "SelfValidationEntry",
    "PipelineValidatorEntry",
    # Providers
    "ConstraintValidatorProvider",
    "SelfValidatingValidatorProvider",
    "PipelineValidatorProvider",
    "SuppressTypesValidatorProvider",
    "ValidatorProviderFactory",
]
