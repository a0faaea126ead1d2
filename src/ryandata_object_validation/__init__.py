"""ryandata-object-validation: validate object graphs against pluggable rules.

This package provides a validation engine that walks arbitrary (possibly
cyclic) object graphs and collects path-qualified findings:
- Metadata built once per type (dataclasses, pydantic models, annotated classes)
- Pluggable, ordered validator providers with a shared rule cache
- Declarative suppression of types and properties
- Cycle detection and depth/node guards
- Pandas export of findings

Quick Start:
    >>> from dataclasses import dataclass
    >>> from typing import Annotated
    >>> from ryandata_object_validation import Required, validate_object
    >>> @dataclass
    ... class Customer:
    ...     name: Annotated[str | None, Required()]
    >>> errors = validate_object(Customer(name=None))
    >>> errors.to_dict()
    {'name': ['The name field is required.']}

    # Long-lived configuration shared across requests
    >>> from ryandata_object_validation import (
    ...     AnnotationMetadataProvider,
    ...     ConstraintValidatorProvider,
    ...     ObjectValidator,
    ... )
    >>> validator = ObjectValidator(
    ...     AnnotationMetadataProvider(), [ConstraintValidatorProvider()]
    ... )
    >>> context = validator.create_context()
    >>> validator.validate(context, None, "", Customer(name="Ada"))
    >>> context.errors.is_valid
    True
"""

from __future__ import annotations

from ryandata_object_validation.api import (
    create_object_validator,
    get_default_validator,
    validate_object,
)
from ryandata_object_validation.core import (
    LIMIT_EXCEEDED_CODE,
    TOO_MANY_ERRORS_CODE,
    ObjectValidationError,
    PluginFactory,
)
from ryandata_object_validation.metadata import (
    AnnotationMetadataProvider,
    MetadataKind,
    MetadataProviderFactory,
    ShapeKind,
    TypeMetadata,
    ValidateNever,
    validate_never,
)
from ryandata_object_validation.models import (
    InvocationContext,
    ModelError,
    ModelErrorDictionary,
    ValidationContext,
    ValidationResult,
    ValidationStateDictionary,
    ValidationStateEntry,
)
from ryandata_object_validation.pandas_ext import (
    errors_to_frame,
    register_accessor,
    validate_series,
)
from ryandata_object_validation.protocols import (
    MetadataProviderProtocol,
    SelfValidatingModel,
    ValidatorEntryProtocol,
    ValidatorProviderProtocol,
)
from ryandata_object_validation.rules import (
    ConstraintValidatorProvider,
    Length,
    Pattern,
    PipelineValidatorProvider,
    Range,
    Required,
    SelfValidatingValidatorProvider,
    SuppressTypesValidatorProvider,
    ValidationConstraint,
    ValidatorProviderFactory,
)
from ryandata_object_validation.validation import (
    BaseValidatorEntry,
    CompositeValidatorProvider,
    ObjectValidator,
    ValidationOptions,
    ValidationVisitor,
    ValidatorCache,
    ValidatorConfiguration,
    ValidatorProviderContext,
)

__version__ = "0.1.0"
__package_name__ = "ryandata-object-validation"

__all__ = [
    # Version
    "__version__",
    # Primary interface
    "ObjectValidator",
    "ValidatorConfiguration",
    "ValidationOptions",
    "create_object_validator",
    "get_default_validator",
    "validate_object",
    # Engine
    "CompositeValidatorProvider",
    "ValidatorCache",
    "ValidationVisitor",
    "ValidatorProviderContext",
    "BaseValidatorEntry",
    # Metadata
    "AnnotationMetadataProvider",
    "MetadataProviderFactory",
    "MetadataKind",
    "ShapeKind",
    "TypeMetadata",
    "ValidateNever",
    "validate_never",
    # Models
    "InvocationContext",
    "ModelError",
    "ModelErrorDictionary",
    "ValidationContext",
    "ValidationResult",
    "ValidationStateDictionary",
    "ValidationStateEntry",
    # Errors
    "ObjectValidationError",
    "LIMIT_EXCEEDED_CODE",
    "TOO_MANY_ERRORS_CODE",
    # Protocols
    "MetadataProviderProtocol",
    "ValidatorProviderProtocol",
    "ValidatorEntryProtocol",
    "SelfValidatingModel",
    # Rules and providers
    "ValidationConstraint",
    "Required",
    "Range",
    "Length",
    "Pattern",
    "ConstraintValidatorProvider",
    "SelfValidatingValidatorProvider",
    "PipelineValidatorProvider",
    "SuppressTypesValidatorProvider",
    "ValidatorProviderFactory",
    # Factory
    "PluginFactory",
    # Pandas integration
    "errors_to_frame",
    "validate_series",
    "register_accessor",
]
