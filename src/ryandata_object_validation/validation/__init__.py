"""Validation engine: composite provider, rule cache, visitor and entry point."""

from ryandata_object_validation.validation.base import BaseValidatorEntry
from ryandata_object_validation.validation.cache import ResolvedValidators, ValidatorCache
from ryandata_object_validation.validation.composite import (
    CompositeValidatorProvider,
    ValidatorProviderContext,
)
from ryandata_object_validation.validation.object_validator import (
    ObjectValidator,
    ValidatorConfiguration,
    VisitorFactory,
    default_visitor_factory,
)
from ryandata_object_validation.validation.options import ValidationOptions
from ryandata_object_validation.validation.visitor import ValidationVisitor

__all__ = [
    "BaseValidatorEntry",
    "CompositeValidatorProvider",
    "ObjectValidator",
    "ResolvedValidators",
    "ValidationOptions",
    "ValidationVisitor",
    "ValidatorCache",
    "ValidatorConfiguration",
    "ValidatorProviderContext",
    "VisitorFactory",
    "default_visitor_factory",
]
