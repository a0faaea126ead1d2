"""Shared pytest fixtures and Hypothesis configuration.

This module provides pytest fixtures and configures Hypothesis profiles
for the test suite.
"""

from __future__ import annotations

import pytest
from hypothesis import Verbosity, settings

from ryandata_object_validation import (
    AnnotationMetadataProvider,
    ConstraintValidatorProvider,
    ObjectValidator,
    SelfValidatingValidatorProvider,
    ValidationOptions,
)

# Configure Hypothesis settings for the test suite
settings.register_profile("ci", max_examples=200, deadline=None)
settings.register_profile("dev", max_examples=50, deadline=None)
settings.register_profile("debug", max_examples=10, deadline=None, verbosity=Verbosity.verbose)


@pytest.fixture
def metadata_provider() -> AnnotationMetadataProvider:
    return AnnotationMetadataProvider()


@pytest.fixture
def options() -> ValidationOptions:
    return ValidationOptions(max_depth=32, max_nodes=100_000, max_errors=200)


@pytest.fixture
def validator(
    metadata_provider: AnnotationMetadataProvider, options: ValidationOptions
) -> ObjectValidator:
    return ObjectValidator(
        metadata_provider,
        [ConstraintValidatorProvider(), SelfValidatingValidatorProvider()],
        options=options,
    )
