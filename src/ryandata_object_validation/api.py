"""Convenience functions for the common case.

Most callers only need ``validate_object``; long-running services should
build one ``ObjectValidator`` with ``create_object_validator`` and reuse it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ryandata_object_validation.metadata.provider import MetadataProviderFactory
from ryandata_object_validation.models.errors import ModelErrorDictionary
from ryandata_object_validation.models.results import InvocationContext
from ryandata_object_validation.models.state import ValidationStateDictionary
from ryandata_object_validation.protocols import MetadataProviderProtocol, ValidatorProviderProtocol
from ryandata_object_validation.rules.providers import ValidatorProviderFactory
from ryandata_object_validation.validation.object_validator import ObjectValidator
from ryandata_object_validation.validation.options import ValidationOptions

DEFAULT_VALIDATOR_PROVIDERS: tuple[str, ...] = ("constraints", "self_validating")


def create_object_validator(
    metadata_provider: str | MetadataProviderProtocol = "annotations",
    validator_providers: Sequence[str | ValidatorProviderProtocol] = DEFAULT_VALIDATOR_PROVIDERS,
    options: ValidationOptions | None = None,
) -> ObjectValidator:
    """Create an ObjectValidator from provider names or instances.

    Args:
        metadata_provider: Registered name or provider instance.
        validator_providers: Registered names or provider instances, in order.
        options: Traversal guards; environment defaults when None.

    Returns:
        Configured ObjectValidator.
    """
    if isinstance(metadata_provider, str):
        metadata_provider = MetadataProviderFactory.create(metadata_provider)
    providers = [
        ValidatorProviderFactory.create(p) if isinstance(p, str) else p
        for p in validator_providers
    ]
    return ObjectValidator(metadata_provider, providers, options=options)


# Module-level convenience function
_default_validator: ObjectValidator | None = None


def get_default_validator() -> ObjectValidator:
    """Get the default ObjectValidator singleton.

    Returns:
        Shared ObjectValidator with the default providers and options.
    """
    global _default_validator
    if _default_validator is None:
        _default_validator = create_object_validator()
    return _default_validator


def validate_object(
    model: Any,
    *,
    prefix: str = "",
    validation_state: ValidationStateDictionary | None = None,
    validator: ObjectValidator | None = None,
    context: InvocationContext | None = None,
) -> ModelErrorDictionary:
    """Validate an object graph and return the populated error sink.

    Args:
        model: Root object to validate.
        prefix: Key path of the root.
        validation_state: Optional per-call state (e.g. pre-marked paths).
        validator: Validator to use; the default validator when None.
        context: Invocation context to populate; a new one when None.

    Returns:
        The error sink of the invocation context.

    Example:
        >>> errors = validate_object(order)
        >>> errors.is_valid
        False
        >>> errors["items[1].name"]
        ['The name field is required.']
    """
    validator = validator or get_default_validator()
    context = context if context is not None else validator.create_context()
    validator.validate(context, validation_state, prefix, model)
    return context.errors
