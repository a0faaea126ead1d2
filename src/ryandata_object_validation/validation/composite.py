"""Composite validator provider.

Combines an ordered list of validator providers into one, concatenating
their rules in registration order.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ryandata_object_validation.core.errors import ObjectValidationError
from ryandata_object_validation.metadata.type_metadata import TypeMetadata
from ryandata_object_validation.protocols import ValidatorEntryProtocol, ValidatorProviderProtocol


@dataclass
class ValidatorProviderContext:
    """Context handed to each provider while resolving rules for one metadata.

    Providers read ``metadata`` and may call ``suppress()`` to exclude the
    node from validation.
    """

    metadata: TypeMetadata
    suppressed: bool = False

    @property
    def container_type(self) -> Any:
        return self.metadata.container_type

    def suppress(self) -> None:
        """Mark the node as excluded from validation."""
        self.suppressed = True


class CompositeValidatorProvider:
    """Validator provider that combines multiple providers.

    Every provider is queried, in registration order, and the results are
    concatenated. If any provider (or the metadata itself) reports the node
    as suppressed, no rules are returned.
    """

    def __init__(self, providers: Sequence[ValidatorProviderProtocol]) -> None:
        """Initialize composite provider.

        Args:
            providers: Providers to query, in order.

        Raises:
            ObjectValidationError: If ``providers`` is None.
        """
        if providers is None:
            raise ObjectValidationError.missing_argument("validator_providers")
        self._providers: tuple[ValidatorProviderProtocol, ...] = tuple(providers)

    @property
    def name(self) -> str:
        """Name of this provider."""
        return "composite"

    def get_validators(self, context: ValidatorProviderContext) -> list[ValidatorEntryProtocol]:
        """Query all providers and concatenate their rules."""
        validators: list[ValidatorEntryProtocol] = []

        for provider in self._providers:
            validators.extend(provider.get_validators(context))

        if context.suppressed:
            return []
        return validators

    @property
    def providers(self) -> list[ValidatorProviderProtocol]:
        """Get copy of providers list."""
        return list(self._providers)

    def __len__(self) -> int:
        return len(self._providers)
