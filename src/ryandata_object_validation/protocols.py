from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ryandata_object_validation.metadata.type_metadata import TypeMetadata
    from ryandata_object_validation.models.results import ValidationContext, ValidationResult
    from ryandata_object_validation.validation.composite import ValidatorProviderContext


@runtime_checkable
class MetadataProviderProtocol(Protocol):
    """Protocol for metadata producers.

    Implementations describe the shape of types (simple value, collection
    or object with named properties) and must return the same metadata for
    the same type on every call.
    """

    def get_metadata_for_type(self, model_type: Any) -> TypeMetadata:
        """Get metadata for a type.

        Args:
            model_type: Class or type hint to describe.

        Returns:
            TypeMetadata describing the type.
        """
        ...

    def get_metadata_for_properties(self, model_type: Any) -> Sequence[TypeMetadata]:
        """Get metadata for the properties declared by a type.

        Args:
            model_type: Class whose properties should be described.

        Returns:
            Property metadata in declaration order.
        """
        ...


@runtime_checkable
class ValidatorEntryProtocol(Protocol):
    """Protocol for a single validation rule.

    All rule kinds (required, range, custom, ...) are treated uniformly by
    the engine through this interface.
    """

    def validate(self, context: ValidationContext) -> Iterable[ValidationResult]:
        """Validate the node described by ``context``.

        Args:
            context: Model, metadata, key path and container of the node.

        Returns:
            Zero or more findings. An empty result means the node is valid.
        """
        ...


@runtime_checkable
class ValidatorProviderProtocol(Protocol):
    """Protocol for sources of validation rules.

    Implementations inspect the metadata in the provider context and return
    the rules that apply to it. A provider may also call
    ``context.suppress()`` to exclude the node from validation.
    """

    def get_validators(self, context: ValidatorProviderContext) -> Sequence[ValidatorEntryProtocol]:
        """Get the rules that apply to the metadata in ``context``.

        Args:
            context: Provider context holding the metadata being resolved.

        Returns:
            Ordered sequence of rules (possibly empty).
        """
        ...


@runtime_checkable
class SelfValidatingModel(Protocol):
    """Protocol for models that validate themselves."""

    def validate_model(self, context: ValidationContext) -> Iterable[ValidationResult]:
        """Return findings about this model instance."""
        ...
