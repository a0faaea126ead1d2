"""Entry point for validating object graphs."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ryandata_object_validation.core.errors import ObjectValidationError
from ryandata_object_validation.models.errors import ModelErrorDictionary
from ryandata_object_validation.models.results import InvocationContext
from ryandata_object_validation.models.state import ValidationStateDictionary
from ryandata_object_validation.protocols import MetadataProviderProtocol, ValidatorProviderProtocol
from ryandata_object_validation.validation.cache import ValidatorCache
from ryandata_object_validation.validation.composite import CompositeValidatorProvider
from ryandata_object_validation.validation.options import ValidationOptions
from ryandata_object_validation.validation.visitor import ValidationVisitor


@dataclass(frozen=True)
class ValidatorConfiguration:
    """Long-lived collaborators shared by every validation call."""

    metadata_provider: MetadataProviderProtocol
    validator_provider: CompositeValidatorProvider
    validator_cache: ValidatorCache
    options: ValidationOptions


VisitorFactory = Callable[
    [InvocationContext, ValidatorConfiguration, ValidationStateDictionary | None],
    ValidationVisitor,
]


def default_visitor_factory(
    context: InvocationContext,
    configuration: ValidatorConfiguration,
    validation_state: ValidationStateDictionary | None,
) -> ValidationVisitor:
    """Build a ``ValidationVisitor`` wired to the shared configuration."""
    return ValidationVisitor(
        context,
        configuration.validator_provider,
        configuration.validator_cache,
        configuration.metadata_provider,
        validation_state,
        options=configuration.options,
    )


class ObjectValidator:
    """Validates object graphs against rules from a list of validator providers.

    Build one instance per configuration and share it; every call to
    ``validate`` uses a fresh visitor, so concurrent calls are safe as long
    as each passes its own context and validation state.

    Example:
        >>> validator = ObjectValidator(
        ...     AnnotationMetadataProvider(),
        ...     [ConstraintValidatorProvider()],
        ... )
        >>> context = validator.create_context()
        >>> validator.validate(context, None, "", order)
        >>> context.errors.to_dict()
        {'items[1].name': ['The name field is required.']}
    """

    def __init__(
        self,
        metadata_provider: MetadataProviderProtocol,
        validator_providers: Sequence[ValidatorProviderProtocol],
        *,
        options: ValidationOptions | None = None,
        validator_cache: ValidatorCache | None = None,
        visitor_factory: VisitorFactory | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            metadata_provider: Source of type metadata.
            validator_providers: Rule providers, queried in this order.
            options: Traversal guards; environment defaults when None.
            validator_cache: Cache to share with other validators; a new one
                is created when None.
            visitor_factory: Strategy building the visitor for each call.

        Raises:
            ObjectValidationError: If ``metadata_provider`` or
                ``validator_providers`` is None.
        """
        if metadata_provider is None:
            raise ObjectValidationError.missing_argument("metadata_provider")
        if validator_providers is None:
            raise ObjectValidationError.missing_argument("validator_providers")

        self._configuration = ValidatorConfiguration(
            metadata_provider=metadata_provider,
            validator_provider=CompositeValidatorProvider(validator_providers),
            validator_cache=validator_cache if validator_cache is not None else ValidatorCache(),
            options=options if options is not None else ValidationOptions(),
        )
        self._visitor_factory = visitor_factory or default_visitor_factory

    @property
    def configuration(self) -> ValidatorConfiguration:
        return self._configuration

    @property
    def metadata_provider(self) -> MetadataProviderProtocol:
        return self._configuration.metadata_provider

    @property
    def validator_provider(self) -> CompositeValidatorProvider:
        return self._configuration.validator_provider

    @property
    def validator_cache(self) -> ValidatorCache:
        return self._configuration.validator_cache

    def create_context(self, **items: Any) -> InvocationContext:
        """Create an invocation context whose sink honours ``options.max_errors``."""
        return InvocationContext(
            errors=ModelErrorDictionary(max_allowed_errors=self._configuration.options.max_errors),
            items=dict(items),
        )

    def validate(
        self,
        context: InvocationContext,
        validation_state: ValidationStateDictionary | None,
        prefix: str | None,
        model: Any,
    ) -> None:
        """Validate ``model`` and write findings into ``context.errors``.

        Args:
            context: Invocation context owning the error sink.
            validation_state: Per-call state; an empty one is used when None.
            prefix: Key path of the model ("" for the root).
            model: Object to validate. None produces no structural findings.

        Raises:
            ObjectValidationError: If ``context`` is None.
        """
        if context is None:
            raise ObjectValidationError.missing_argument("context")

        visitor = self._visitor_factory(context, self._configuration, validation_state)
        metadata = (
            None
            if model is None
            else self._configuration.metadata_provider.get_metadata_for_type(type(model))
        )
        visitor.validate(metadata, prefix or "", model)
