"""Built-in validator providers.

Each provider inspects the metadata in a ``ValidatorProviderContext`` and
returns the rules that apply. Providers are combined (in order) by
``CompositeValidatorProvider``.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, ClassVar

from abstract_validation_base import BaseValidator, CompositeValidator, ValidatorPipelineBuilder

from ryandata_object_validation.core.factory import PluginFactory
from ryandata_object_validation.models.results import ValidationContext, ValidationResult
from ryandata_object_validation.protocols import SelfValidatingModel, ValidatorProviderProtocol
from ryandata_object_validation.rules.constraints import ValidationConstraint
from ryandata_object_validation.validation.base import BaseValidatorEntry
from ryandata_object_validation.validation.composite import ValidatorProviderContext


def _lookup_by_mro(registry: dict[type, Any], model_type: Any) -> Any:
    if not isinstance(model_type, type):
        return None
    for klass in model_type.__mro__:
        if klass in registry:
            return registry[klass]
    return None


class ConstraintValidatorProvider:
    """Creates one rule per ``ValidationConstraint`` marker on the metadata."""

    @property
    def name(self) -> str:
        return "constraints"

    def get_validators(self, context: ValidatorProviderContext) -> list[BaseValidatorEntry]:
        return [
            marker.create_validator()
            for marker in context.metadata.constraints
            if isinstance(marker, ValidationConstraint)
        ]


class SelfValidationEntry(BaseValidatorEntry):
    """Calls ``validate_model`` on non-null models that define it."""

    @property
    def name(self) -> str:
        return "self_validation"

    def validate(self, context: ValidationContext) -> list[ValidationResult]:
        if context.model is None or not isinstance(context.model, SelfValidatingModel):
            return []
        return list(context.model.validate_model(context))


class SelfValidatingValidatorProvider:
    """Adds ``SelfValidationEntry`` for types that define ``validate_model``.

    Positions declared without a concrete type (``Any``/``object``) also get
    the entry; it checks the runtime value.
    """

    @property
    def name(self) -> str:
        return "self_validating"

    def get_validators(self, context: ValidatorProviderContext) -> list[BaseValidatorEntry]:
        model_type = context.metadata.model_type
        if model_type is object or callable(getattr(model_type, "validate_model", None)):
            return [SelfValidationEntry()]
        return []


class PipelineValidatorEntry(BaseValidatorEntry):
    """Runs an ``abstract_validation_base`` pipeline against the node's model.

    Each pipeline error becomes a finding on the error's field, relative to
    the node.
    """

    def __init__(self, pipeline: BaseValidator[Any]) -> None:
        self._pipeline = pipeline

    @property
    def name(self) -> str:
        return self._pipeline.name

    def validate(self, context: ValidationContext) -> list[ValidationResult]:
        if context.model is None:
            return []
        result = self._pipeline.validate(context.model)
        return [
            ValidationResult(error.message, member_name=error.field or "", code=self.name)
            for error in result.errors
        ]


class PipelineValidatorProvider:
    """Serves ``abstract_validation_base`` validators registered per model type.

    Example:
        provider = PipelineValidatorProvider()
        provider.register(Address, ZipCodeValidator(source), StateValidator(source))
    """

    def __init__(
        self,
        validators: dict[type, Iterable[BaseValidator[Any]]] | None = None,
    ) -> None:
        self._pipelines: dict[type, CompositeValidator[Any]] = {}
        for model_type, type_validators in (validators or {}).items():
            self.register(model_type, *type_validators)

    @property
    def name(self) -> str:
        return "pipeline"

    def register(self, model_type: type, *validators: BaseValidator[Any]) -> None:
        """Register validators for ``model_type`` (and its subclasses)."""
        builder: ValidatorPipelineBuilder[Any] = ValidatorPipelineBuilder(
            f"{model_type.__name__.lower()}_validation"
        )
        for validator in validators:
            builder.add(validator)
        self._pipelines[model_type] = builder.build()

    def get_validators(self, context: ValidatorProviderContext) -> list[BaseValidatorEntry]:
        pipeline = _lookup_by_mro(self._pipelines, context.metadata.model_type)
        if pipeline is None:
            return []
        return [PipelineValidatorEntry(pipeline)]


class SuppressTypesValidatorProvider:
    """Suppresses validation of values whose declared type is one of ``types``.

    Useful for types that should never be walked (streams, handles, large
    binary payloads) without decorating them.
    """

    def __init__(self, types: Iterable[type] = ()) -> None:
        self._types = tuple(types)

    @property
    def name(self) -> str:
        return "suppress_types"

    def get_validators(self, context: ValidatorProviderContext) -> list[BaseValidatorEntry]:
        model_type = context.metadata.model_type
        if isinstance(model_type, type) and issubclass(model_type, self._types):
            context.suppress()
        return []


class ValidatorProviderFactory(PluginFactory[ValidatorProviderProtocol]):
    """Factory for creating validator provider instances by name.

    Example:
        >>> provider = ValidatorProviderFactory.create("constraints")

        # Register custom provider
        >>> ValidatorProviderFactory.register("audit", AuditValidatorProvider)
    """

    _registry: ClassVar[dict[str, type[ValidatorProviderProtocol]]] = {}
    _default_type: ClassVar[str] = "constraints"
    _entity_name: ClassVar[str] = "validator provider"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        """Ensure built-in providers are registered."""
        defaults: dict[str, type[ValidatorProviderProtocol]] = {
            "constraints": ConstraintValidatorProvider,
            "self_validating": SelfValidatingValidatorProvider,
            "pipeline": PipelineValidatorProvider,
            "suppress_types": SuppressTypesValidatorProvider,
        }
        for name, impl in defaults.items():
            cls._registry.setdefault(name, impl)
