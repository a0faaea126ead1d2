"""Validation traversal engine.

A ``ValidationVisitor`` performs one walk over an object graph. It is
constructed fresh for every validation call; the metadata provider,
validator provider and validator cache it receives are shared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from ryandata_object_validation.core.errors import LIMIT_EXCEEDED_CODE, ObjectValidationError
from ryandata_object_validation.core.key_paths import create_index_key, create_property_key
from ryandata_object_validation.metadata.enums import ShapeKind
from ryandata_object_validation.metadata.type_metadata import TypeMetadata
from ryandata_object_validation.models.errors import ModelErrorDictionary
from ryandata_object_validation.models.results import (
    InvocationContext,
    ValidationContext,
    ValidationResult,
)
from ryandata_object_validation.models.state import ValidationStateDictionary
from ryandata_object_validation.protocols import (
    MetadataProviderProtocol,
    ValidatorEntryProtocol,
    ValidatorProviderProtocol,
)
from ryandata_object_validation.validation.cache import ValidatorCache
from ryandata_object_validation.validation.options import ValidationOptions

logger = logging.getLogger(__name__)


class ValidationVisitor:
    """Visits every reachable node of an object graph once.

    For each node the visitor resolves (through the cache) the rules that
    apply to its metadata, runs all of them, writes their findings to the
    error sink of the invocation context under the node's key path, and then
    descends into object properties or collection elements.

    Termination rules:
        - a key path already marked validated is skipped;
        - an object already on the current traversal path (a cycle back to
          an ancestor) is treated as valid and not descended into;
        - suppressed nodes are marked validated without running rules;
        - exceeding ``max_depth`` aborts that subtree and exceeding
          ``max_nodes`` aborts the rest of the walk. The first trip records a
          single ``validation_limit_exceeded`` finding.
    """

    def __init__(
        self,
        context: InvocationContext,
        validator_provider: ValidatorProviderProtocol,
        validator_cache: ValidatorCache,
        metadata_provider: MetadataProviderProtocol,
        validation_state: ValidationStateDictionary | None = None,
        options: ValidationOptions | None = None,
    ) -> None:
        """Initialize the visitor.

        Args:
            context: Invocation context whose ``errors`` sink receives findings.
            validator_provider: Source of rules (usually a composite provider).
            validator_cache: Shared cache of resolved rules.
            metadata_provider: Source of metadata for runtime types.
            validation_state: Per-call state; a fresh one is used when None.
            options: Traversal guards; environment defaults when None.

        Raises:
            ObjectValidationError: If a required argument is None.
        """
        required = {
            "context": context,
            "validator_provider": validator_provider,
            "validator_cache": validator_cache,
            "metadata_provider": metadata_provider,
        }
        for argument, value in required.items():
            if value is None:
                raise ObjectValidationError.missing_argument(argument)

        self.context = context
        self.validator_provider = validator_provider
        self.validator_cache = validator_cache
        self.metadata_provider = metadata_provider
        self.validation_state = (
            validation_state if validation_state is not None else ValidationStateDictionary()
        )
        self.options = options if options is not None else ValidationOptions()

        self._current_path: set[int] = set()
        self._depth = 0
        self._visited_count = 0
        self._aborted_count = 0
        self.limit_exceeded = False

    @property
    def errors(self) -> ModelErrorDictionary:
        return self.context.errors

    @property
    def visited_count(self) -> int:
        """Number of nodes visited so far."""
        return self._visited_count

    def validate(self, metadata: TypeMetadata | None, key: str | None, model: Any) -> bool:
        """Validate ``model`` and everything reachable from it.

        Args:
            metadata: Metadata of the root position; None skips validation.
            key: Key path prefix of the root ("" for the root itself).
            model: Root object (may be None).

        Returns:
            True if no findings were recorded for this graph.
        """
        is_valid = self._visit(metadata, key or "", model, None, None)
        logger.debug(
            "Validated %r: %d nodes visited, %d errors",
            key or "",
            self._visited_count,
            self.errors.error_count,
        )
        return is_valid

    # ------------------------------------------------------------------
    # Traversal
    # ------------------------------------------------------------------

    def _visit(
        self,
        metadata: TypeMetadata | None,
        key: str,
        model: Any,
        container: Any,
        container_metadata: TypeMetadata | None,
    ) -> bool:
        if metadata is None:
            return True

        if self.validation_state.is_validated(key):
            return True

        if model is not None and id(model) in self._current_path:
            return True

        if self.errors.has_reached_max_errors:
            self._aborted_count += 1
            return False

        if self._visited_count >= self.options.max_nodes:
            self._abort(key, f"Validation stopped after visiting {self.options.max_nodes} nodes.")
            return False
        if self._depth > self.options.max_depth:
            self._abort(
                key,
                f"Validation exceeded the maximum depth of {self.options.max_depth}.",
            )
            return False
        self._visited_count += 1

        runtime_metadata = self._runtime_metadata(metadata, model)
        resolved = self.validator_cache.get_validators(metadata, self.validator_provider)
        if resolved.suppressed or runtime_metadata.suppressed:
            self.validation_state.mark_suppressed(key)
            return True

        aborted_before = self._aborted_count
        node_context = ValidationContext(
            invocation=self.context,
            metadata=metadata,
            key=key,
            model=model,
            container=container,
            container_metadata=container_metadata,
            metadata_provider=self.metadata_provider,
        )
        is_valid = self._run_validators(resolved.validators, node_context)

        if model is not None:
            if runtime_metadata.shape is ShapeKind.OBJECT:
                is_valid = self._visit_properties(runtime_metadata, key, model) and is_valid
            elif runtime_metadata.shape is ShapeKind.COLLECTION:
                element_metadata = metadata.element_metadata or runtime_metadata.element_metadata
                is_valid = self._visit_elements(element_metadata, key, model) and is_valid

        # Subtrees cut short by a guard or the error cap stay unmarked.
        if self._aborted_count == aborted_before and not self.errors.has_reached_max_errors:
            self.validation_state.mark_validated(key)
        return is_valid

    def _visit_properties(self, metadata: TypeMetadata, key: str, model: Any) -> bool:
        is_valid = True
        self._enter(model)
        try:
            for property_metadata in metadata.properties:
                child_key = create_property_key(key, property_metadata.name)
                if property_metadata.suppressed:
                    self.validation_state.mark_suppressed(child_key)
                    continue
                value = property_metadata.get_value(model)
                if not self._visit(property_metadata, child_key, value, model, metadata):
                    is_valid = False
        finally:
            self._leave(model)
        return is_valid

    def _visit_elements(
        self,
        element_metadata: TypeMetadata | None,
        key: str,
        model: Any,
    ) -> bool:
        is_valid = True
        items: Iterable[tuple[Any, Any]] = (
            model.items() if isinstance(model, Mapping) else enumerate(model)
        )
        self._enter(model)
        try:
            for index, element in items:
                child_metadata = element_metadata
                if child_metadata is None and element is not None:
                    child_metadata = self.metadata_provider.get_metadata_for_type(type(element))
                child_key = create_index_key(key, index)
                if not self._visit(child_metadata, child_key, element, model, None):
                    is_valid = False
        finally:
            self._leave(model)
        return is_valid

    def _run_validators(
        self,
        validators: tuple[ValidatorEntryProtocol, ...],
        context: ValidationContext,
    ) -> bool:
        is_valid = True
        for validator in validators:
            results: list[ValidationResult] = list(validator.validate(context))
            for result in results:
                self.errors.add_error(
                    create_property_key(context.key, result.member_name),
                    result.message,
                    result.code,
                )
            if results:
                is_valid = False
                if self.options.stop_on_first_error:
                    break
        return is_valid

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _runtime_metadata(self, metadata: TypeMetadata, model: Any) -> TypeMetadata:
        """Metadata of the model's runtime type when it differs from the declared one."""
        if model is None or type(model) is metadata.model_type:
            return metadata
        return self.metadata_provider.get_metadata_for_type(type(model))

    def _enter(self, model: Any) -> None:
        self._current_path.add(id(model))
        self._depth += 1

    def _leave(self, model: Any) -> None:
        self._current_path.discard(id(model))
        self._depth -= 1

    def _abort(self, key: str, message: str) -> None:
        self._aborted_count += 1
        if self.limit_exceeded:
            return
        self.limit_exceeded = True
        logger.warning("Validation limit exceeded at %r: %s", key, message)
        self.errors.add_error(key, message, LIMIT_EXCEEDED_CODE)
