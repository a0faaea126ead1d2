"""Type and property metadata consumed by the validation engine.

Metadata is built once per type by a metadata provider and shared by every
validation call. Instances are immutable; ``properties`` and
``element_metadata`` are resolved lazily through the owning provider so that
self-referencing types do not recurse at build time.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING, Any, NamedTuple

from ryandata_object_validation.metadata.enums import MetadataKind, ShapeKind

if TYPE_CHECKING:
    from ryandata_object_validation.protocols import MetadataProviderProtocol


class MetadataIdentity(NamedTuple):
    """Hashable key distinguishing one type or property position from another."""

    kind: MetadataKind
    model_type: Any
    container_type: Any
    name: str | None
    suppressed: bool
    constraints: tuple[Any, ...]


def _hashable_marker(marker: Any) -> Any:
    """Return ``marker``, or an identity token when it cannot be hashed."""
    try:
        hash(marker)
    except TypeError:
        return (type(marker), id(marker))
    return marker


@dataclass(frozen=True, eq=False)
class TypeMetadata:
    """Shape description of a type or of a property position.

    Attributes:
        model_type: Declared type (``object`` when unknown).
        shape: How values are walked (simple, collection or object).
        metadata_kind: TYPE for a type, PROPERTY for a position in a container.
        name: Property name for PROPERTY metadata, otherwise None.
        container_type: Declaring type for PROPERTY metadata.
        suppressed: True when validation is excluded for this node.
        constraints: Declarative rule markers attached to this position.
        element_type: Declared element type for collections, if known.
        getter: Reads the property value from a container instance.
        provider: Provider used to resolve nested metadata lazily.
    """

    model_type: Any
    shape: ShapeKind
    metadata_kind: MetadataKind = MetadataKind.TYPE
    name: str | None = None
    container_type: Any = None
    suppressed: bool = False
    constraints: tuple[Any, ...] = ()
    element_type: Any = None
    getter: Callable[[Any], Any] | None = field(default=None, repr=False)
    provider: MetadataProviderProtocol | None = field(default=None, repr=False, compare=False)

    @property
    def identity(self) -> MetadataIdentity:
        """Stable cache key for this metadata."""
        return MetadataIdentity(
            self.metadata_kind,
            self.model_type,
            self.container_type,
            self.name,
            self.suppressed,
            tuple(_hashable_marker(constraint) for constraint in self.constraints),
        )

    @property
    def is_property(self) -> bool:
        return self.metadata_kind is MetadataKind.PROPERTY

    @property
    def display_name(self) -> str:
        """Name used in rule messages."""
        if self.name:
            return self.name
        return getattr(self.model_type, "__name__", str(self.model_type))

    @cached_property
    def properties(self) -> tuple[TypeMetadata, ...]:
        """Child property metadata, in declaration order."""
        if self.shape is not ShapeKind.OBJECT or self.provider is None:
            return ()
        return tuple(self.provider.get_metadata_for_properties(self.model_type))

    @cached_property
    def element_metadata(self) -> TypeMetadata | None:
        """Metadata for the declared element type of a collection."""
        if self.shape is not ShapeKind.COLLECTION or self.element_type is None:
            return None
        if self.provider is None:
            return None
        return self.provider.get_metadata_for_type(self.element_type)

    def get_value(self, container: Any) -> Any:
        """Read this property's value from ``container``."""
        if self.getter is None:
            return getattr(container, self.name or "", None)
        return self.getter(container)
