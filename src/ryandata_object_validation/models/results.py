"""Per-call and per-node value types passed between the engine and rules."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ryandata_object_validation.models.errors import ModelErrorDictionary

if TYPE_CHECKING:
    from ryandata_object_validation.metadata.type_metadata import TypeMetadata
    from ryandata_object_validation.protocols import MetadataProviderProtocol


@dataclass(frozen=True)
class ValidationResult:
    """A single finding produced by a rule.

    ``member_name`` is relative to the node that was validated; rules use it
    to report on a sub-member (e.g. one field of a composite value). The
    engine appends it to the node's key path.
    """

    message: str
    member_name: str = ""
    code: str | None = None


@dataclass
class InvocationContext:
    """Caller-owned context for one validation call.

    Holds the error sink the engine writes into, plus arbitrary items rules
    may consult (request data, current user, ...).
    """

    errors: ModelErrorDictionary = field(default_factory=ModelErrorDictionary)
    items: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ValidationContext:
    """Everything a rule needs to validate one node."""

    invocation: InvocationContext
    metadata: TypeMetadata
    key: str
    model: Any
    container: Any = None
    container_metadata: TypeMetadata | None = None
    metadata_provider: MetadataProviderProtocol | None = None
