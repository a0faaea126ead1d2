"""Metadata layer: shape descriptions consumed by the validation engine."""

from ryandata_object_validation.metadata.enums import MetadataKind, ShapeKind
from ryandata_object_validation.metadata.markers import (
    ValidateNever,
    is_validate_never,
    validate_never,
)
from ryandata_object_validation.metadata.provider import (
    AnnotationMetadataProvider,
    MetadataProviderFactory,
)
from ryandata_object_validation.metadata.type_metadata import MetadataIdentity, TypeMetadata

__all__ = [
    "AnnotationMetadataProvider",
    "MetadataIdentity",
    "MetadataKind",
    "MetadataProviderFactory",
    "ShapeKind",
    "TypeMetadata",
    "ValidateNever",
    "is_validate_never",
    "validate_never",
]
