"""Metadata enumerations."""

from __future__ import annotations

from enum import Enum


class ShapeKind(str, Enum):
    """How the engine walks a value described by a piece of metadata."""

    SIMPLE = "simple"
    COLLECTION = "collection"
    OBJECT = "object"


class MetadataKind(str, Enum):
    """Whether metadata describes a type or a property position in a container."""

    TYPE = "type"
    PROPERTY = "property"
