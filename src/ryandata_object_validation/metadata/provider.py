"""Annotation-driven metadata provider.

Builds ``TypeMetadata`` once per type from dataclasses, pydantic models and
plain annotated classes. The engine never inspects runtime type information
itself; it only consumes the metadata produced here (or by any other
implementation of ``MetadataProviderProtocol``).
"""

from __future__ import annotations

import collections.abc
import dataclasses
import logging
import threading
import types
import typing
from collections import deque
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from pathlib import PurePath
from typing import Annotated, Any, ClassVar, Union, get_args, get_origin
from uuid import UUID

from pydantic import BaseModel

from ryandata_object_validation.core.factory import PluginFactory
from ryandata_object_validation.metadata.enums import MetadataKind, ShapeKind
from ryandata_object_validation.metadata.markers import (
    CONSTRAINTS_FIELD_KEY,
    VALIDATE_NEVER_FIELD_KEY,
    ValidateNever,
    is_validate_never,
)
from ryandata_object_validation.metadata.type_metadata import TypeMetadata
from ryandata_object_validation.protocols import MetadataProviderProtocol

logger = logging.getLogger(__name__)

SIMPLE_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    memoryview,
    int,
    float,
    complex,
    bool,
    Decimal,
    Fraction,
    date,
    datetime,
    time,
    timedelta,
    UUID,
    Enum,
    PurePath,
    type(None),
)

_ORDERED_COLLECTIONS: tuple[type, ...] = (list, tuple, deque, collections.abc.Sequence)


def _unwrap(hint: Any) -> tuple[Any, tuple[Any, ...]]:
    """Strip ``Annotated`` and ``Optional`` wrappers from a type hint.

    Returns:
        Tuple of (bare hint, collected Annotated extras).
    """
    extras: list[Any] = []
    while True:
        origin = get_origin(hint)
        if origin is Annotated:
            extras.extend(hint.__metadata__)
            hint = hint.__origin__
            continue
        if origin is Union or origin is types.UnionType:
            args = [arg for arg in get_args(hint) if arg is not type(None)]
            if len(args) == 1:
                hint = args[0]
                continue
            return object, tuple(extras)
        return hint, tuple(extras)


def _origin_class(hint: Any) -> Any:
    if hint is Any or isinstance(hint, (typing.TypeVar, str, typing.ForwardRef)):
        return object
    origin = get_origin(hint)
    return origin if origin is not None else hint


def _is_pydantic_model(cls: Any) -> bool:
    return isinstance(cls, type) and issubclass(cls, BaseModel)


def _plain_annotations(cls: type) -> dict[str, Any]:
    """Resolve a class's annotations, falling back to the raw mapping."""
    try:
        return typing.get_type_hints(cls, include_extras=True)
    except Exception as exc:  # unresolved forward references
        logger.debug("Could not resolve annotations for %s: %s", cls, exc)
        merged: dict[str, Any] = {}
        for klass in reversed(cls.__mro__):
            merged.update(getattr(klass, "__annotations__", {}) or {})
        return merged


def _has_properties(cls: type) -> bool:
    if dataclasses.is_dataclass(cls) or _is_pydantic_model(cls):
        return True
    if cls.__module__ == "builtins":
        return False
    return any(not name.startswith("_") for name in _plain_annotations(cls))


def _element_type(origin: type, args: tuple[Any, ...]) -> Any:
    if not args:
        return None
    if issubclass(origin, collections.abc.Mapping):
        return args[1] if len(args) == 2 else None
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0]
        return None
    return args[0]


def classify(hint: Any) -> tuple[ShapeKind, Any]:
    """Determine the shape of a bare (unwrapped) type hint.

    Returns:
        Tuple of (shape, declared element type or None).
    """
    origin = _origin_class(hint)
    if not isinstance(origin, type) or origin is object:
        return ShapeKind.SIMPLE, None
    if issubclass(origin, SIMPLE_TYPES):
        return ShapeKind.SIMPLE, None
    if dataclasses.is_dataclass(origin) or _is_pydantic_model(origin):
        return ShapeKind.OBJECT, None
    if issubclass(origin, collections.abc.Mapping) or issubclass(
        origin, collections.abc.Collection
    ):
        return ShapeKind.COLLECTION, _element_type(origin, get_args(hint))
    if _has_properties(origin):
        return ShapeKind.OBJECT, None
    return ShapeKind.SIMPLE, None


def _make_getter(name: str):
    def getter(container: Any) -> Any:
        return getattr(container, name, None)

    return getter


class AnnotationMetadataProvider:
    """Metadata provider driven by type annotations.

    Supports dataclasses, pydantic models and plain classes with class-level
    annotations. Metadata is cached per type hint; caches are guarded by a
    lock so concurrent first access from several validation calls is safe.

    Example:
        >>> provider = AnnotationMetadataProvider()
        >>> metadata = provider.get_metadata_for_type(Order)
        >>> [p.name for p in metadata.properties]
        ['id', 'items']
    """

    def __init__(self) -> None:
        self._type_cache: dict[Any, TypeMetadata] = {}
        self._property_cache: dict[Any, tuple[TypeMetadata, ...]] = {}
        self._lock = threading.RLock()

    def get_metadata_for_type(self, model_type: Any) -> TypeMetadata:
        """Get metadata describing ``model_type`` (a class or type hint)."""
        try:
            cached = self._type_cache.get(model_type)
        except TypeError:
            # Unhashable hint (e.g. Annotated with unhashable extras)
            return self._build_type_metadata(model_type)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._type_cache.get(model_type)
            if cached is None:
                cached = self._build_type_metadata(model_type)
                self._type_cache[model_type] = cached
                logger.debug("Built metadata for %s (%s)", model_type, cached.shape.value)
        return cached

    def get_metadata_for_properties(self, model_type: Any) -> tuple[TypeMetadata, ...]:
        """Get property metadata of ``model_type`` in declaration order."""
        cached = self._property_cache.get(model_type)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._property_cache.get(model_type)
            if cached is None:
                cached = tuple(self._build_properties(model_type))
                self._property_cache[model_type] = cached
        return cached

    def clear_cache(self) -> None:
        """Drop all cached metadata."""
        with self._lock:
            self._type_cache.clear()
            self._property_cache.clear()

    # ------------------------------------------------------------------
    # Builders
    # ------------------------------------------------------------------

    def _build_type_metadata(self, hint: Any) -> TypeMetadata:
        bare, extras = _unwrap(hint)
        model_type = _origin_class(bare)
        shape, element_type = classify(bare)
        suppressed = is_validate_never(model_type) or any(
            isinstance(extra, ValidateNever) for extra in extras
        )
        return TypeMetadata(
            model_type=model_type,
            shape=shape,
            metadata_kind=MetadataKind.TYPE,
            suppressed=suppressed,
            constraints=tuple(e for e in extras if not isinstance(e, ValidateNever)),
            element_type=element_type,
            provider=self,
        )

    def _build_properties(self, model_type: Any) -> list[TypeMetadata]:
        if not isinstance(model_type, type):
            return []

        if dataclasses.is_dataclass(model_type):
            hints = _plain_annotations(model_type)
            return [
                self._build_property(
                    model_type,
                    f.name,
                    hints.get(f.name, Any),
                    field_constraints=tuple(f.metadata.get(CONSTRAINTS_FIELD_KEY, ())),
                    field_suppressed=bool(f.metadata.get(VALIDATE_NEVER_FIELD_KEY, False)),
                )
                for f in dataclasses.fields(model_type)
            ]

        if _is_pydantic_model(model_type):
            return [
                self._build_property(
                    model_type,
                    name,
                    info.annotation if info.annotation is not None else Any,
                    field_constraints=tuple(info.metadata),
                )
                for name, info in model_type.model_fields.items()
            ]

        properties = []
        for name, hint in _plain_annotations(model_type).items():
            if name.startswith("_") or get_origin(hint) is ClassVar:
                continue
            properties.append(self._build_property(model_type, name, hint))
        return properties

    def _build_property(
        self,
        container_type: type,
        name: str,
        hint: Any,
        *,
        field_constraints: tuple[Any, ...] = (),
        field_suppressed: bool = False,
    ) -> TypeMetadata:
        bare, extras = _unwrap(hint)
        markers = field_constraints + extras
        model_type = _origin_class(bare)
        shape, element_type = classify(bare)
        suppressed = (
            field_suppressed
            or is_validate_never(model_type)
            or any(isinstance(marker, ValidateNever) for marker in markers)
        )
        return TypeMetadata(
            model_type=model_type,
            shape=shape,
            metadata_kind=MetadataKind.PROPERTY,
            name=name,
            container_type=container_type,
            suppressed=suppressed,
            constraints=tuple(m for m in markers if not isinstance(m, ValidateNever)),
            element_type=element_type,
            getter=_make_getter(name),
            provider=self,
        )


class MetadataProviderFactory(PluginFactory[MetadataProviderProtocol]):
    """Factory for creating metadata provider instances.

    Example:
        >>> provider = MetadataProviderFactory.create("annotations")
    """

    _registry: ClassVar[dict[str, type[MetadataProviderProtocol]]] = {}
    _default_type: ClassVar[str] = "annotations"
    _entity_name: ClassVar[str] = "metadata provider"

    @classmethod
    def _ensure_defaults_registered(cls) -> None:
        """Ensure the annotation provider is registered."""
        if "annotations" not in cls._registry:
            cls._registry["annotations"] = AnnotationMetadataProvider
