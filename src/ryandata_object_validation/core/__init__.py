"""Reusable, domain-agnostic building blocks.

Usage:
    from ryandata_object_validation.core import (
        ObjectValidationError,
        PluginFactory,
        create_index_key,
        create_property_key,
    )
"""

from __future__ import annotations

from ryandata_object_validation.core.errors import (
    LIMIT_EXCEEDED_CODE,
    PACKAGE_NAME,
    TOO_MANY_ERRORS_CODE,
    ObjectValidationError,
)
from ryandata_object_validation.core.factory import PluginFactory
from ryandata_object_validation.core.key_paths import create_index_key, create_property_key

__all__ = [
    # Errors
    "ObjectValidationError",
    "PACKAGE_NAME",
    "LIMIT_EXCEEDED_CODE",
    "TOO_MANY_ERRORS_CODE",
    # Factory
    "PluginFactory",
    # Key paths
    "create_index_key",
    "create_property_key",
]
