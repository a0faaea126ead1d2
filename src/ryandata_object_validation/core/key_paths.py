"""Key path construction.

Key paths identify a node relative to the validation root, e.g.
``"order.items[1].name"``. An empty prefix denotes the root itself, so a
property of the root is addressed by its bare name.
"""

from __future__ import annotations

from typing import Any


def create_property_key(prefix: str, property_name: str | None) -> str:
    """Append a property name to a key path.

    Args:
        prefix: Key path of the container.
        property_name: Property (or rule member) name; empty or None
            returns the prefix unchanged.

    Returns:
        Dot-qualified key path.
    """
    if not property_name:
        return prefix
    if not prefix:
        return property_name
    if property_name.startswith("["):
        return prefix + property_name
    return f"{prefix}.{property_name}"


def create_index_key(prefix: str, index: Any) -> str:
    """Append a collection index (or mapping key) to a key path."""
    return f"{prefix}[{index}]"
