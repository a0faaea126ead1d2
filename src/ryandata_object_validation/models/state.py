"""Per-call validation state keyed by key path."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class ValidationStateEntry:
    """Traversal state of one node."""

    validated: bool = False
    suppressed: bool = False


class ValidationStateDictionary(dict[str, ValidationStateEntry]):
    """Mapping from key path to ``ValidationStateEntry``.

    One instance belongs to exactly one validation call. Callers may pre-mark
    paths as validated to have the engine skip them.

    Example:
        >>> state = ValidationStateDictionary()
        >>> state.mark_validated("address")  # skip the address subtree
    """

    def get_or_add(self, key: str) -> ValidationStateEntry:
        """Get the entry for ``key``, creating an unvalidated one if absent."""
        entry = self.get(key)
        if entry is None:
            entry = ValidationStateEntry()
            self[key] = entry
        return entry

    def is_validated(self, key: str) -> bool:
        entry = self.get(key)
        return entry is not None and entry.validated

    def is_suppressed(self, key: str) -> bool:
        entry = self.get(key)
        return entry is not None and entry.suppressed

    def mark_validated(self, key: str) -> None:
        self.get_or_add(key).validated = True

    def mark_suppressed(self, key: str) -> None:
        """Record that ``key`` was excluded from validation."""
        entry = self.get_or_add(key)
        entry.validated = True
        entry.suppressed = True
