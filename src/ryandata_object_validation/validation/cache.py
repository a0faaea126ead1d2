"""Process-wide cache of resolved rules per metadata identity."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Hashable
from typing import NamedTuple, TypeVar

from ryandata_object_validation.metadata.type_metadata import TypeMetadata
from ryandata_object_validation.protocols import ValidatorEntryProtocol, ValidatorProviderProtocol
from ryandata_object_validation.validation.composite import ValidatorProviderContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ResolvedValidators(NamedTuple):
    """Rules resolved for one metadata, plus the suppression signal."""

    validators: tuple[ValidatorEntryProtocol, ...]
    suppressed: bool = False


class ValidatorCache:
    """Memoizes the rules resolved for each metadata identity.

    Shared read-mostly by every validation call of an ``ObjectValidator``.
    The compute function for a given identity runs at most once, even when
    several threads request the same identity for the first time
    simultaneously; all callers observe the same stored value. A compute
    function that raises leaves nothing behind, so the next caller retries.
    """

    def __init__(self) -> None:
        self._entries: dict[Hashable, object] = {}
        self._lock = threading.Lock()
        self._pending: dict[Hashable, threading.Lock] = {}
        self._hits = 0
        self._misses = 0

    def get_or_compute(self, identity: Hashable, compute: Callable[[], T]) -> T:
        """Return the cached value for ``identity``, computing it once if absent.

        Args:
            identity: Hashable metadata identity.
            compute: Zero-argument function producing the value.

        Returns:
            The value stored for ``identity``.
        """
        try:
            value = self._entries[identity]
        except KeyError:
            pass
        else:
            self._hits += 1
            return value  # type: ignore[return-value]

        with self._lock:
            key_lock = self._pending.setdefault(identity, threading.Lock())

        with key_lock:
            if identity in self._entries:
                self._hits += 1
                return self._entries[identity]  # type: ignore[return-value]

            try:
                value = compute()
                with self._lock:
                    self._entries[identity] = value
                    self._misses += 1
            finally:
                with self._lock:
                    self._pending.pop(identity, None)
            logger.debug("Cached validators for %r", identity)
            return value

    def get_validators(
        self,
        metadata: TypeMetadata,
        provider: ValidatorProviderProtocol,
    ) -> ResolvedValidators:
        """Resolve (once) the rules ``provider`` supplies for ``metadata``."""

        def compute() -> ResolvedValidators:
            context = ValidatorProviderContext(metadata=metadata, suppressed=metadata.suppressed)
            validators = tuple(provider.get_validators(context))
            if context.suppressed:
                return ResolvedValidators((), suppressed=True)
            return ResolvedValidators(validators)

        return self.get_or_compute(metadata.identity, compute)

    def __contains__(self, identity: Hashable) -> bool:
        return identity in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def stats(self) -> dict[str, int]:
        """Get cache statistics.

        Returns:
            Dict with entries, hits and misses. Hit counting is not
            synchronized and is approximate under concurrency.
        """
        return {"entries": len(self._entries), "hits": self._hits, "misses": self._misses}

    def clear(self) -> None:
        """Drop every cached entry."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
