"""Error sink populated by the validation engine.

``ModelErrorDictionary`` maps key paths to ordered error messages. Each
finding is also kept as a ``ProcessEntry`` so the full audit trail can be
exported for DataFrame analysis.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any

from abstract_validation_base import ProcessEntry, ProcessLog

from ryandata_object_validation.core.errors import (
    LIMIT_EXCEEDED_CODE,
    TOO_MANY_ERRORS_CODE,
    ObjectValidationError,
)

DEFAULT_MAX_ALLOWED_ERRORS = 200


@dataclass(frozen=True)
class ModelError:
    """A finding recorded under a key path."""

    message: str
    code: str | None = None


class ModelErrorDictionary(Mapping[str, list[str]]):
    """Mapping from key path to the ordered list of error messages.

    When the number of recorded errors would reach ``max_allowed_errors``,
    a single ``too_many_errors`` finding is recorded under the root key
    (``""``) and every later error is dropped.
    """

    def __init__(self, max_allowed_errors: int = DEFAULT_MAX_ALLOWED_ERRORS) -> None:
        if max_allowed_errors < 1:
            raise ObjectValidationError.invalid_option("max_allowed_errors", max_allowed_errors)
        self.max_allowed_errors = max_allowed_errors
        self.process_log = ProcessLog()
        self._errors: dict[str, list[ModelError]] = {}
        self._error_count = 0
        self._has_reached_max_errors = False

    # Mapping interface -------------------------------------------------

    def __getitem__(self, key: str) -> list[str]:
        return [error.message for error in self._errors[key]]

    def __iter__(self) -> Iterator[str]:
        return iter(self._errors)

    def __len__(self) -> int:
        return len(self._errors)

    def __repr__(self) -> str:
        return f"ModelErrorDictionary({self.to_dict()!r})"

    # Recording ---------------------------------------------------------

    def add_error(self, key: str, message: str, code: str | None = None) -> bool:
        """Record a finding under ``key``.

        Args:
            key: Key path of the node the finding applies to.
            message: Human-readable message.
            code: Machine-readable code (optional).

        Returns:
            True if recorded, False if dropped because the error cap was hit.
        """
        if self._has_reached_max_errors:
            return False

        if self._error_count >= self.max_allowed_errors - 1:
            self._record(
                "",
                f"The maximum number of allowed errors ({self.max_allowed_errors}) "
                "has been reached.",
                TOO_MANY_ERRORS_CODE,
            )
            self._has_reached_max_errors = True
            return False

        self._record(key, message, code)
        return True

    def _record(self, key: str, message: str, code: str | None) -> None:
        self._errors.setdefault(key, []).append(ModelError(message, code))
        self._error_count += 1
        self.process_log.errors.append(
            ProcessEntry(
                entry_type="error",
                field=key,
                message=message,
                original_value=None,
                context={"code": code} if code else {},
            )
        )

    # Queries -----------------------------------------------------------

    def get_errors(self, key: str) -> list[ModelError]:
        """Get the findings (message and code) recorded under ``key``."""
        return list(self._errors.get(key, ()))

    def has_code(self, code: str) -> bool:
        return any(error.code == code for errors in self._errors.values() for error in errors)

    @property
    def error_count(self) -> int:
        return self._error_count

    @property
    def is_valid(self) -> bool:
        return self._error_count == 0

    @property
    def has_reached_max_errors(self) -> bool:
        return self._has_reached_max_errors

    @property
    def limit_exceeded(self) -> bool:
        """True if a traversal guard or the error cap cut validation short."""
        return self._has_reached_max_errors or self.has_code(LIMIT_EXCEEDED_CODE)

    def to_dict(self) -> dict[str, list[str]]:
        return {key: self[key] for key in self._errors}

    def audit_log(self, source: str | None = None) -> list[dict[str, Any]]:
        """Export recorded findings for DataFrame analysis.

        Args:
            source: Optional source identifier to add to each entry.

        Returns:
            List of dicts suitable for pd.DataFrame(), sorted by timestamp.
        """
        entries: list[dict[str, Any]] = []
        for entry in self.process_log.errors:
            d = entry.model_dump()
            if source:
                d["source"] = source
            entries.append(d)
        return sorted(entries, key=lambda x: x.get("timestamp", ""))
