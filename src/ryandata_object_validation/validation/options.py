"""Engine configuration.

Defaults are read from the environment so deployments can tune the
traversal guards without code changes.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from ryandata_object_validation.core.errors import ObjectValidationError


def _env_int(name: str, default: int) -> int:
    return int(os.getenv(name, str(default)))


def _env_flag(name: str, default: str = "0") -> bool:
    value = os.getenv(name, default)
    return value.lower() not in {"0", "false", "no", ""}


@dataclass(frozen=True)
class ValidationOptions:
    """Traversal guards and aggregation behaviour.

    Attributes:
        max_depth: Deepest nesting level visited below the root.
        max_nodes: Maximum number of nodes visited per call.
        max_errors: Error cap for sinks created by the validator.
        stop_on_first_error: Stop running a node's rules after the first
            rule that reports a finding (children are still visited).
    """

    max_depth: int = field(
        default_factory=lambda: _env_int("RYANDATA_VALIDATION_MAX_DEPTH", 32)
    )
    max_nodes: int = field(
        default_factory=lambda: _env_int("RYANDATA_VALIDATION_MAX_NODES", 100_000)
    )
    max_errors: int = field(
        default_factory=lambda: _env_int("RYANDATA_VALIDATION_MAX_ERRORS", 200)
    )
    stop_on_first_error: bool = field(
        default_factory=lambda: _env_flag("RYANDATA_VALIDATION_STOP_ON_FIRST_ERROR")
    )

    def __post_init__(self) -> None:
        for option in ("max_depth", "max_nodes", "max_errors"):
            value = getattr(self, option)
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                raise ObjectValidationError.invalid_option(option, value)
