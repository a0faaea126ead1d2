"""Tests for ValidationOptions and its environment defaults."""

from __future__ import annotations

import pytest

from ryandata_object_validation import ObjectValidationError, ValidationOptions


class TestDefaults:
    def test_builtin_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for name in ("MAX_DEPTH", "MAX_NODES", "MAX_ERRORS", "STOP_ON_FIRST_ERROR"):
            monkeypatch.delenv(f"RYANDATA_VALIDATION_{name}", raising=False)
        options = ValidationOptions()
        assert options.max_depth == 32
        assert options.max_nodes == 100_000
        assert options.max_errors == 200
        assert options.stop_on_first_error is False

    def test_environment_overrides(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RYANDATA_VALIDATION_MAX_DEPTH", "5")
        monkeypatch.setenv("RYANDATA_VALIDATION_MAX_NODES", "50")
        monkeypatch.setenv("RYANDATA_VALIDATION_MAX_ERRORS", "7")
        monkeypatch.setenv("RYANDATA_VALIDATION_STOP_ON_FIRST_ERROR", "true")
        options = ValidationOptions()
        assert (options.max_depth, options.max_nodes, options.max_errors) == (5, 50, 7)
        assert options.stop_on_first_error is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "FALSE"])
    def test_falsy_flag_values(self, monkeypatch: pytest.MonkeyPatch, value: str) -> None:
        monkeypatch.setenv("RYANDATA_VALIDATION_STOP_ON_FIRST_ERROR", value)
        assert ValidationOptions().stop_on_first_error is False

    def test_explicit_values_win(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("RYANDATA_VALIDATION_MAX_DEPTH", "5")
        assert ValidationOptions(max_depth=9).max_depth == 9


class TestValidation:
    @pytest.mark.parametrize("option", ["max_depth", "max_nodes", "max_errors"])
    @pytest.mark.parametrize("value", [0, -1, True, "10"])
    def test_invalid_values_rejected(self, option: str, value: object) -> None:
        with pytest.raises(ObjectValidationError) as exc_info:
            ValidationOptions(**{option: value})
        assert exc_info.value.type == "invalid_option"
        assert exc_info.value.context["option"] == option

    def test_options_are_frozen(self) -> None:
        options = ValidationOptions(max_depth=3)
        with pytest.raises(AttributeError):
            options.max_depth = 4  # type: ignore[misc]
