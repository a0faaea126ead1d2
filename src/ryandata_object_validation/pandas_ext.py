from __future__ import annotations

from typing import TYPE_CHECKING, Any

from ryandata_object_validation.api import get_default_validator

if TYPE_CHECKING:
    import pandas as pd

    from ryandata_object_validation.models.errors import ModelErrorDictionary
    from ryandata_object_validation.validation.object_validator import ObjectValidator

FINDING_COLUMNS = ["key", "message", "code", "timestamp"]


def errors_to_frame(errors: ModelErrorDictionary) -> pd.DataFrame:
    """Convert an error sink into a DataFrame with one row per finding.

    Args:
        errors: Populated error sink.

    Returns:
        DataFrame with columns key, message, code and timestamp.
    """
    import pandas as pd

    rows = [
        {
            "key": entry["field"],
            "message": entry["message"],
            "code": (entry.get("context") or {}).get("code"),
            "timestamp": entry.get("timestamp"),
        }
        for entry in errors.audit_log()
    ]
    return pd.DataFrame(rows, columns=FINDING_COLUMNS)


def validate_series(
    series: pd.Series,
    validator: ObjectValidator | None = None,
) -> pd.DataFrame:
    """Validate every object in a Series.

    Missing values (None/NaN) are skipped.

    Args:
        series: Series of objects to validate.
        validator: Validator to use; the default validator when None.

    Returns:
        DataFrame of findings with a leading ``row`` column holding the
        Series index label of the object each finding belongs to.
    """
    import pandas as pd

    validator = validator or get_default_validator()
    frames: list[pd.DataFrame] = []

    for row, value in series.items():
        if _is_missing(value):
            continue
        context = validator.create_context()
        validator.validate(context, None, "", value)
        if context.errors.is_valid:
            continue
        frame = errors_to_frame(context.errors)
        frame.insert(0, "row", row)
        frames.append(frame)

    if not frames:
        return pd.DataFrame(columns=["row", *FINDING_COLUMNS])
    return pd.concat(frames, ignore_index=True)


def _is_missing(value: Any) -> bool:
    import pandas as pd

    if value is None:
        return True
    return bool(pd.api.types.is_scalar(value) and pd.isna(value))


class ObjectValidationAccessor:
    """Pandas accessor for object validation.

    Usage:
        >>> from ryandata_object_validation.pandas_ext import register_accessor
        >>> register_accessor()
        >>> pd.Series(orders).objval.validate()
    """

    def __init__(self, pandas_obj: pd.Series) -> None:
        self._obj = pandas_obj

    def validate(self, validator: ObjectValidator | None = None) -> pd.DataFrame:
        """Validate the objects in the Series; see ``validate_series``."""
        return validate_series(self._obj, validator=validator)

    def is_valid(self, validator: ObjectValidator | None = None) -> pd.Series:
        """Boolean Series telling which objects produced no findings."""
        import pandas as pd

        validator = validator or get_default_validator()

        def check(value: Any) -> bool:
            if _is_missing(value):
                return True
            context = validator.create_context()
            validator.validate(context, None, "", value)
            return context.errors.is_valid

        return pd.Series([check(v) for v in self._obj], index=self._obj.index, dtype=bool)


def register_accessor(name: str = "objval") -> None:
    """Register the validation accessor on pandas Series.

    After calling this, you can use:
        >>> series.objval.validate()

    Args:
        name: Name for the accessor (default: "objval").
    """
    import pandas as pd

    if not hasattr(pd.Series, name):
        pd.api.extensions.register_series_accessor(name)(ObjectValidationAccessor)
