"""Validation of user-supplied dates and of the file paths built from them."""

import re
from datetime import date
from pathlib import Path

from .errors import InvalidFormatError, PathTraversalError

_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
_YEAR_MONTH_RE = re.compile(r"[0-9]{4}-[0-9]{2}")


def validate_path_within_base(path: Path | str, base_dir: Path | str) -> Path:
    """Resolve path and make sure it stays inside base_dir.

    Args:
        path: Target file path.
        base_dir: Directory the target must live in.

    Returns:
        The resolved path.

    Raises:
        PathTraversalError: If the resolved path escapes base_dir.
    """
    resolved = Path(path).resolve()
    base = Path(base_dir).resolve()
    if not resolved.is_relative_to(base):
        raise PathTraversalError(
            f"Path traversal detected: {path} resolves outside {base_dir}"
        )
    return resolved


def _check_raw(value: object, label: str) -> str:
    if not isinstance(value, str) or not value:
        raise InvalidFormatError(f"Invalid {label}: must be a non-empty string")
    if "\0" in value:
        raise InvalidFormatError(f"Invalid {label}: null bytes not allowed")
    return value


def validate_date_format(value: str) -> str:
    """Validate a YYYY-MM-DD string that names a real calendar day.

    Returns:
        The validated string, unchanged.

    Raises:
        InvalidFormatError: On a bad pattern or an impossible date.
    """
    value = _check_raw(value, "date")
    if not _DATE_RE.fullmatch(value):
        raise InvalidFormatError(f"Invalid date format: {value!r} (must be YYYY-MM-DD)")

    year, month, day = (int(part) for part in value.split("-"))
    try:
        date(year, month, day)
    except ValueError as e:
        raise InvalidFormatError(f"Invalid date: {value} ({e})") from e
    return value


def validate_year_month_format(value: str) -> str:
    """Validate a YYYY-MM string with a month between 01 and 12.

    Returns:
        The validated string, unchanged.

    Raises:
        InvalidFormatError: On path separators, a bad pattern or a bad month.
    """
    value = _check_raw(value, "year-month")
    if "/" in value or "\\" in value:
        raise InvalidFormatError(
            "Invalid year-month format: path separators not allowed"
        )
    if not _YEAR_MONTH_RE.fullmatch(value):
        raise InvalidFormatError(
            f"Invalid year-month format: {value!r} (must be YYYY-MM)"
        )

    month = int(value[5:])
    if not 1 <= month <= 12:
        raise InvalidFormatError(
            "Invalid year-month format: month must be between 01 and 12"
        )
    return value
