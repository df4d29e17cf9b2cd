"""Local-time clock helpers and daily log discovery."""

import re
from datetime import datetime
from pathlib import Path

from .security import validate_year_month_format

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Daily log filenames: 2026-01-05.md
_DAILY_LOG_RE = re.compile(r"^([0-9]{4}-[0-9]{2}-[0-9]{2})\.md$")


def today() -> str:
    """Today's local date as YYYY-MM-DD."""
    return datetime.now().strftime(DATE_FORMAT)


def current_time() -> str:
    """Current local time as 24-hour HH:MM."""
    return datetime.now().strftime(TIME_FORMAT)


def daily_log_date(path: Path) -> str | None:
    """Return the YYYY-MM-DD a daily log is named after, or None."""
    match = _DAILY_LOG_RE.match(path.name)
    return match.group(1) if match else None


def get_month_logs(year_month: str, logs_dir: Path) -> list[Path]:
    """Return the daily log files for a month, oldest first.

    Args:
        year_month: Month in YYYY-MM format.
        logs_dir: Directory holding daily logs.

    Returns:
        Sorted list of paths. Empty if logs_dir doesn't exist.

    Raises:
        InvalidFormatError: If year_month is malformed.
    """
    validate_year_month_format(year_month)
    if not logs_dir.is_dir():
        return []

    return sorted(
        path for path in logs_dir.glob(f"{year_month}-*.md")
        if path.is_file()
        and "summary" not in path.name
        and daily_log_date(path) is not None
    )
