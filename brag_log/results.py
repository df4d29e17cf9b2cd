"""Structured result types returned by the journal commands."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class AddResult:
    """Result of appending an entry to a daily log.

    Attributes:
        path: The daily log file written.
        date: YYYY-MM-DD of the log.
        entry: The bullet line appended (after sanitization).
        created: True if the log was created from the template first.
    """
    path: Path
    date: str
    entry: str
    created: bool


@dataclass(frozen=True)
class PolishResult:
    """Result of polishing a day's Work Journal.

    Attributes:
        path: The daily log file.
        date: YYYY-MM-DD of the log.
        polished: Raw model response ("" when skipped).
        updated_sections: Category sections merged into the log, in order.
        skipped: True if the Work Journal was empty and no call was made.
        written: True if the log file was rewritten.
    """
    path: Path
    date: str
    polished: str = ""
    updated_sections: tuple[str, ...] = ()
    skipped: bool = False
    written: bool = False


@dataclass(frozen=True)
class SummaryResult:
    """Result of summarizing a month of daily logs."""
    path: Path
    year_month: str
    log_count: int
    summary: str


@dataclass(frozen=True)
class LogInfo:
    """A daily log on disk and how many raw entries it holds."""
    date: str
    path: Path
    entry_count: int
