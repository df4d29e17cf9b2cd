"""Tests for the command result types."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from brag_log.results import AddResult, LogInfo, PolishResult, SummaryResult


class TestPolishResult:
    def test_defaults(self):
        result = PolishResult(path=Path("2026-01-05.md"), date="2026-01-05")
        assert result.polished == ""
        assert result.updated_sections == ()
        assert result.skipped is False
        assert result.written is False

    def test_frozen(self):
        result = PolishResult(path=Path("2026-01-05.md"), date="2026-01-05")
        with pytest.raises(FrozenInstanceError):
            result.written = True


class TestOtherResults:
    def test_add_result_fields(self):
        result = AddResult(path=Path("a.md"), date="2026-01-05", entry="- x", created=True)
        assert result.entry == "- x"
        assert result.created is True

    def test_summary_result_fields(self):
        result = SummaryResult(path=Path("s.md"), year_month="2026-01", log_count=2, summary="ok")
        assert result.log_count == 2

    def test_log_info_equality(self):
        assert LogInfo("2026-01-05", Path("a.md"), 1) == LogInfo("2026-01-05", Path("a.md"), 1)
