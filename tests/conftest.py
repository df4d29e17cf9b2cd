"""Shared fixtures for brag_log tests."""

from unittest.mock import MagicMock

import pytest

from brag_log.config import Config


SAMPLE_LOG = """---
tags:
  - daily-log
  - journal
---

## Work Journal

- [10:00] Task 1
- [11:00] Task 2

## Shipped & Deliverables

- Feature A completed

## Collaboration & Kudos

## Brain Dump / Notes

Some notes here"""


@pytest.fixture
def sample_log():
    """Daily log with front matter, a filled, an empty and a trailing section."""
    return SAMPLE_LOG


@pytest.fixture
def config(tmp_path):
    """Config pointing logs and summaries at a temp dir, with a fake API key."""
    return Config(
        logs_dir=tmp_path / "logs",
        summaries_dir=tmp_path / "summaries",
        api_key="test-key",
    )


@pytest.fixture
def mock_anthropic_response():
    """Factory for creating mock Anthropic API responses."""
    def _create_response(text: str, stop_reason: str = "end_turn"):
        response = MagicMock()
        response.content = [MagicMock(text=text)]
        response.stop_reason = stop_reason
        return response
    return _create_response


@pytest.fixture
def mock_client(mock_anthropic_response):
    """Factory for a sync Anthropic client whose messages.create returns text."""
    def _create_client(text: str):
        client = MagicMock()
        client.messages.create.return_value = mock_anthropic_response(text)
        return client
    return _create_client
