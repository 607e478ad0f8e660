"""Test fixtures for Labelwise."""

from tests.fixtures.mocks import (
    DEFAULT_LABEL_TEXT,
    MockClaudeService,
    create_mock_with_error,
)

__all__ = [
    "DEFAULT_LABEL_TEXT",
    "MockClaudeService",
    "create_mock_with_error",
]
