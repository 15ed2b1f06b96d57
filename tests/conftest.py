"""Shared pytest fixtures and configuration."""

from collections.abc import Callable
from typing import Any

import pytest

from statustracker.github import ItemKind, ItemState, Label, LiveItem


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


# Shared fixtures


@pytest.fixture
def make_live_item() -> Callable[..., LiveItem]:
    """Factory for LiveItem snapshots with sensible defaults."""

    def _make(**overrides: Any) -> LiveItem:
        values: dict[str, Any] = {
            "title": "Fix crash",
            "state": ItemState.OPEN,
            "kind": ItemKind.ISSUE,
            "url": "https://github.com/acme/widgets/issues/42",
            "labels": [Label(name="p1", color="ff0000")],
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-02T00:00:00Z",
        }
        values.update(overrides)
        return LiveItem(**values)

    return _make


@pytest.fixture
def issue_payload() -> Callable[..., dict[str, Any]]:
    """Factory for GitHub issues endpoint JSON bodies."""

    def _make(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": "Fix crash",
            "state": "open",
            "labels": [{"id": 1, "name": "p1", "color": "ff0000", "default": False}],
            "html_url": "https://github.com/acme/widgets/issues/42",
            "created_at": "2024-01-01T00:00:00Z",
            "updated_at": "2024-01-02T00:00:00Z",
        }
        payload.update(overrides)
        return payload

    return _make
