"""Pytest configuration and fixtures for recipe-finder tests."""

from collections.abc import AsyncIterator, Callable
from pathlib import Path
from typing import Any

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "e2e: End-to-end tests requiring a real API key, npx and Chrome")


@pytest.fixture(autouse=True)
def config_file(tmp_path, monkeypatch) -> Path:
    """Point the JSON config file at a temp path so a real user config never leaks in."""
    path = tmp_path / "config" / "config.json"
    monkeypatch.setattr("recipe_finder.config.CONFIG_FILE", path)
    return path


class FakeQuery:
    """Stand-in for claude_agent_sdk.query that replays canned messages."""

    def __init__(self, messages: list[Any], error: Exception | None = None):
        self.messages = messages
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def __call__(self, *, prompt: str, options: Any) -> AsyncIterator[Any]:
        self.calls.append({"prompt": prompt, "options": options})
        for message in self.messages:
            yield message
        if self.error is not None:
            raise self.error


@pytest.fixture
def fake_query() -> Callable[..., FakeQuery]:
    """Factory for FakeQuery instances."""
    return FakeQuery
