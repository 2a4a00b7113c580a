"""Shared fixtures for unit tests."""

from typing import Any

import pytest

from rowwise.config import STRICT_ARITY_ENV
from rowwise.registry import clear_hosts


class Recorder:
    """Callable that records every ``(title, body)`` it is given."""

    def __init__(self) -> None:
        self.args: list[tuple[Any, Any]] = []

    def __call__(self, title: Any, body: Any) -> None:
        self.args.append((title, body))

    @property
    def call_count(self) -> int:
        return len(self.args)

    @property
    def titles(self) -> list[Any]:
        return [title for title, _ in self.args]

    @property
    def bodies(self) -> list[Any]:
        return [body for _, body in self.args]


class RecordingHost:
    """Stand-in for a host framework: ``it``/``it.skip`` and ``describe``/``describe.only``."""

    def __init__(self) -> None:
        self.it = Recorder()
        self.it.skip = Recorder()
        self.describe = Recorder()
        self.describe.only = Recorder()


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path, monkeypatch):
    """Keep the ambient registry and config lookups independent of the machine."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv(STRICT_ARITY_ENV, raising=False)
    clear_hosts()
    yield
    clear_hosts()


@pytest.fixture
def host() -> RecordingHost:
    return RecordingHost()
