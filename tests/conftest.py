"""Shared fixtures for taskgate tests."""

from __future__ import annotations

import pytest

from taskgate import log
from taskgate.registry import MutationEvent, TaskManager
from taskgate.tasks.model import Task


def _make_task(
    id: str,
    name: str = "",
    complete: bool = False,
    description: str | None = None,
) -> Task:
    return Task(id=id, name=name or f"Task {id}", description=description, complete=complete)


@pytest.fixture
def make_task():
    """Factory fixture that creates Task instances with a fixed id."""
    return _make_task


@pytest.fixture
def manager() -> TaskManager:
    return TaskManager()


@pytest.fixture
def abc_manager(manager: TaskManager) -> TaskManager:
    """Registry holding incomplete tasks A, B and C with no edges."""
    for tid in ("A", "B", "C"):
        manager.register_task(_make_task(tid))
    return manager


@pytest.fixture
def events(manager: TaskManager) -> list[MutationEvent]:
    """Collect every mutation event emitted by ``manager``."""
    received: list[MutationEvent] = []
    manager.subscribe(received.append)
    return received


@pytest.fixture(autouse=True)
def _reset_verbose():
    yield
    log.set_verbose(False)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep TASKGATE_* settings from the outer environment out of tests."""
    monkeypatch.delenv("TASKGATE_DEBUG", raising=False)
    monkeypatch.delenv("TASKGATE_PROMPT", raising=False)
