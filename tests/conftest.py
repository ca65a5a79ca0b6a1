"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any

import pytest
from marklink.core.flows import PickOptions, SelectionItem
from marklink.core.store import MemoryStateStore
from marklink.linking.registry import ManagedLinkRegistry

Picker = Callable[[Sequence[SelectionItem[Any]], PickOptions], Any]


class ScriptedUi:
    """LinkerUi double that answers picks with scripted callables.

    Each pick call pops the next answer function; with none left the pick
    is treated as cancelled. All notifications and pick calls are recorded.
    """

    def __init__(self, *answers: Picker) -> None:
        self._answers = list(answers)
        self.picks: list[tuple[PickOptions, list[SelectionItem[Any]]]] = []
        self.infos: list[str] = []
        self.warns: list[str] = []
        self.errors: list[str] = []

    def _answer(self, items: Sequence[SelectionItem[Any]], options: PickOptions) -> Any:
        self.picks.append((options, list(items)))
        if not self._answers:
            return None
        return self._answers.pop(0)(items, options)

    def pick_one(self, items: Sequence[SelectionItem[Any]], options: PickOptions) -> Any:
        return self._answer(items, options)

    def pick_many(self, items: Sequence[SelectionItem[Any]], options: PickOptions) -> Any:
        return self._answer(items, options)

    def info(self, message: str) -> None:
        self.infos.append(message)

    def warn(self, message: str) -> None:
        self.warns.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)


@pytest.fixture(autouse=True)
def isolated_xdg(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG config and state directories into the test's tmp dir."""
    xdg = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(xdg / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(xdg / "state"))
    return xdg


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """Create an empty workspace root directory."""
    root = tmp_path / "workspace"
    root.mkdir()
    return root


@pytest.fixture
def store() -> MemoryStateStore:
    """Create an empty in-memory state store."""
    return MemoryStateStore()


@pytest.fixture
def registry(store: MemoryStateStore) -> ManagedLinkRegistry:
    """Create a registry over the in-memory store."""
    return ManagedLinkRegistry(store)


@pytest.fixture
def scripted_ui() -> type[ScriptedUi]:
    """Expose the ScriptedUi class to tests."""
    return ScriptedUi
