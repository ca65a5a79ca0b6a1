"""Persistent key-value state for marklink.

This module provides the StateStore protocol consumed by the managed
link registry, a JSON file implementation used by the CLI, and an
in-memory implementation for tests and embedding.
"""

import json
import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Any, Protocol

from marklink.core.paths import get_state_path

logger = logging.getLogger(__name__)


class StateStore(Protocol):
    """Key-value store with read-with-default and whole-value writes."""

    def get(self, key: str, default: Any) -> Any:
        """Return the value stored under ``key``, or ``default``."""
        ...

    def update(self, key: str, value: Any) -> None:
        """Replace the value stored under ``key``."""
        ...


class MemoryStateStore:
    """StateStore kept entirely in memory."""

    def __init__(self, initial: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str, default: Any) -> Any:
        return self._data.get(key, default)

    def update(self, key: str, value: Any) -> None:
        self._data[key] = value


class JsonStateStore:
    """StateStore backed by a single JSON object on disk.

    Storage location: ~/.local/state/marklink/state.json

    The whole file is rewritten on every update. Writes go to a temporary
    file in the same directory first and are moved into place with
    os.replace(), so a crash never leaves a half-written state file.

    Attributes:
        path: Location of the state file.
    """

    def __init__(self, path: Path | None = None) -> None:
        """Initialize JsonStateStore.

        Args:
            path: Optional override for the state file.
                  Default: ~/.local/state/marklink/state.json
        """
        self._path = path if path is not None else get_state_path()

    @property
    def path(self) -> Path:
        """Path to the state file."""
        return self._path

    def get(self, key: str, default: Any) -> Any:
        """Read a value from the state file.

        A missing, unreadable or corrupt file reads as empty.

        Args:
            key: Key to look up.
            default: Value returned when the key is absent.

        Returns:
            The stored value or ``default``.
        """
        return self._read().get(key, default)

    def update(self, key: str, value: Any) -> None:
        """Write a value to the state file.

        Creates the file and parent directories if they don't exist.

        Args:
            key: Key to write.
            value: JSON-serializable value.

        Raises:
            OSError: If the file cannot be written.
        """
        data = self._read()
        data[key] = value

        self._path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path: Path | None = None
        try:
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, indent=2)
                f.write("\n")
            os.replace(str(tmp_path), str(self._path))
        except OSError:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            raise

    def _read(self) -> dict[str, Any]:
        """Load the whole state object, treating problems as empty state."""
        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable state file %s: %s", self._path, e)
            return {}

        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: top level is not an object", self._path)
            return {}
        return data
