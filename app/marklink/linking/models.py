"""Linking domain models.

This module defines the data structures shared by the marker scanner,
the link operator and the managed link registry: workspace roots, scan
candidates, persisted link records, and the tagged results of single
link mutations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import Any


class LinkType(str, Enum):
    """Kind of directory link created on the current platform.

    Attributes:
        SYMLINK: POSIX-style directory symbolic link.
        JUNCTION: Windows directory junction.
    """

    SYMLINK = "symlink"
    JUNCTION = "junction"


class LinkStatus(str, Enum):
    """Outcome of a single link mutation.

    ``CREATED`` is only produced by link creation and ``REMOVED`` only by
    link removal; ``SKIPPED`` and ``FAILED`` are shared.

    Attributes:
        CREATED: A new directory link was created.
        REMOVED: An existing directory link was removed.
        SKIPPED: Nothing was changed; the goal state was not reachable safely
            or was already reached.
        FAILED: The filesystem rejected the operation.
    """

    CREATED = "created"
    REMOVED = "removed"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class WorkspaceRoot:
    """A top-level directory the operator works within.

    Attributes:
        name: Display name of the root.
        path: Absolute filesystem path of the root.
    """

    name: str
    path: Path

    @classmethod
    def from_path(cls, path: Path) -> WorkspaceRoot:
        """Create a root named after the final component of its resolved path."""
        resolved = path.expanduser().resolve()
        return cls(name=resolved.name or str(resolved), path=resolved)


@dataclass(frozen=True, slots=True)
class ScanCandidate:
    """A marker folder discovered below a workspace root.

    Attributes:
        root_name: Name of the workspace root the marker was found in.
        root_path: Path of that workspace root.
        parent_directory_path: Directory containing the marker folder.
        marker_name: Name of the marker folder (e.g., ``.vscode``).
        marker_path: Absolute path of the marker folder.
        relative_marker_path: Marker path relative to ``root_path``.
    """

    root_name: str
    root_path: Path
    parent_directory_path: Path
    marker_name: str
    marker_path: Path
    relative_marker_path: str

    def __post_init__(self) -> None:
        """Validate that the marker path is derived from its parent."""
        if self.marker_path != self.parent_directory_path / self.marker_name:
            msg = (
                f"Marker path {self.marker_path} is not "
                f"{self.parent_directory_path}/{self.marker_name}"
            )
            raise ValueError(msg)

    def to_dict(self) -> dict[str, str]:
        """Serialize to a JSON-friendly dictionary."""
        return {
            "root_name": self.root_name,
            "root_path": str(self.root_path),
            "parent_directory_path": str(self.parent_directory_path),
            "marker_name": self.marker_name,
            "marker_path": str(self.marker_path),
            "relative_marker_path": self.relative_marker_path,
        }


@dataclass(frozen=True, slots=True)
class ManagedLinkRecord:
    """A directory link created and tracked by marklink.

    Attributes:
        link_path: Absolute path of the link entry itself.
        target_path: Absolute path the link points to.
        created_at: Creation time in ISO 8601 format (UTC).
    """

    link_path: str
    target_path: str
    created_at: str

    def __post_init__(self) -> None:
        """Validate record data after initialization."""
        if not self.link_path:
            msg = "Link path cannot be empty"
            raise ValueError(msg)
        if not self.target_path:
            msg = "Target path cannot be empty"
            raise ValueError(msg)
        if not self.created_at:
            msg = "Creation timestamp cannot be empty"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, str]:
        """Serialize to dictionary for state storage."""
        return {
            "link_path": self.link_path,
            "target_path": self.target_path,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ManagedLinkRecord:
        """Deserialize from dictionary.

        Raises:
            KeyError: If required fields are missing.
            TypeError: If a field is not a string.
            ValueError: If a field is empty.
        """
        values = {key: data[key] for key in ("link_path", "target_path", "created_at")}
        for key, value in values.items():
            if not isinstance(value, str):
                msg = f"{key} must be a string, got {type(value).__name__}"
                raise TypeError(msg)
        return cls(**values)


def create_link_record(link_path: Path | str, target_path: Path | str) -> ManagedLinkRecord:
    """Factory function to create a record stamped with the current time."""
    return ManagedLinkRecord(
        link_path=str(link_path),
        target_path=str(target_path),
        created_at=datetime.now(UTC).isoformat(),
    )


@dataclass(frozen=True, slots=True)
class LinkCreateResult:
    """Result of a single link creation attempt.

    Attributes:
        status: ``CREATED``, ``SKIPPED`` or ``FAILED``.
        link_path: Path where the link was to be created.
        target_path: Directory the link was to point to.
        reason: Explanation for a skip or failure, None on success.
    """

    status: LinkStatus
    link_path: str
    target_path: str
    reason: str | None = None

    @property
    def created(self) -> bool:
        """Check if a new link was created."""
        return self.status == LinkStatus.CREATED


@dataclass(frozen=True, slots=True)
class LinkRemoveResult:
    """Result of a single link removal attempt.

    Attributes:
        status: ``REMOVED``, ``SKIPPED`` or ``FAILED``.
        link_path: Path of the link that was to be removed.
        reason: Explanation for a skip or failure, None on success.
    """

    status: LinkStatus
    link_path: str
    reason: str | None = None

    @property
    def released(self) -> bool:
        """Check if the registry no longer needs to track this path.

        Both removed and skipped links are released; only a failure keeps
        the record around for another attempt.
        """
        return self.status in (LinkStatus.REMOVED, LinkStatus.SKIPPED)


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of reconciling the registry against the filesystem.

    Attributes:
        active: Records whose link still exists.
        removed_count: Number of records pruned.
    """

    active: list[ManagedLinkRecord] = field(default_factory=lambda: [])
    removed_count: int = 0
