"""Marker folder scanner.

Walks workspace root trees looking for directories that contain a
marker folder (e.g. ``.vscode``). Traversal is iterative with an explicit
stack, honors a set of excluded directory names, and can optionally
follow symbolic links with protection against link cycles.
"""

import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from marklink.core.config import LinkerConfig
from marklink.linking.models import ScanCandidate, WorkspaceRoot

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _StackNode:
    """A directory waiting to be visited."""

    path: Path
    is_root: bool = False


def _is_link_entry(entry: os.DirEntry[str]) -> bool:
    """Check if a directory entry is a symbolic link or a junction."""
    return entry.is_symlink() or entry.is_junction()


def _list_entries(directory: Path) -> list[os.DirEntry[str]]:
    """List a directory, treating any failure as an empty directory."""
    try:
        with os.scandir(directory) as it:
            return list(it)
    except OSError as e:
        logger.debug("Cannot list directory %s: %s", directory, e)
        return []


def _canonical(path: Path) -> Path:
    """Resolve a path fully, falling back to the path itself on failure."""
    try:
        return path.resolve(strict=True)
    except (OSError, RuntimeError):
        return path


class MarkerScanner:
    """Scans workspace roots for marker folders.

    A marker folder sitting directly in a workspace root is never reported:
    the root itself is not a sub-project worth linking.

    Args:
        marker_names: Exact, case-sensitive folder names that mark a project.
        exclude_names: Exact directory names whose subtrees are not descended
            into. An excluded name can still be reported as a marker.
        follow_symlinks: If True, descend into symbolic links that resolve to
            directories. Each canonical directory is traversed at most once
            per root.
    """

    def __init__(
        self,
        marker_names: Iterable[str],
        exclude_names: Iterable[str] = (),
        *,
        follow_symlinks: bool = False,
    ) -> None:
        self._marker_names = frozenset(marker_names)
        self._exclude_names = frozenset(exclude_names)
        self._follow_symlinks = follow_symlinks

    @classmethod
    def from_config(cls, config: LinkerConfig) -> "MarkerScanner":
        """Create a scanner from a normalized configuration."""
        return cls(
            config.marker_folder_names,
            config.exclude_dir_names,
            follow_symlinks=config.follow_symlinks,
        )

    def scan(self, roots: Iterable[WorkspaceRoot]) -> list[ScanCandidate]:
        """Scan all roots and return candidates sorted by marker path.

        Args:
            roots: Workspace roots to traverse.

        Returns:
            Candidates from every root, ordered by absolute marker path.
        """
        candidates: list[ScanCandidate] = []
        for root in roots:
            candidates.extend(self._scan_root(root))

        candidates.sort(key=lambda c: str(c.marker_path))
        return candidates

    def _scan_root(self, root: WorkspaceRoot) -> list[ScanCandidate]:
        """Traverse a single root depth-first using an explicit stack."""
        found: list[ScanCandidate] = []
        stack: list[_StackNode] = [_StackNode(root.path, is_root=True)]
        visited: set[Path] = set()

        while stack:
            node = stack.pop()

            if self._follow_symlinks:
                canonical = _canonical(node.path)
                if canonical in visited:
                    logger.debug("Skipping already visited directory: %s", node.path)
                    continue
                visited.add(canonical)

            entries = _list_entries(node.path)
            if not entries:
                continue

            if not node.is_root:
                found.extend(self._match_markers(root, node.path, entries))

            for entry in entries:
                if entry.name in self._exclude_names:
                    continue
                child = node.path / entry.name
                if self._should_descend(entry):
                    stack.append(_StackNode(child))

        return found

    def _match_markers(
        self,
        root: WorkspaceRoot,
        directory: Path,
        entries: list[os.DirEntry[str]],
    ) -> list[ScanCandidate]:
        """Build candidates for marker entries in a non-root directory."""
        matches: list[ScanCandidate] = []
        for entry in entries:
            if entry.name not in self._marker_names:
                continue
            try:
                if not (_is_link_entry(entry) or entry.is_dir(follow_symlinks=False)):
                    continue
            except OSError:
                continue

            marker_path = directory / entry.name
            matches.append(
                ScanCandidate(
                    root_name=root.name,
                    root_path=root.path,
                    parent_directory_path=directory,
                    marker_name=entry.name,
                    marker_path=marker_path,
                    relative_marker_path=_relative_to_root(marker_path, root.path),
                )
            )
        return matches

    def _should_descend(self, entry: os.DirEntry[str]) -> bool:
        """Decide whether a non-excluded entry is pushed for traversal."""
        try:
            if _is_link_entry(entry):
                # Links are only followed on request, and only to directories
                return self._follow_symlinks and entry.is_dir(follow_symlinks=True)
            return entry.is_dir(follow_symlinks=False)
        except OSError:
            return False


def _relative_to_root(path: Path, root: Path) -> str:
    """Render a marker path relative to its root ("." when identical)."""
    relative = os.path.relpath(path, root)
    return relative or "."


def scan_for_markers(roots: Iterable[WorkspaceRoot], config: LinkerConfig) -> list[ScanCandidate]:
    """Scan roots for marker folders using the given configuration."""
    return MarkerScanner.from_config(config).scan(roots)
