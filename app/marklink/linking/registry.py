"""Managed link registry.

Persists the set of directory links marklink created, so that only
those links are ever offered for removal. The registry is reconciled
against the live filesystem before use: records whose link has vanished
are pruned, while records whose status cannot be determined are kept.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Iterable
from typing import Any

from marklink.core.store import StateStore
from marklink.linking.models import ManagedLinkRecord, ReconcileResult

logger = logging.getLogger(__name__)

MANAGED_LINKS_KEY = "marklink.managedLinks"


def _link_still_exists(link_path: str) -> bool:
    """Check whether a recorded link is still a link on disk.

    Only a definite "not found" counts as gone. Any other failure to
    inspect the path keeps the record.
    """
    try:
        st = os.lstat(link_path)
    except FileNotFoundError:
        return False
    except OSError as e:
        logger.debug("Cannot inspect %s, keeping record: %s", link_path, e)
        return True

    return stat.S_ISLNK(st.st_mode) or os.path.isjunction(link_path)


class ManagedLinkRegistry:
    """Registry of managed links stored in a StateStore.

    Attributes:
        _store: Key-value store holding the serialized records.
    """

    def __init__(self, store: StateStore) -> None:
        self._store = store

    def list(self) -> list[ManagedLinkRecord]:
        """Read the persisted records, dropping malformed entries.

        Returns:
            Records in persisted order.
        """
        raw = self._store.get(MANAGED_LINKS_KEY, [])
        if not isinstance(raw, list):
            logger.warning("Ignoring managed link state of type %s", type(raw).__name__)
            return []

        records: list[ManagedLinkRecord] = []
        for index, item in enumerate(raw):
            if not isinstance(item, dict):
                continue
            try:
                records.append(ManagedLinkRecord.from_dict(item))
            except (KeyError, TypeError, ValueError) as e:
                logger.debug("Dropping malformed managed link entry %d: %s", index, e)
        return records

    def reconcile(self) -> ReconcileResult:
        """Prune records whose link no longer exists on disk.

        The reduced set is persisted only if something was pruned.

        Returns:
            Active records and the number of pruned records.
        """
        current = self.list()
        active = [record for record in current if _link_still_exists(record.link_path)]
        removed_count = len(current) - len(active)

        if removed_count:
            logger.debug("Pruned %d stale managed link(s)", removed_count)
            self._save(active)

        return ReconcileResult(active=active, removed_count=removed_count)

    def upsert(self, records: Iterable[ManagedLinkRecord]) -> None:
        """Insert records, replacing any existing record with the same link path.

        Args:
            records: Records to insert.
        """
        merged: dict[str, ManagedLinkRecord] = {r.link_path: r for r in self.list()}
        for record in records:
            merged[record.link_path] = record

        self._save(sorted(merged.values(), key=lambda r: r.link_path))

    def remove_by_path(self, link_paths: Iterable[str]) -> None:
        """Drop every record whose link path is in ``link_paths``.

        Args:
            link_paths: Link paths to forget. An empty input is a no-op.
        """
        removal = set(link_paths)
        if not removal:
            return

        remaining = [r for r in self.list() if r.link_path not in removal]
        self._save(remaining)

    def _save(self, records: list[ManagedLinkRecord]) -> None:
        payload: list[dict[str, Any]] = [r.to_dict() for r in records]
        self._store.update(MANAGED_LINKS_KEY, payload)
