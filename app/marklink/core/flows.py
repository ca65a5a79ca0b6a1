"""End-to-end link and unlink flows.

Sequences the registry, the marker scanner, the link operator and the
interactive UI into the two user-facing operations:

- scan-and-link: reconcile, scan, pick a candidate, pick a destination
  root, create one link, record it.
- unlink-managed: reconcile, pick managed links, remove them, forget the
  ones that are gone.

Cancelling any pick stops the flow cleanly without touching the
filesystem.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Generic, Protocol, TypeVar

from marklink.core.config import DestinationRootMode, LinkerConfig
from marklink.linking.models import (
    LinkStatus,
    ManagedLinkRecord,
    ScanCandidate,
    WorkspaceRoot,
    create_link_record,
)
from marklink.linking.operator import LinkOperator
from marklink.linking.registry import ManagedLinkRegistry
from marklink.linking.scanner import scan_for_markers

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Number of skip/failure reasons shown after a flow
MAX_REPORTED_REASONS = 3


@dataclass(frozen=True)
class SelectionItem(Generic[T]):
    """A labeled choice offered to the operator.

    Attributes:
        label: Primary text.
        data: Opaque payload returned when the item is picked.
        description: Optional short description shown next to the label.
        detail: Optional longer detail line.
    """

    label: str
    data: T
    description: str | None = None
    detail: str | None = None


@dataclass(frozen=True, slots=True)
class PickOptions:
    """Presentation hints for a pick."""

    title: str
    placeholder: str | None = None


class LinkerUi(Protocol):
    """Interactive surface used by the flows.

    Both pick methods return None when the operator cancels.
    """

    def pick_one(self, items: Sequence[SelectionItem[T]], options: PickOptions) -> T | None: ...

    def pick_many(
        self, items: Sequence[SelectionItem[T]], options: PickOptions
    ) -> list[T] | None: ...

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


@dataclass(slots=True)
class ScanAndLinkSummary:
    """Counts produced by the scan-and-link flow."""

    created: int = 0
    skipped: int = 0
    failed: int = 0
    created_links: list[ManagedLinkRecord] = field(default_factory=lambda: [])


@dataclass(slots=True)
class UnlinkManagedSummary:
    """Counts produced by the unlink-managed flow."""

    removed: int = 0
    skipped: int = 0
    failed: int = 0


class UnlinkChoice(str, Enum):
    """Kind of entry in the unlink pick list."""

    ALL = "all"
    SINGLE = "single"


@dataclass(frozen=True, slots=True)
class UnlinkSelection:
    """Payload of an unlink pick item."""

    kind: UnlinkChoice
    record: ManagedLinkRecord | None = None


def _candidate_item(candidate: ScanCandidate) -> SelectionItem[ScanCandidate]:
    return SelectionItem(
        label=candidate.parent_directory_path.name,
        description=f"{candidate.root_name}: {candidate.relative_marker_path}",
        detail=str(candidate.marker_path),
        data=candidate,
    )


def _report(ui: LinkerUi, counts: str, reasons: list[str]) -> None:
    """Report aggregate counts and a sample of the collected reasons."""
    ui.info(counts)
    if reasons:
        ui.warn(f"Details: {' | '.join(reasons[:MAX_REPORTED_REASONS])}")


def choose_destination_root(
    roots: Sequence[WorkspaceRoot],
    config: LinkerConfig,
    ui: LinkerUi,
) -> WorkspaceRoot | None:
    """Pick the workspace root that receives the new link.

    Args:
        roots: Open workspace roots (at least one).
        config: Configuration deciding whether to ask.
        ui: Picker used when more than one root is open.

    Returns:
        The chosen root, or None if the operator cancelled.
    """
    if len(roots) == 1 or config.destination_root_mode == DestinationRootMode.FIRST_ROOT:
        return roots[0]

    selected = ui.pick_one(
        [SelectionItem(label=root.name, description=str(root.path), data=root) for root in roots],
        PickOptions(
            title="Choose destination workspace root",
            placeholder="Select where the link will be created",
        ),
    )
    if selected is None:
        ui.info("Canceled before destination root selection.")
    return selected


def run_scan_and_link(
    roots: Sequence[WorkspaceRoot],
    config: LinkerConfig,
    registry: ManagedLinkRegistry,
    ui: LinkerUi,
    operator: LinkOperator | None = None,
) -> ScanAndLinkSummary:
    """Scan for marker folders and link the selected one into a root.

    Args:
        roots: Open workspace roots, in priority order.
        config: Scanner and destination settings.
        registry: Managed link registry to reconcile and update.
        ui: Picker and notification surface.
        operator: Link operator; defaults to one for the current platform.

    Returns:
        Summary with the created/skipped/failed counts and new records.
    """
    operator = operator or LinkOperator()
    summary = ScanAndLinkSummary()

    registry.reconcile()

    if not roots:
        ui.info("No workspace root is open.")
        return summary

    candidates = scan_for_markers(roots, config)
    logger.debug("Found %d candidate(s) in %d root(s)", len(candidates), len(roots))
    if not candidates:
        ui.info("No candidate folders found.")
        return summary

    selected = ui.pick_one(
        [_candidate_item(candidate) for candidate in candidates],
        PickOptions(
            title="Select one folder to link",
            placeholder="Choose one candidate folder",
        ),
    )
    if selected is None:
        ui.info("Canceled, no folder selected.")
        return summary

    destination = choose_destination_root(roots, config, ui)
    if destination is None:
        return summary

    reasons: list[str] = []
    link_path = destination.path / selected.marker_name
    result = operator.create_link(selected.marker_path, link_path)

    if result.status == LinkStatus.CREATED:
        summary.created += 1
        summary.created_links.append(create_link_record(link_path, selected.marker_path))
    elif result.status == LinkStatus.SKIPPED:
        summary.skipped += 1
    else:
        summary.failed += 1
    if result.reason:
        reasons.append(result.reason)

    if summary.created_links:
        registry.upsert(summary.created_links)

    _report(
        ui,
        f"Created {summary.created}, skipped {summary.skipped}, failed {summary.failed}.",
        reasons,
    )
    return summary


def run_unlink_managed(
    registry: ManagedLinkRegistry,
    ui: LinkerUi,
    operator: LinkOperator | None = None,
) -> UnlinkManagedSummary:
    """Remove managed links chosen by the operator.

    Removed and already-missing links are forgotten; links that failed to
    be removed stay in the registry for another attempt.

    Args:
        registry: Managed link registry to reconcile and update.
        ui: Picker and notification surface.
        operator: Link operator; defaults to one for the current platform.

    Returns:
        Summary with the removed/skipped/failed counts.
    """
    operator = operator or LinkOperator()
    summary = UnlinkManagedSummary()

    current = registry.reconcile().active
    if not current:
        ui.info("There are no managed links to remove.")
        return summary

    items: list[SelectionItem[UnlinkSelection]] = [
        SelectionItem(
            label="Remove all managed links",
            description=f"{len(current)} link(s)",
            data=UnlinkSelection(UnlinkChoice.ALL),
        )
    ]
    items.extend(
        SelectionItem(
            label=Path(record.link_path).name,
            description=record.link_path,
            detail=f"-> {record.target_path}",
            data=UnlinkSelection(UnlinkChoice.SINGLE, record),
        )
        for record in current
    )

    selections = ui.pick_many(
        items,
        PickOptions(
            title="Select managed links to remove",
            placeholder='Choose "Remove all managed links" or specific links',
        ),
    )
    if not selections:
        ui.info("Canceled, no links selected.")
        return summary

    if any(s.kind == UnlinkChoice.ALL for s in selections):
        targets = current
    else:
        targets = [s.record for s in selections if s.record is not None]

    unique: dict[str, ManagedLinkRecord] = {}
    for record in targets:
        unique[record.link_path] = record

    released: list[str] = []
    reasons: list[str] = []

    for link_path in unique:
        result = operator.remove_link(link_path)
        if result.status == LinkStatus.REMOVED:
            summary.removed += 1
        elif result.status == LinkStatus.SKIPPED:
            summary.skipped += 1
        else:
            summary.failed += 1
        if result.released:
            released.append(link_path)
        if result.reason:
            reasons.append(result.reason)

    registry.remove_by_path(released)

    _report(
        ui,
        f"Removed {summary.removed}, skipped {summary.skipped}, failed {summary.failed}.",
        reasons,
    )
    return summary
