"""Directory linking module.

This module provides marker folder scanning, directory link creation
and removal, and the registry of links managed by marklink.
"""

from marklink.linking.models import (
    LinkCreateResult,
    LinkRemoveResult,
    LinkStatus,
    LinkType,
    ManagedLinkRecord,
    ReconcileResult,
    ScanCandidate,
    WorkspaceRoot,
    create_link_record,
)
from marklink.linking.operator import LinkOperator, get_link_type, is_directory_link
from marklink.linking.registry import MANAGED_LINKS_KEY, ManagedLinkRegistry
from marklink.linking.scanner import MarkerScanner, scan_for_markers

__all__ = [
    "MANAGED_LINKS_KEY",
    "LinkCreateResult",
    "LinkOperator",
    "LinkRemoveResult",
    "LinkStatus",
    "LinkType",
    "ManagedLinkRecord",
    "ManagedLinkRegistry",
    "MarkerScanner",
    "ReconcileResult",
    "ScanCandidate",
    "WorkspaceRoot",
    "create_link_record",
    "get_link_type",
    "is_directory_link",
    "scan_for_markers",
]
