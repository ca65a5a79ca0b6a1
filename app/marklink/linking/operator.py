"""Directory link operator.

Creates and removes single directory links. Creation never overwrites
anything already present at the link path, and removal never deletes an
entry that is not itself a link, so both operations are safe to retry.
Every outcome is returned as a result value; nothing is raised.
"""

import logging
import os
import subprocess
import sys
from pathlib import Path

from marklink.linking.models import LinkCreateResult, LinkRemoveResult, LinkStatus, LinkType
from marklink.utils.shell import run_command

logger = logging.getLogger(__name__)


def get_link_type(platform: str = sys.platform) -> LinkType:
    """Get the directory link type used on a platform.

    Args:
        platform: Platform identifier in ``sys.platform`` format.

    Returns:
        ``JUNCTION`` on Windows, ``SYMLINK`` everywhere else.
    """
    return LinkType.JUNCTION if platform == "win32" else LinkType.SYMLINK


def is_directory_link(path: Path) -> bool:
    """Check if a path is a symbolic link or junction, without following it."""
    return os.path.islink(path) or os.path.isjunction(path)


class LinkOperator:
    """Handles creation and removal of directory links.

    Attributes:
        _platform: Platform identifier deciding the link type.
    """

    def __init__(self, platform: str = sys.platform) -> None:
        """Initialize the LinkOperator.

        Args:
            platform: Platform identifier in ``sys.platform`` format.
        """
        self._platform = platform

    @property
    def link_type(self) -> LinkType:
        """Directory link type created by this operator."""
        return get_link_type(self._platform)

    def create_link(self, target_path: Path | str, link_path: Path | str) -> LinkCreateResult:
        """Create a directory link at ``link_path`` pointing to ``target_path``.

        Args:
            target_path: Existing directory the link should point to.
            link_path: Path of the link to create.

        Returns:
            ``CREATED`` on success, ``SKIPPED`` if anything already exists at
            ``link_path``, ``FAILED`` for an invalid target or a filesystem error.
        """
        target = Path(target_path)
        link = Path(link_path)

        if not target.is_dir():
            return LinkCreateResult(
                status=LinkStatus.FAILED,
                link_path=str(link),
                target_path=str(target),
                reason=f"Target is not a directory: {target}",
            )

        if _lexists(link):
            return LinkCreateResult(
                status=LinkStatus.SKIPPED,
                link_path=str(link),
                target_path=str(target),
                reason=f"Destination already exists: {link}",
            )

        try:
            if self.link_type == LinkType.JUNCTION:
                self._create_junction(target, link)
            else:
                link.symlink_to(target, target_is_directory=True)
        except OSError as e:
            return LinkCreateResult(
                status=LinkStatus.FAILED,
                link_path=str(link),
                target_path=str(target),
                reason=str(e),
            )

        logger.debug("Created %s %s -> %s", self.link_type.value, link, target)
        return LinkCreateResult(
            status=LinkStatus.CREATED,
            link_path=str(link),
            target_path=str(target),
        )

    def remove_link(self, link_path: Path | str) -> LinkRemoveResult:
        """Remove a directory link, never touching what it points to.

        Args:
            link_path: Path of the link to remove.

        Returns:
            ``REMOVED`` on success, ``SKIPPED`` if nothing is there or the
            entry is not a link, ``FAILED`` for a filesystem error.
        """
        link = Path(link_path)

        if not _lexists(link):
            return LinkRemoveResult(
                status=LinkStatus.SKIPPED,
                link_path=str(link),
                reason=f"Link does not exist: {link}",
            )

        if not is_directory_link(link):
            return LinkRemoveResult(
                status=LinkStatus.SKIPPED,
                link_path=str(link),
                reason=f"Path is not a symbolic link/junction: {link}",
            )

        try:
            link.unlink()
        except (PermissionError, IsADirectoryError) as e:
            # Some junction representations only go away with rmdir
            logger.debug("unlink failed for %s (%s), retrying with rmdir", link, e)
            try:
                os.rmdir(link)
            except OSError as retry_error:
                return LinkRemoveResult(
                    status=LinkStatus.FAILED,
                    link_path=str(link),
                    reason=str(retry_error),
                )
        except OSError as e:
            return LinkRemoveResult(
                status=LinkStatus.FAILED,
                link_path=str(link),
                reason=str(e),
            )

        logger.debug("Removed link %s", link)
        return LinkRemoveResult(status=LinkStatus.REMOVED, link_path=str(link))

    def _create_junction(self, target: Path, link: Path) -> None:
        """Create a Windows directory junction via ``mklink /J``.

        Raises:
            OSError: If mklink is unavailable or reports a failure.
        """
        try:
            result = run_command(["cmd", "/c", "mklink", "/J", str(link), str(target)])
        except subprocess.SubprocessError as e:
            raise OSError(str(e)) from e
        if not result.success:
            msg = result.stderr.strip() or result.stdout.strip() or "mklink /J failed"
            raise OSError(msg)


def _lexists(path: Path) -> bool:
    """Check if anything exists at a path, without following a final link."""
    try:
        path.lstat()
    except OSError:
        return False
    return True
