"""Discovery of guide and reference source files."""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from docs_search_indexer.errors import DiscoveryError
from docs_search_indexer.models import CollectedFiles

logger = logging.getLogger(__name__)


class FileCollector:
    """Enumerates documentation files under the guide and reference roots."""

    def collect(
        self,
        guides_root: Path,
        reference_root: Path,
        denylist: Iterable[str] = (),
    ) -> CollectedFiles:
        """Collect every regular file under both roots.

        Args:
            guides_root: Root directory of hand-written guide pages.
            reference_root: Root directory of generated reference pages.
            denylist: Guide-root-relative paths that must never be indexed.

        Returns:
            CollectedFiles with guide and reference paths.

        Raises:
            DiscoveryError: If either root is missing or unreadable.
        """
        denied = {Path(entry).as_posix() for entry in denylist}

        guide_paths = [
            path for path in self._walk(guides_root) if path.relative_to(guides_root).as_posix() not in denied
        ]
        reference_paths = self._walk(reference_root)

        logger.info(
            "Found %d guide files and %d reference files",
            len(guide_paths),
            len(reference_paths),
        )
        return CollectedFiles(guide_paths=guide_paths, reference_paths=reference_paths)

    @staticmethod
    def _walk(root: Path) -> list[Path]:
        """List regular files under root, recursively.

        Args:
            root: Directory to enumerate.

        Returns:
            Sorted list of file paths.

        Raises:
            DiscoveryError: If root is missing, not a directory, or unreadable.
        """
        if not root.exists():
            raise DiscoveryError(root)
        if not root.is_dir():
            raise DiscoveryError(root, "is not a directory")

        files: list[Path] = []
        try:
            for dirpath, _dirnames, filenames in os.walk(root, onerror=_reraise):
                files.extend(Path(dirpath) / name for name in filenames)
        except OSError as exc:
            raise DiscoveryError(root, "is unreadable") from exc

        return sorted(path for path in files if path.is_file())


def _reraise(error: OSError) -> None:
    """Propagate a directory listing failure out of os.walk.

    Args:
        error: Error raised while listing a directory.

    Raises:
        OSError: Always, so no directory is silently skipped.
    """
    raise error
