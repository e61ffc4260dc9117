"""Errors raised while building and publishing the search index."""

from collections.abc import Sequence
from pathlib import Path

from docs_search_indexer.models import FileWarning


class DocsIndexError(Exception):
    """Base class for search index build failures."""


class DiscoveryError(DocsIndexError):
    """A configured documentation root is missing or unreadable."""

    def __init__(self, root: Path | str, reason: str = "does not exist") -> None:
        self.root = Path(root)
        super().__init__(f"Documentation root {reason}: {self.root}")


class MetadataParseError(DocsIndexError):
    """An inline metadata declaration could not be delimited."""

    def __init__(self, reason: str, path: Path | str | None = None) -> None:
        self.reason = reason
        self.path = str(path) if path is not None else None
        super().__init__(f"{self.path}: {reason}" if self.path else reason)


class PublishError(DocsIndexError):
    """Clearing or publishing to the index failed.

    Args:
        message: Description of the failure.
        attempted: Number of records handed to the publisher.
        warnings: File warnings from the build that preceded the failure.
    """

    def __init__(self, message: str, attempted: int = 0, warnings: Sequence[FileWarning] = ()) -> None:
        self.attempted = attempted
        self.warnings = list(warnings)
        super().__init__(f"{message} ({attempted} records attempted)")
