"""Publishing contract for search index targets."""

import json
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from docs_search_indexer.models import SearchRecord

logger = logging.getLogger(__name__)


class IndexPublisher(Protocol):
    """A search index that is fully replaced on every build."""

    def clear(self) -> None:
        """Remove every record from the index."""
        ...

    def publish(self, records: Sequence[SearchRecord]) -> int:
        """Write records to the index and return how many were stored."""
        ...


class JsonExportPublisher:
    """Writes records to a JSON payload file for a hosted search service."""

    def __init__(self, path: Path) -> None:
        """Initialise publisher with the output path.

        Args:
            path: JSON file to write.
        """
        self.path = path

    def clear(self) -> None:
        """Reset the payload file to an empty array."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("[]\n", encoding="utf-8")

    def publish(self, records: Sequence[SearchRecord]) -> int:
        """Write all records as a JSON array.

        Args:
            records: Records to export.

        Returns:
            Number of records written.
        """
        payload = [record.to_dict() for record in records]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2)
            f.write("\n")
        logger.debug("Wrote %d records to %s", len(payload), self.path)
        return len(payload)
