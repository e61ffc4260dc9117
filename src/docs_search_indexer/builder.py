"""Composition and filtering of search records."""

import uuid
from collections.abc import Iterable
from pathlib import PurePosixPath

from docs_search_indexer.models import (
    REFERENCES_LVL0,
    Classification,
    Hierarchy,
    PageMetadata,
    SearchRecord,
    SourceFile,
)
from docs_search_indexer.urls import DEFAULT_CONTENT_EXTENSIONS

# URL suffixes of directory placeholders that are never real content
EXCLUDED_URL_SUFFIXES = ("/index", "/.gitkeep")


class RecordBuilder:
    """Builds one search record per documentation file."""

    def __init__(
        self,
        content_extensions: Iterable[str] = DEFAULT_CONTENT_EXTENSIONS,
        excluded_suffixes: Iterable[str] = EXCLUDED_URL_SUFFIXES,
    ) -> None:
        """Initialise builder.

        Args:
            content_extensions: Suffixes stripped from category names.
            excluded_suffixes: URL endings dropped by filter_records.
        """
        self.content_extensions = tuple(content_extensions)
        self.excluded_suffixes = tuple(excluded_suffixes)

    def build(
        self,
        file: SourceFile,
        metadata: PageMetadata,
        body: str,
        url: str,
        classification: Classification | None = None,
    ) -> SearchRecord:
        """Compose a search record.

        Args:
            file: Source file the record describes.
            metadata: Extracted page metadata.
            body: Page body with the metadata block removed.
            url: Derived page URL.
            classification: Reference taxonomy, ignored for guide pages.

        Returns:
            SearchRecord with a fresh objectID.
        """
        record = SearchRecord(
            object_id=str(uuid.uuid4()),
            id=metadata.id,
            title=metadata.title,
            description=metadata.description,
            url=url,
            source=file.source,
            page_content=body,
            hierarchy=Hierarchy(lvl1=metadata.title),
        )

        if file.source == "reference":
            self._apply_classification(record, classification or Classification())

        return record

    def filter_records(self, records: Iterable[SearchRecord]) -> list[SearchRecord]:
        """Drop index pages and directory placeholders.

        Args:
            records: Built records.

        Returns:
            Records whose URL does not end in an excluded suffix.
        """
        return [record for record in records if not record.url.endswith(self.excluded_suffixes)]

    def _apply_classification(self, record: SearchRecord, classification: Classification) -> None:
        """Overwrite reference defaults with the classifier result.

        Args:
            record: Record built with guide defaults, modified in place.
            classification: Category, version and hierarchy for the URL.
        """
        record.category = self._strip_extension(classification.category)
        record.hierarchy.lvl0 = REFERENCES_LVL0

        if not classification.classified:
            return

        record.version = classification.version
        if classification.type is not None:
            record.type = classification.type
        record.hierarchy.lvl1 = classification.lvl1
        record.hierarchy.lvl2 = classification.lvl2
        record.hierarchy.lvl3 = classification.lvl3

    def _strip_extension(self, category: str | None) -> str | None:
        """Drop a content extension from a category segment.

        Args:
            category: Category taken from the URL, if any.

        Returns:
            The category without a trailing ".mdx" or ".md".
        """
        if category is None:
            return None
        if PurePosixPath(category).suffix in self.content_extensions:
            return PurePosixPath(category).stem
        return category
