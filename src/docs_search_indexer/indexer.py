"""Pipeline that turns a documentation tree into a published search index."""

import logging
from collections.abc import Iterable, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from docs_search_indexer.builder import RecordBuilder
from docs_search_indexer.classifier import HierarchyClassifier
from docs_search_indexer.collector import FileCollector
from docs_search_indexer.config import IndexerConfig
from docs_search_indexer.errors import MetadataParseError, PublishError
from docs_search_indexer.extractor import MetadataExtractor
from docs_search_indexer.models import (
    BuildReport,
    BuildResult,
    ExtractedPage,
    FileWarning,
    PageMetadata,
    SearchRecord,
    SourceFile,
    SourceKind,
)
from docs_search_indexer.publisher import IndexPublisher
from docs_search_indexer.urls import DEFAULT_CONTENT_EXTENSIONS, UrlDeriver

logger = logging.getLogger(__name__)


class DocsSearchIndexer:
    """Builds search records for guide and reference pages and republishes them."""

    def __init__(
        self,
        publisher: IndexPublisher,
        guides_root: Path,
        reference_root: Path,
        denylist: Iterable[str] = (),
        display_names: Mapping[str, str] | None = None,
        content_extensions: Iterable[str] = DEFAULT_CONTENT_EXTENSIONS,
        max_workers: int = 1,
    ) -> None:
        """Initialise indexer.

        Args:
            publisher: Index that receives the finished records.
            guides_root: Root directory of guide pages.
            reference_root: Root directory of reference pages.
            denylist: Guide-root-relative paths to skip.
            display_names: Reference category codes mapped to product names.
            content_extensions: File suffixes stripped from URLs.
            max_workers: Threads used to process files; 1 is sequential.
        """
        self.publisher = publisher
        self.guides_root = guides_root
        self.reference_root = reference_root
        self.denylist = tuple(denylist)
        self.max_workers = max_workers

        content_extensions = tuple(content_extensions)
        self.collector = FileCollector()
        self.extractor = MetadataExtractor()
        self.url_deriver = UrlDeriver(guides_root, reference_root, content_extensions)
        self.classifier = HierarchyClassifier(display_names or {})
        self.builder = RecordBuilder(content_extensions)

    @classmethod
    def from_config(cls, config: IndexerConfig, publisher: IndexPublisher) -> "DocsSearchIndexer":
        """Create an indexer from loaded configuration.

        Args:
            config: Indexer configuration.
            publisher: Index that receives the finished records.

        Returns:
            DocsSearchIndexer instance.
        """
        return cls(
            publisher,
            guides_root=config.guides_root,
            reference_root=config.reference_root,
            denylist=config.denylist,
            display_names=config.display_names,
            content_extensions=config.content_extensions,
            max_workers=config.max_workers,
        )

    def build_records(self) -> BuildResult:
        """Discover files and build the filtered record set.

        Returns:
            BuildResult with records sorted by URL and any file warnings.

        Raises:
            DiscoveryError: If a documentation root is missing or unreadable.
        """
        collected = self.collector.collect(self.guides_root, self.reference_root, self.denylist)
        tasks: list[tuple[Path, SourceKind]] = [(path, "guide") for path in collected.guide_paths]
        tasks += [(path, "reference") for path in collected.reference_paths]

        if self.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                outcomes = list(executor.map(lambda task: self._process_file(*task), tasks))
        else:
            outcomes = [self._process_file(path, source) for path, source in tasks]

        records: list[SearchRecord] = []
        warnings: list[FileWarning] = []
        for record, warning in outcomes:
            if record is not None:
                records.append(record)
            if warning is not None:
                logger.warning("%s: %s", warning.path, warning.message)
                warnings.append(warning)

        kept = self.builder.filter_records(records)
        logger.info("Built %d records (%d placeholder pages skipped)", len(kept), len(records) - len(kept))
        return BuildResult(records=sorted(kept, key=lambda record: record.url), warnings=warnings)

    def rebuild_index(self) -> BuildReport:
        """Build all records, then clear the index and publish them.

        Nothing is sent to the publisher unless discovery succeeds.

        Returns:
            BuildReport with the published count and file warnings.

        Raises:
            DiscoveryError: If a documentation root is missing or unreadable.
            PublishError: If clearing or publishing fails.
        """
        result = self.build_records()

        logger.info("Clearing existing index...")
        try:
            self.publisher.clear()
        except Exception as exc:
            msg = f"Failed to clear index: {exc}"
            raise PublishError(msg, attempted=0, warnings=result.warnings) from exc

        attempted = len(result.records)
        try:
            published = self.publisher.publish(result.records)
        except Exception as exc:
            msg = f"Failed to publish records: {exc}"
            raise PublishError(msg, attempted=attempted, warnings=result.warnings) from exc

        if published != attempted:
            msg = f"Index reported {published} records saved"
            raise PublishError(msg, attempted=attempted, warnings=result.warnings)

        logger.info("Successfully indexed %d records (%d file warnings)", published, len(result.warnings))
        return BuildReport(indexed=published, warnings=result.warnings)

    def _process_file(self, path: Path, source: SourceKind) -> tuple[SearchRecord | None, FileWarning | None]:
        """Read one file and build its record.

        Args:
            path: Path to the source file.
            source: Content family of the file.

        Returns:
            The record (None if the file could not be read) and an optional warning.
        """
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Failed to read %s: %s", path, exc)
            return None, FileWarning(path=str(path), message=f"unreadable file: {exc}")

        warning = None
        try:
            page = self.extractor.extract(text, path)
        except MetadataParseError as exc:
            warning = FileWarning(path=str(path), message=exc.reason)
            page = ExtractedPage(metadata=PageMetadata(), body=text)

        file = SourceFile(path=path, source=source, text=text)
        url = self.url_deriver.derive_url(path, source)
        classification = self.classifier.classify(url, page.metadata.title) if source == "reference" else None
        record = self.builder.build(file, page.metadata, page.body, url, classification)

        logger.debug("Built: %s", url)
        return record, warning
