"""Data models for documentation search records."""

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Literal

SourceKind = Literal["guide", "reference"]
RecordType = Literal["lvl1", "lvl2", "lvl3"]

GUIDES_LVL0 = "Guides"
REFERENCES_LVL0 = "References"


@dataclass(frozen=True)
class SourceFile:
    """A discovered documentation file and the family it belongs to."""

    path: Path
    source: SourceKind
    text: str


@dataclass
class PageMetadata:
    """Metadata extracted from front-matter or an inline declaration."""

    id: str | None = None
    title: str | None = None
    description: str | None = None


@dataclass
class ExtractedPage:
    """Metadata and body text split out of a raw file."""

    metadata: PageMetadata
    body: str


@dataclass
class Hierarchy:
    """Search UI grouping path, broadest level first."""

    lvl0: str = GUIDES_LVL0
    lvl1: str | None = None
    lvl2: str | None = None
    lvl3: str | None = None
    lvl4: str | None = None
    lvl5: str | None = None
    lvl6: str | None = None


@dataclass
class Classification:
    """Reference page taxonomy derived from URL segments."""

    category: str | None = None
    version: str | None = None
    type: RecordType | None = None
    lvl1: str | None = None
    lvl2: str | None = None
    lvl3: str | None = None
    classified: bool = False


@dataclass
class SearchRecord:
    """Represents one page in the search index."""

    object_id: str
    id: str | None
    title: str | None
    description: str | None
    url: str
    source: SourceKind
    page_content: str
    category: str | None = None
    version: str | None = None
    type: RecordType = "lvl1"
    hierarchy: Hierarchy = field(default_factory=Hierarchy)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the record in the shape the hosted index expects.

        Returns:
            Mapping with camel-cased keys and a nested hierarchy.
        """
        return {
            "objectID": self.object_id,
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "url": self.url,
            "source": self.source,
            "pageContent": self.page_content,
            "category": self.category,
            "version": self.version,
            "type": self.type,
            "hierarchy": asdict(self.hierarchy),
        }


@dataclass
class CollectedFiles:
    """Guide and reference file paths found under the configured roots."""

    guide_paths: list[Path]
    reference_paths: list[Path]


@dataclass
class FileWarning:
    """A file-level problem that did not abort the build."""

    path: str
    message: str


@dataclass
class BuildResult:
    """Records produced by a build, before publishing."""

    records: list[SearchRecord]
    warnings: list[FileWarning] = field(default_factory=list)


@dataclass
class BuildReport:
    """Summary of a completed rebuild."""

    indexed: int
    warnings: list[FileWarning] = field(default_factory=list)


@dataclass
class SearchResult:
    """Represents a search result from the local index."""

    url: str
    title: str | None
    source: str
    category: str | None
    snippet: str
    score: float
