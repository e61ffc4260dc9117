"""Category, version and hierarchy classification for reference pages."""

import re
from collections.abc import Mapping

from docs_search_indexer.models import Classification

REFERENCE_MARKER = "reference"
GENERATED_MARKER = "generated"
VERSION_PATTERN = r"v\d+"


class HierarchyClassifier:
    """Places reference pages into the category/version/type taxonomy.

    Some reference trees are versioned APIs and get an extra hierarchy
    level for the version token. Others are flat single-version libraries.
    """

    def __init__(
        self,
        display_names: Mapping[str, str],
        reference_marker: str = REFERENCE_MARKER,
        generated_marker: str = GENERATED_MARKER,
        version_pattern: str = VERSION_PATTERN,
    ) -> None:
        """Initialise classifier.

        Args:
            display_names: Short category codes mapped to product names.
            reference_marker: URL segment that precedes the category.
            generated_marker: Segment marking auto-generated index content.
            version_pattern: Regex found anywhere in a segment that marks a version.
        """
        self.display_names = dict(display_names)
        self.reference_marker = reference_marker
        self.generated_marker = generated_marker
        self.version_re = re.compile(version_pattern)

    def display_name(self, category: str | None) -> str | None:
        """Look up the product name for a category.

        Args:
            category: Short category code from the URL.

        Returns:
            Display name, or None for unmapped categories.
        """
        if category is None:
            return None
        return self.display_names.get(category)

    def classify(self, url: str, title: str | None) -> Classification:
        """Classify a reference page from its URL and title.

        Args:
            url: Derived page URL.
            title: Page title from metadata.

        Returns:
            Classification with the overrides to apply to the record.
        """
        segments = url.split("/")
        if self.reference_marker not in segments:
            return Classification()

        anchor = segments.index(self.reference_marker)
        category = self._segment(segments, anchor + 1)
        page = self._segment(segments, anchor + 2)
        name = self.display_name(category)

        if page is not None and self.version_re.search(page):
            # A missing title on an unmapped category also counts as the landing page
            landing = title == name
            return Classification(
                category=category,
                version=page,
                type="lvl2" if landing else "lvl3",
                lvl1=name,
                lvl2=page,
                lvl3=title,
                classified=True,
            )

        if page is None or page == self.generated_marker:
            return Classification(category=category)

        return Classification(
            category=category,
            type="lvl2",
            lvl1=name,
            lvl2=title,
            classified=True,
        )

    @staticmethod
    def _segment(segments: list[str], index: int) -> str | None:
        """Return a non-empty URL segment by position.

        Args:
            segments: URL split on "/".
            index: Position to read.

        Returns:
            The segment, or None if it is missing or empty.
        """
        if index < len(segments) and segments[index]:
            return segments[index]
        return None
