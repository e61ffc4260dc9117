"""Derivation of public documentation URLs from source paths."""

from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from docs_search_indexer.models import SourceKind

GENERATED_SEGMENT = "generated"
DEFAULT_CONTENT_EXTENSIONS = (".mdx", ".md")


class UrlDeriver:
    """Maps source file paths to canonical site URLs."""

    def __init__(
        self,
        guides_root: Path,
        reference_root: Path,
        content_extensions: Iterable[str] = DEFAULT_CONTENT_EXTENSIONS,
        generated_segment: str = GENERATED_SEGMENT,
    ) -> None:
        """Initialise deriver with the configured roots.

        Args:
            guides_root: Root directory of guide pages.
            reference_root: Root directory of reference pages.
            content_extensions: File suffixes dropped from URLs.
            generated_segment: Directory name that generated reference
                files live under, one level below their public URL.
        """
        self.roots: dict[SourceKind, Path] = {
            "guide": guides_root,
            "reference": reference_root,
        }
        self.content_extensions = tuple(content_extensions)
        self.generated_segment = generated_segment

    def derive_url(self, path: Path, source: SourceKind) -> str:
        """Compute the site URL for a source file.

        Args:
            path: Path to the source file, under the root for source.
            source: Content family of the file.

        Returns:
            Slash-separated URL path starting with "/".
        """
        relative = PurePosixPath(Path(path).relative_to(self.roots[source]).as_posix())
        parts = list(relative.parts)

        # Generated reference pages live one directory below their URL
        if self.generated_segment in parts[:-1]:
            parts.remove(self.generated_segment)

        if parts and PurePosixPath(parts[-1]).suffix in self.content_extensions:
            parts[-1] = PurePosixPath(parts[-1]).stem

        return "/" + "/".join(parts)
