"""Tests for URL derivation."""

from pathlib import Path

import pytest

from docs_search_indexer.urls import UrlDeriver


@pytest.fixture
def deriver() -> UrlDeriver:
    """Create a UrlDeriver with relative roots.

    Returns:
        UrlDeriver for "pages" and "docs" roots.
    """
    return UrlDeriver(Path("pages"), Path("docs"))


def test_guide_url(deriver: UrlDeriver) -> None:
    """Test stripping the guide root and extension."""
    assert deriver.derive_url(Path("pages/guides/auth/overview.mdx"), "guide") == "/guides/auth/overview"


def test_reference_url(deriver: UrlDeriver) -> None:
    """Test stripping the reference root and extension."""
    assert deriver.derive_url(Path("docs/reference/auth/v1/signUp.mdx"), "reference") == "/reference/auth/v1/signUp"


def test_generated_segment_removed(deriver: UrlDeriver) -> None:
    """Test that generated reference files map one level up."""
    url = deriver.derive_url(Path("docs/reference/javascript/generated/select.mdx"), "reference")

    assert url == "/reference/javascript/select"


def test_root_name_inside_segment_is_kept(deriver: UrlDeriver) -> None:
    """Test that only the leading root is removed, not matching substrings."""
    url = deriver.derive_url(Path("pages/guides/docs-overview.mdx"), "guide")

    assert url == "/guides/docs-overview"


def test_markdown_extension_stripped(deriver: UrlDeriver) -> None:
    """Test that plain markdown files are treated as content."""
    assert deriver.derive_url(Path("pages/guides/readme.md"), "guide") == "/guides/readme"


def test_non_content_extension_kept(deriver: UrlDeriver) -> None:
    """Test that non-content files keep their suffix."""
    assert deriver.derive_url(Path("pages/oss.tsx"), "guide") == "/oss.tsx"


def test_placeholder_file_url(deriver: UrlDeriver) -> None:
    """Test that dotfile placeholders keep their full name."""
    assert deriver.derive_url(Path("docs/reference/cli/.gitkeep"), "reference") == "/reference/cli/.gitkeep"


def test_absolute_roots(tmp_path: Path) -> None:
    """Test derivation with absolute root directories."""
    deriver = UrlDeriver(tmp_path / "pages", tmp_path / "docs")

    url = deriver.derive_url(tmp_path / "pages" / "guides" / "auth" / "overview.mdx", "guide")

    assert url == "/guides/auth/overview"


def test_derivation_is_deterministic(deriver: UrlDeriver) -> None:
    """Test that deriving twice yields the same URL."""
    path = Path("docs/reference/dart/generated/v1/from.mdx")

    first = deriver.derive_url(path, "reference")
    second = deriver.derive_url(path, "reference")

    assert first == second == "/reference/dart/v1/from"
