"""Tests for environment-driven configuration."""

from pathlib import Path

import pytest

from docs_search_indexer.config import DEFAULT_DENYLIST, DEFAULT_DISPLAY_NAMES, IndexerConfig

ENV_VARS = [
    "DOCS_SEARCH_GUIDES_ROOT",
    "DOCS_SEARCH_REFERENCE_ROOT",
    "DOCS_SEARCH_INDEX_NAME",
    "DOCS_SEARCH_DB_PATH",
    "DOCS_SEARCH_EXPORT_PATH",
    "DOCS_SEARCH_MAX_WORKERS",
    "DOCS_SEARCH_DENYLIST",
    "DOCS_SEARCH_LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove indexer variables from the environment.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
    """
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    """Test configuration with no variables set."""
    config = IndexerConfig.from_env(load_env_file=False)

    assert config.guides_root == Path("pages")
    assert config.reference_root == Path("docs")
    assert config.database_path == Path("docs_search.db")
    assert config.export_path is None
    assert config.max_workers == 4
    assert config.denylist == DEFAULT_DENYLIST
    assert config.display_names == DEFAULT_DISPLAY_NAMES
    assert config.log_level == "INFO"


def test_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test reading every supported variable."""
    monkeypatch.setenv("DOCS_SEARCH_GUIDES_ROOT", str(tmp_path / "guides"))
    monkeypatch.setenv("DOCS_SEARCH_REFERENCE_ROOT", str(tmp_path / "ref"))
    monkeypatch.setenv("DOCS_SEARCH_INDEX_NAME", "prod_docs")
    monkeypatch.setenv("DOCS_SEARCH_DB_PATH", str(tmp_path / "index.db"))
    monkeypatch.setenv("DOCS_SEARCH_EXPORT_PATH", str(tmp_path / "records.json"))
    monkeypatch.setenv("DOCS_SEARCH_MAX_WORKERS", "8")
    monkeypatch.setenv("DOCS_SEARCH_DENYLIST", "404.mdx, faq.mdx,,")
    monkeypatch.setenv("DOCS_SEARCH_LOG_LEVEL", "debug")

    config = IndexerConfig.from_env(load_env_file=False)

    assert config.guides_root == tmp_path / "guides"
    assert config.reference_root == tmp_path / "ref"
    assert config.index_name == "prod_docs"
    assert config.database_path == tmp_path / "index.db"
    assert config.export_path == tmp_path / "records.json"
    assert config.max_workers == 8
    assert config.denylist == ("404.mdx", "faq.mdx")
    assert config.log_level == "DEBUG"


def test_invalid_worker_count(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a non-integer worker count is rejected."""
    monkeypatch.setenv("DOCS_SEARCH_MAX_WORKERS", "many")

    with pytest.raises(ValueError, match="DOCS_SEARCH_MAX_WORKERS must be an integer"):
        IndexerConfig.from_env(load_env_file=False)


def test_zero_worker_count(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a worker count below one is rejected."""
    monkeypatch.setenv("DOCS_SEARCH_MAX_WORKERS", "0")

    with pytest.raises(ValueError, match="at least 1"):
        IndexerConfig.from_env(load_env_file=False)


def test_env_file_is_loaded(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Test that a .env file in the working directory is read."""
    (tmp_path / ".env").write_text("DOCS_SEARCH_INDEX_NAME=from_dotenv\n")
    monkeypatch.chdir(tmp_path)
    # Register the variable so the value loaded from .env is undone afterwards
    monkeypatch.setenv("DOCS_SEARCH_INDEX_NAME", "unset")
    monkeypatch.delenv("DOCS_SEARCH_INDEX_NAME")

    config = IndexerConfig.from_env()

    assert config.index_name == "from_dotenv"
