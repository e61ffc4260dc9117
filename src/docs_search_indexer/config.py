"""Configuration for the search index build, driven by environment variables."""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "DOCS_SEARCH_"

# Non-content pages that live alongside guides but are never indexed
DEFAULT_DENYLIST = (
    "404.mdx",
    "faq.mdx",
    "support.mdx",
    "oss.tsx",
    "_app.tsx",
    "_document.tsx",
    "[...slug].tsx",
    "handbook/contributing.mdx",
    "handbook/introduction.mdx",
    "handbook/supasquad.mdx",
)

DEFAULT_DISPLAY_NAMES = {
    "api": "Management API",
    "cli": "Supabase CLI",
    "auth": "Auth Server",
    "storage": "Storage Server",
    "postgres": "Postgres",
    "dart": "Supabase Flutter Library",
    "javascript": "Supabase JavaScript Library",
}


@dataclass
class IndexerConfig:
    """Settings for discovering, building and publishing search records."""

    guides_root: Path = Path("pages")
    reference_root: Path = Path("docs")
    index_name: str = "docs"
    database_path: Path = Path("docs_search.db")
    export_path: Path | None = None
    max_workers: int = 4
    denylist: tuple[str, ...] = DEFAULT_DENYLIST
    display_names: dict[str, str] = field(default_factory=lambda: dict(DEFAULT_DISPLAY_NAMES))
    content_extensions: tuple[str, ...] = (".mdx", ".md")
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, load_env_file: bool = True) -> "IndexerConfig":
        """Load configuration from environment variables.

        Args:
            load_env_file: Whether to read a .env file first.

        Returns:
            IndexerConfig populated from DOCS_SEARCH_* variables.

        Raises:
            ValueError: If a numeric variable is not a positive integer.
        """
        if load_env_file:
            load_dotenv(find_dotenv(usecwd=True))

        config = cls()
        config.guides_root = Path(os.getenv(f"{ENV_PREFIX}GUIDES_ROOT", str(config.guides_root)))
        config.reference_root = Path(os.getenv(f"{ENV_PREFIX}REFERENCE_ROOT", str(config.reference_root)))
        config.index_name = os.getenv(f"{ENV_PREFIX}INDEX_NAME", config.index_name)
        config.database_path = Path(os.getenv(f"{ENV_PREFIX}DB_PATH", str(config.database_path)))

        export_path = os.getenv(f"{ENV_PREFIX}EXPORT_PATH", "").strip()
        config.export_path = Path(export_path) if export_path else None

        config.max_workers = _positive_int(f"{ENV_PREFIX}MAX_WORKERS", config.max_workers)

        denylist = os.getenv(f"{ENV_PREFIX}DENYLIST")
        if denylist is not None:
            config.denylist = tuple(entry.strip() for entry in denylist.split(",") if entry.strip())

        config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL", config.log_level).upper()
        return config


def _positive_int(name: str, default: int) -> int:
    """Read a positive integer from the environment.

    Args:
        name: Environment variable name.
        default: Value used when the variable is unset or blank.

    Returns:
        The parsed value.

    Raises:
        ValueError: If the value is not an integer of at least 1.
    """
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ValueError(msg) from None
    if value < 1:
        msg = f"{name} must be at least 1, got {value}"
        raise ValueError(msg)
    return value
