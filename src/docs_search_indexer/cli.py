"""Command line entry point for building the documentation search index."""

import logging
import sys

import click

from docs_search_indexer import __version__
from docs_search_indexer.config import IndexerConfig
from docs_search_indexer.database import RecordDatabase
from docs_search_indexer.errors import DiscoveryError, PublishError
from docs_search_indexer.indexer import DocsSearchIndexer
from docs_search_indexer.models import FileWarning
from docs_search_indexer.publisher import IndexPublisher, JsonExportPublisher

logger = logging.getLogger(__name__)


def _configure_logging(level: str) -> None:
    """Set up root logging for a command.

    Args:
        level: Level name such as "INFO"; unknown names fall back to INFO.
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _make_publisher(config: IndexerConfig) -> IndexPublisher:
    """Pick the publisher for a build.

    Args:
        config: Indexer configuration.

    Returns:
        A JSON export publisher when an export path is set, else the SQLite store.
    """
    if config.export_path is not None:
        return JsonExportPublisher(config.export_path)
    return RecordDatabase(config.database_path)


def _echo_warnings(warnings: list[FileWarning], err: bool = False) -> None:
    """Print the file warnings collected during a build.

    Args:
        warnings: Per-file problems, possibly empty.
        err: Write to stderr instead of stdout.
    """
    if not warnings:
        return
    click.echo(f"{len(warnings)} file warnings:", err=err)
    for warning in warnings:
        click.echo(f"  {warning.path}: {warning.message}", err=err)


@click.group()
@click.version_option(__version__, prog_name="docs-search-indexer")
def cli() -> None:
    """Build and inspect the documentation search index."""


@cli.command()
def build() -> None:
    """Rebuild the search index from the documentation tree.

    Paths, index target and worker count come from DOCS_SEARCH_*
    environment variables or a .env file.
    """
    config = IndexerConfig.from_env()
    _configure_logging(config.log_level)

    publisher = _make_publisher(config)
    indexer = DocsSearchIndexer.from_config(config, publisher)
    logger.info("Preparing docs indexing for %s", config.index_name)

    try:
        report = indexer.rebuild_index()
    except DiscoveryError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)
    except PublishError as exc:
        click.echo(f"Error: {exc}", err=True)
        click.echo(f"Attempted to publish {exc.attempted} records to {config.index_name}", err=True)
        _echo_warnings(exc.warnings, err=True)
        sys.exit(1)

    click.echo(f"Indexed {report.indexed} records into {config.index_name}")
    _echo_warnings(report.warnings)


@cli.command()
@click.argument("query")
@click.option("--source", type=click.Choice(["guide", "reference"]), default=None, help="Only show this content family")
@click.option("--limit", type=int, default=10, show_default=True, help="Maximum results")
def search(query: str, source: str | None, limit: int) -> None:
    """Query the local SQLite index."""
    config = IndexerConfig.from_env()
    _configure_logging(config.log_level)

    database = RecordDatabase(config.database_path)
    results = database.search(query, source=source, limit=limit)
    if not results:
        click.echo("No results")
        return

    for result in results:
        click.echo(f"{result.score:6.2f}  {result.url}  {result.title or ''}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
