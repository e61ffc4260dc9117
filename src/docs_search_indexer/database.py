"""SQLite FTS5 store for documentation search records."""

import json
import logging
import re
import sqlite3
from collections.abc import Generator, Sequence
from contextlib import contextmanager
from dataclasses import asdict
from pathlib import Path

from docs_search_indexer.models import Hierarchy, SearchRecord, SearchResult

logger = logging.getLogger(__name__)

# Characters common in API page titles (auth.signUp, select(), row-level-security)
# that FTS5 would otherwise read as column filters, groups or prefix markers
FTS5_SYNTAX_RE = re.compile(r'[.():*"\-]')
FTS5_OPERATOR_RE = re.compile(r"\b(AND|OR|NOT)\b", re.IGNORECASE)


class RecordDatabase:
    """Local search index that satisfies the IndexPublisher contract."""

    def __init__(self, db_path: Path) -> None:
        """Initialise database with the given path.

        Args:
            db_path: Path to the SQLite database file.
        """
        self.db_path = db_path
        self._initialise_schema()

    @staticmethod
    def _match_expression(query: str) -> str:
        """Turn a search term into an FTS5 MATCH expression.

        Plain words pass through so porter stemming still applies. A term
        that looks like a method name or carries an operator word is
        searched as one quoted phrase instead.

        Args:
            query: Search term typed by an operator.

        Returns:
            Expression safe to bind to the MATCH parameter.
        """
        if FTS5_SYNTAX_RE.search(query) or FTS5_OPERATOR_RE.search(query):
            query = query.replace('"', '""')
            return f'"{query}"'

        return query

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Open a short-lived connection to the record store.

        Every publish, clear or search call opens and closes its own.

        Yields:
            Connection whose rows can be read by column name.
        """
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def _initialise_schema(self) -> None:
        """Create database schema if it doesn't exist."""
        with self._get_connection() as conn:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS records (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    object_id TEXT UNIQUE NOT NULL,
                    page_id TEXT,
                    title TEXT,
                    description TEXT,
                    url TEXT NOT NULL,
                    source TEXT NOT NULL,
                    category TEXT,
                    version TEXT,
                    type TEXT NOT NULL,
                    hierarchy TEXT NOT NULL,
                    page_content TEXT NOT NULL
                );

                CREATE VIRTUAL TABLE IF NOT EXISTS records_fts USING fts5(
                    title,
                    description,
                    page_content,
                    content='records',
                    content_rowid='id',
                    tokenize='porter unicode61'
                );

                CREATE TRIGGER IF NOT EXISTS records_ai AFTER INSERT ON records BEGIN
                    INSERT INTO records_fts(rowid, title, description, page_content)
                    VALUES (new.id, new.title, new.description, new.page_content);
                END;

                CREATE TRIGGER IF NOT EXISTS records_ad AFTER DELETE ON records BEGIN
                    INSERT INTO records_fts(records_fts, rowid, title, description, page_content)
                    VALUES ('delete', old.id, old.title, old.description, old.page_content);
                END;

                CREATE INDEX IF NOT EXISTS idx_records_url ON records(url);
                CREATE INDEX IF NOT EXISTS idx_records_source ON records(source);
            """)
            conn.commit()

    def clear(self) -> None:
        """Clear all records from the database."""
        with self._get_connection() as conn:
            conn.execute("DELETE FROM records")
            conn.commit()

    def publish(self, records: Sequence[SearchRecord]) -> int:
        """Insert records in a single transaction.

        Args:
            records: Records to store.

        Returns:
            Number of records inserted.
        """
        rows = [
            (
                record.object_id,
                record.id,
                record.title,
                record.description,
                record.url,
                record.source,
                record.category,
                record.version,
                record.type,
                json.dumps(asdict(record.hierarchy)),
                record.page_content,
            )
            for record in records
        ]
        with self._get_connection() as conn:
            cursor = conn.executemany(
                """
                INSERT INTO records (
                    object_id, page_id, title, description, url, source,
                    category, version, type, hierarchy, page_content
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                rows,
            )
            conn.commit()
            inserted = cursor.rowcount if cursor.rowcount >= 0 else len(rows)

        logger.debug("Inserted %d records into %s", inserted, self.db_path)
        return inserted

    def search(self, query: str, source: str | None = None, limit: int = 10) -> list[SearchResult]:
        """Search records using FTS5.

        Args:
            query: Search query string.
            source: Optional source filter ("guide" or "reference").
            limit: Maximum number of results.

        Returns:
            List of SearchResult instances ordered by relevance.
        """
        match_expression = self._match_expression(query)

        with self._get_connection() as conn:
            sql = """
                SELECT
                    r.url,
                    r.title,
                    r.source,
                    r.category,
                    snippet(records_fts, 2, '<mark>', '</mark>', '...', 64) as snippet,
                    bm25(records_fts, 5.0, 2.0, 1.0) as score
                FROM records_fts
                JOIN records r ON records_fts.rowid = r.id
                WHERE records_fts MATCH ?
            """
            params: list[str | int] = [match_expression]

            if source:
                sql += " AND r.source = ?"
                params.append(source)

            sql += " ORDER BY score LIMIT ?"
            params.append(limit)

            cursor = conn.execute(sql, params)
            return [
                SearchResult(
                    url=row["url"],
                    title=row["title"],
                    source=row["source"],
                    category=row["category"],
                    snippet=row["snippet"],
                    score=abs(row["score"]),  # BM25 returns negative scores
                )
                for row in cursor.fetchall()
            ]

    def get_record(self, url: str) -> SearchRecord | None:
        """Retrieve a record by URL.

        Args:
            url: Page URL.

        Returns:
            SearchRecord instance or None if not found.
        """
        with self._get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM records WHERE url = ? ORDER BY id LIMIT 1",
                (url,),
            )
            row = cursor.fetchone()
            if row:
                return SearchRecord(
                    object_id=row["object_id"],
                    id=row["page_id"],
                    title=row["title"],
                    description=row["description"],
                    url=row["url"],
                    source=row["source"],
                    page_content=row["page_content"],
                    category=row["category"],
                    version=row["version"],
                    type=row["type"],
                    hierarchy=Hierarchy(**json.loads(row["hierarchy"])),
                )
            return None

    def get_record_count(self) -> int:
        """Return the total number of stored records.

        Returns:
            Count of records in the database.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("SELECT COUNT(*) FROM records")
            result = cursor.fetchone()
            return int(result[0]) if result else 0
