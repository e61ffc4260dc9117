"""Extraction of page metadata from documentation source text."""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import json5
import yaml

from docs_search_indexer.errors import MetadataParseError
from docs_search_indexer.models import ExtractedPage, PageMetadata

logger = logging.getLogger(__name__)

# Front-matter block at the very top of a file, tolerating a BOM and CRLF
FRONT_MATTER_RE = re.compile(r"\A\ufeff?---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)", re.DOTALL | re.MULTILINE)

METADATA_FIELDS = ("id", "title", "description")

# Optional semicolon and line break after an inline declaration
DECLARATION_END_RE = re.compile(r"[ \t]*;?[ \t]*(?:\r?\n)?")


class MetadataExtractor:
    """Splits raw page text into metadata and body.

    Pages carry metadata either as a YAML front-matter block or, when
    there is none, as an object literal assigned to a conventionally
    named binding such as ``export const meta = {...}``. The literal is
    read with a JSON5 parser and never evaluated as code.
    """

    def __init__(self, identifier: str = "meta") -> None:
        """Initialise extractor.

        Args:
            identifier: Name of the binding that holds inline metadata.
        """
        self.identifier = identifier
        self._declaration_re = re.compile(
            rf"^[ \t]*(?:export\s+)?(?:const|let|var)\s+{re.escape(identifier)}\s*=\s*(?=\{{)",
            re.MULTILINE,
        )

    def extract(self, text: str, path: Path | str | None = None) -> ExtractedPage:
        """Extract metadata and body from page text.

        Args:
            text: Raw file contents.
            path: Source file, used in error messages.

        Returns:
            ExtractedPage with metadata (all None when nothing was found)
            and the body with the metadata block removed.

        Raises:
            MetadataParseError: If an inline declaration has unbalanced braces.
        """
        front_matter = self._extract_front_matter(text)
        if front_matter is not None:
            data, body = front_matter
            return ExtractedPage(metadata=self._to_metadata(data), body=body)

        inline = self._extract_inline(text, path)
        if inline is not None:
            data, body = inline
            return ExtractedPage(metadata=self._to_metadata(data), body=body)

        return ExtractedPage(metadata=PageMetadata(), body=text)

    def _extract_front_matter(self, text: str) -> tuple[Mapping[str, Any], str] | None:
        """Parse a leading YAML front-matter block.

        Args:
            text: Raw file contents.

        Returns:
            Mapping and remaining body, or None if there is no non-empty
            mapping at the top of the file.
        """
        match = FRONT_MATTER_RE.match(text)
        if not match:
            return None

        try:
            data = yaml.safe_load(match.group(1))
        except yaml.YAMLError as exc:
            logger.debug("Ignoring malformed front-matter: %s", exc)
            return None

        if not isinstance(data, dict) or not data:
            return None
        return data, text[match.end() :]

    def _extract_inline(self, text: str, path: Path | str | None = None) -> tuple[Mapping[str, Any], str] | None:
        """Parse an inline object literal metadata declaration.

        Args:
            text: Raw file contents.
            path: Source file, used in error messages.

        Returns:
            Mapping and body with the declaration removed, or None if there
            is no declaration or its literal is not a plain mapping.

        Raises:
            MetadataParseError: If the literal's braces cannot be balanced.
        """
        match = self._declaration_re.search(text)
        if not match:
            return None

        open_index = match.end()
        close_index = self._find_closing_brace(text, open_index)
        if close_index is None:
            msg = "unbalanced braces in inline metadata declaration"
            raise MetadataParseError(msg, path)
        literal = text[open_index : close_index + 1]

        try:
            data = json5.loads(literal)
        except ValueError as exc:
            logger.debug("Ignoring malformed %s declaration: %s", self.identifier, exc)
            return None

        if not isinstance(data, dict):
            return None

        end = close_index + 1
        trailing = DECLARATION_END_RE.match(text, end)
        if trailing:
            end = trailing.end()
        body = text[: match.start()] + text[end:]
        return data, body

    @staticmethod
    def _find_closing_brace(text: str, open_index: int) -> int | None:
        """Locate the brace matching the one at open_index.

        Braces inside string literals and comments are ignored.

        Args:
            text: Source text.
            open_index: Index of an opening brace.

        Returns:
            Index of the matching closing brace, or None if the braces
            are unbalanced.
        """
        depth = 0
        quote: str | None = None
        index = open_index
        length = len(text)

        while index < length:
            char = text[index]
            if quote:
                if char == "\\":
                    index += 2
                    continue
                if char == quote:
                    quote = None
            elif char in "\"'`":
                quote = char
            elif text.startswith("//", index):
                newline = text.find("\n", index)
                index = length if newline == -1 else newline
                continue
            elif text.startswith("/*", index):
                close = text.find("*/", index + 2)
                if close == -1:
                    break
                index = close + 2
                continue
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return index
            index += 1

        return None

    @staticmethod
    def _to_metadata(data: Mapping[str, Any]) -> PageMetadata:
        """Pick the known metadata fields from a parsed mapping.

        Args:
            data: Parsed front-matter or object literal.

        Returns:
            PageMetadata with string values. Booleans are rendered the way
            JavaScript prints them; nested values are dropped.
        """
        values: dict[str, str | None] = {}
        for name in METADATA_FIELDS:
            value = data.get(name)
            if value is None or isinstance(value, (dict, list)):
                values[name] = None
            elif isinstance(value, bool):
                values[name] = "true" if value else "false"
            else:
                values[name] = str(value)
        return PageMetadata(**values)
