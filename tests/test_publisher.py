"""Tests for the JSON export publisher."""

import json
from pathlib import Path

from docs_search_indexer.models import Hierarchy, SearchRecord
from docs_search_indexer.publisher import JsonExportPublisher


def test_clear_writes_empty_array(tmp_path: Path) -> None:
    """Test that clearing resets the payload file."""
    path = tmp_path / "out" / "records.json"
    publisher = JsonExportPublisher(path)

    publisher.clear()

    assert json.loads(path.read_text()) == []


def test_publish_writes_records(tmp_path: Path) -> None:
    """Test that published records are written in wire format."""
    path = tmp_path / "records.json"
    publisher = JsonExportPublisher(path)
    record = SearchRecord(
        object_id="obj-1",
        id="overview",
        title="Auth Overview",
        description=None,
        url="/guides/auth/overview",
        source="guide",
        page_content="Body",
        hierarchy=Hierarchy(lvl1="Auth Overview"),
    )

    publisher.clear()
    count = publisher.publish([record])

    assert count == 1
    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload == [record.to_dict()]
    assert payload[0]["objectID"] == "obj-1"
    assert payload[0]["hierarchy"]["lvl0"] == "Guides"


def test_publish_replaces_previous_payload(tmp_path: Path) -> None:
    """Test that each publish writes the full record set."""
    path = tmp_path / "records.json"
    publisher = JsonExportPublisher(path)
    path.write_text('[{"objectID": "stale"}]')

    publisher.clear()
    publisher.publish([])

    assert json.loads(path.read_text()) == []
