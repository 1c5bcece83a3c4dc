"""Shared test fixtures."""

import json
import sqlite3
from pathlib import Path

import pytest

from taxonomy_links.core.database.schema import create_schema
from taxonomy_links.core.importer.loader import import_source_dir

TOPICS_VOCABULARY = {
    "vid": "topics",
    "name": "Topics",
    "description": "Things to eat",
    "terms": [
        {
            "tid": 1,
            "name": "Fruit",
            "children": [
                {"tid": 2, "name": "Apple"},
                {"tid": 3, "name": "Banana", "children": [{"tid": 7, "name": "Cavendish"}]},
            ],
        },
        {
            "tid": 4,
            "name": "Veg",
            "children": [
                {"tid": 5, "name": "Root", "children": [{"tid": 6, "name": "Carrot"}]},
            ],
        },
        {"tid": 8, "name": "Herbs"},
    ],
}

TAGS_VOCABULARY = {
    "vid": "tags",
    "name": "Tags",
    "weight": -1,
    "terms": [
        {"tid": 20, "name": "python", "weight": 5},
        {"tid": 21, "name": "drupal", "weight": 5},
        {"tid": 22, "name": "alpha", "weight": 9},
    ],
}


def write_source_dir(source: Path) -> Path:
    source.mkdir(parents=True, exist_ok=True)
    (source / "topics.json").write_text(json.dumps(TOPICS_VOCABULARY))
    (source / "tags.json").write_text(json.dumps(TAGS_VOCABULARY))
    return source


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Return a directory holding the topics and tags vocabulary files."""
    return write_source_dir(tmp_path / "source")


@pytest.fixture
def populated_db(source_dir: Path) -> sqlite3.Connection:
    """Return an in-memory DB with two vocabularies imported."""
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    import_source_dir(conn, source_dir)
    return conn
