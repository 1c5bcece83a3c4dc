"""Tests for tree queries over the taxonomy store."""

import sqlite3

from taxonomy_links.core.database.schema import create_schema
from taxonomy_links.core.importer.loader import import_vocabulary_data
from taxonomy_links.core.storage.term_storage import SqliteTermStorage, load_tree
from taxonomy_links.models.term import TermRecord
from taxonomy_links.protocols import TermStorageProtocol


def _names_and_depths(records: list[TermRecord]) -> list[tuple[str, int]]:
    return [(r.name, r.depth) for r in records]


def test_load_tree_whole_vocabulary_in_preorder(populated_db: sqlite3.Connection) -> None:
    records = load_tree(populated_db, "topics")
    assert _names_and_depths(records) == [
        ("Fruit", 0),
        ("Apple", 1),
        ("Banana", 1),
        ("Cavendish", 2),
        ("Veg", 0),
        ("Root", 1),
        ("Carrot", 2),
        ("Herbs", 0),
    ]
    assert all(r.vid == "topics" for r in records)
    assert records[1].parents == (1,)


def test_load_tree_below_parent_restarts_depth_at_zero(populated_db: sqlite3.Connection) -> None:
    records = load_tree(populated_db, "topics", parent=4)
    assert _names_and_depths(records) == [("Root", 0), ("Carrot", 1)]


def test_load_tree_orders_siblings_by_weight_then_name(populated_db: sqlite3.Connection) -> None:
    records = load_tree(populated_db, "tags")
    assert [r.name for r in records] == ["drupal", "python", "alpha"]


def test_load_tree_max_depth_limits_levels(populated_db: sqlite3.Connection) -> None:
    records = load_tree(populated_db, "topics", max_depth=1)
    assert [r.name for r in records] == ["Fruit", "Veg", "Herbs"]

    records = load_tree(populated_db, "topics", max_depth=2)
    assert "Cavendish" not in [r.name for r in records]
    assert "Banana" in [r.name for r in records]


def test_load_tree_unknown_vocabulary_or_leaf_parent_is_empty(
    populated_db: sqlite3.Connection,
) -> None:
    assert load_tree(populated_db, "missing") == []
    assert load_tree(populated_db, "topics", parent=8) == []


def test_term_with_two_parents_is_listed_under_each() -> None:
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    import_vocabulary_data(
        conn,
        {
            "vid": "food",
            "name": "Food",
            "terms": [
                {"tid": 1, "name": "Fruit", "children": [{"tid": 3, "name": "Tomato"}]},
                {"tid": 2, "name": "Veg", "children": [{"tid": 3, "name": "Tomato"}]},
            ],
        },
    )

    records = load_tree(conn, "food")

    assert _names_and_depths(records) == [("Fruit", 0), ("Tomato", 1), ("Veg", 0), ("Tomato", 1)]
    assert records[1].parents == (1, 2)


def test_hierarchy_loop_is_not_followed() -> None:
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    import_vocabulary_data(
        conn,
        {
            "vid": "loop",
            "name": "Loop",
            "terms": [{"tid": 1, "name": "A", "children": [{"tid": 2, "name": "B"}]}],
        },
    )
    # Make A a child of B as well: 1 -> 2 -> 1
    conn.execute("INSERT INTO term_hierarchy (tid, parent) VALUES (1, 2)")

    records = load_tree(conn, "loop")

    assert _names_and_depths(records) == [("A", 0), ("B", 1)]


def test_sqlite_term_storage_matches_protocol(populated_db: sqlite3.Connection) -> None:
    storage = SqliteTermStorage(populated_db)
    assert isinstance(storage, TermStorageProtocol)
    assert storage.load_tree("topics", parent=1) == load_tree(populated_db, "topics", parent=1)


def test_sqlite_term_storage_lists_vocabularies(populated_db: sqlite3.Connection) -> None:
    storage = SqliteTermStorage(populated_db)
    vocabs = storage.list_vocabularies()
    assert [v.vid for v in vocabs] == ["tags", "topics"]
    assert storage.get_vocabulary("topics").description == "Things to eat"  # type: ignore[union-attr]
    assert storage.get_vocabulary("missing") is None
    assert storage.count_terms("topics") == 8
