"""Tests for parsing vocabulary JSON data."""

import pytest

from taxonomy_links.core.importer.json_reader import parse_vocabulary_data
from taxonomy_links.models.term import Vocabulary
from tests.unit.conftest import TOPICS_VOCABULARY


def test_parse_vocabulary_returns_vocabulary_and_all_terms() -> None:
    vocabulary, terms = parse_vocabulary_data(TOPICS_VOCABULARY)

    assert vocabulary == Vocabulary(vid="topics", name="Topics", description="Things to eat")
    assert len(terms) == 8
    assert {t.vid for t in terms} == {"topics"}


def test_parse_vocabulary_sets_parents_and_default_weights() -> None:
    _, terms = parse_vocabulary_data(TOPICS_VOCABULARY)
    by_name = {t.name: t for t in terms}

    assert by_name["Fruit"].parents == (0,)
    assert by_name["Banana"].parents == (1,)
    assert by_name["Cavendish"].parents == (3,)
    assert by_name["Veg"].weight == 1
    assert by_name["Banana"].weight == 1


def test_parse_vocabulary_keeps_explicit_weight() -> None:
    _, terms = parse_vocabulary_data(
        {"vid": "v", "name": "V", "terms": [{"tid": 1, "name": "A", "weight": 7}]}
    )
    assert terms[0].weight == 7


def test_parse_vocabulary_merges_repeated_tid_parents() -> None:
    _, terms = parse_vocabulary_data(
        {
            "vid": "v",
            "name": "V",
            "terms": [
                {"tid": 1, "name": "A", "children": [{"tid": 3, "name": "C"}]},
                {"tid": 2, "name": "B", "children": [{"tid": 3, "name": "C"}]},
            ],
        }
    )
    (shared,) = [t for t in terms if t.tid == 3]
    assert shared.parents == (1, 2)
    assert len(terms) == 3


def test_parse_vocabulary_rejects_conflicting_names() -> None:
    data = {
        "vid": "v",
        "name": "V",
        "terms": [{"tid": 1, "name": "A"}, {"tid": 1, "name": "Other"}],
    }
    with pytest.raises(ValueError, match="conflicting names"):
        parse_vocabulary_data(data)


def test_parse_vocabulary_requires_vid_and_term_fields() -> None:
    with pytest.raises(ValueError, match="'vid'"):
        parse_vocabulary_data({"name": "V", "terms": []})
    with pytest.raises(ValueError, match="needs 'tid' and 'name'"):
        parse_vocabulary_data({"vid": "v", "name": "V", "terms": [{"name": "no id"}]})
