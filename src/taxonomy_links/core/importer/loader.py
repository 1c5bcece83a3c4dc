"""Orchestrate importing vocabulary JSON files into SQLite."""

import hashlib
import json
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from taxonomy_links.core.importer.json_reader import parse_vocabulary_data
from taxonomy_links.models.term import Term, Vocabulary


@dataclass(frozen=True)
class ImportStats:
    """Summary of an import operation."""

    vocabularies_imported: int
    vocabularies_skipped: int
    terms_imported: int


def _file_hash(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def _should_reimport(conn: sqlite3.Connection, source_name: str, source_hash: str) -> bool:
    row = conn.execute(
        "SELECT source_hash FROM sync_state WHERE source_name = ?",
        (source_name,),
    ).fetchone()
    if row is None:
        return True
    return row[0] != source_hash


def insert_terms(conn: sqlite3.Connection, terms: list[Term]) -> None:
    conn.executemany(
        "INSERT OR REPLACE INTO terms (tid, vid, name, description, weight) "
        "VALUES (?, ?, ?, ?, ?)",
        [(t.tid, t.vid, t.name, t.description, t.weight) for t in terms],
    )
    conn.executemany(
        "INSERT OR REPLACE INTO term_hierarchy (tid, parent) VALUES (?, ?)",
        [(t.tid, parent) for t in terms for parent in t.parents],
    )


def replace_vocabulary(conn: sqlite3.Connection, vocabulary: Vocabulary, terms: list[Term]) -> None:
    """Replace a vocabulary and all of its terms. Does not commit.

    Raises:
        ValueError: If a term id already belongs to another vocabulary.
    """
    tids = {t.tid for t in terms}
    taken = sorted(
        (tid, vid)
        for tid, vid in conn.execute(
            "SELECT tid, vid FROM terms WHERE vid != ?", (vocabulary.vid,)
        )
        if tid in tids
    )
    if taken:
        owners = ", ".join(f"{tid} (in {vid!r})" for tid, vid in taken)
        msg = f"Vocabulary {vocabulary.vid!r} reuses term ids of other vocabularies: {owners}"
        raise ValueError(msg)

    conn.execute(
        "DELETE FROM term_hierarchy WHERE tid IN (SELECT tid FROM terms WHERE vid = ?)",
        (vocabulary.vid,),
    )
    conn.execute("DELETE FROM terms WHERE vid = ?", (vocabulary.vid,))
    conn.execute("DELETE FROM vocabularies WHERE vid = ?", (vocabulary.vid,))
    conn.execute(
        "INSERT INTO vocabularies (vid, name, description, weight) VALUES (?, ?, ?, ?)",
        (vocabulary.vid, vocabulary.name, vocabulary.description, vocabulary.weight),
    )
    insert_terms(conn, terms)


def import_vocabulary_data(conn: sqlite3.Connection, data: dict[str, Any]) -> tuple[Vocabulary, int]:
    """Import one parsed vocabulary dict and commit.

    Returns:
        The vocabulary and the number of terms written.
    """
    vocabulary, terms = parse_vocabulary_data(data)
    try:
        replace_vocabulary(conn, vocabulary, terms)
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    return vocabulary, len(terms)


def import_source_dir(
    conn: sqlite3.Connection,
    source_dir: Path,
    *,
    force: bool = False,
) -> ImportStats:
    """Import all vocabulary .json files from source_dir into the database.

    Args:
        conn: SQLite connection (schema must already exist).
        source_dir: Directory containing one vocabulary per .json file.
        force: Re-import even if source file hasn't changed.

    Returns:
        ImportStats with counts of imported/skipped vocabularies.
    """
    if not source_dir.is_dir():
        msg = f"Source directory not found: {source_dir}"
        raise FileNotFoundError(msg)

    imported = 0
    skipped = 0
    total_terms = 0

    for json_path in sorted(source_dir.glob("*.json")):
        source_hash = _file_hash(json_path)
        if not force and not _should_reimport(conn, json_path.name, source_hash):
            skipped += 1
            continue

        try:
            data = json.loads(json_path.read_text(encoding="utf-8"))
            vocabulary, terms = parse_vocabulary_data(data)
            replace_vocabulary(conn, vocabulary, terms)
            conn.execute(
                "INSERT OR REPLACE INTO sync_state "
                "(source_name, vid, last_import_at, source_hash) VALUES (?, ?, ?, ?)",
                (json_path.name, vocabulary.vid, int(time.time() * 1000), source_hash),
            )
            conn.commit()
        except Exception:
            conn.rollback()
            logger.exception("Failed to import {}", json_path.name)
            continue

        imported += 1
        total_terms += len(terms)
        logger.debug("Imported {} ({} terms)", vocabulary.name, len(terms))

    logger.info(
        "Import complete: {} imported, {} skipped, {} total terms",
        imported, skipped, total_terms,
    )
    return ImportStats(
        vocabularies_imported=imported,
        vocabularies_skipped=skipped,
        terms_imported=total_terms,
    )
