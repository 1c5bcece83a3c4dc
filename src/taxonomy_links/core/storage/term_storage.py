"""Tree queries over the SQLite taxonomy store."""

import sqlite3
from collections import defaultdict

from loguru import logger

from taxonomy_links.models.term import TermRecord, Vocabulary


def load_tree(
    conn: sqlite3.Connection,
    vid: str,
    *,
    parent: int = 0,
    max_depth: int | None = None,
) -> list[TermRecord]:
    """Load the terms below a parent as a depth-first pre-order list.

    Args:
        conn: Database connection.
        vid: Vocabulary machine name.
        parent: Term whose descendants are returned; 0 means the whole vocabulary.
        max_depth: Number of levels to return (None = unlimited).

    Returns:
        Terms in pre-order. Depth is 0 for the children of ``parent`` and
        siblings are ordered by weight, then name. A term with several parents
        is listed under each of them.
    """
    rows = conn.execute(
        "SELECT t.tid, t.name, t.description, t.weight, h.parent "
        "FROM terms t JOIN term_hierarchy h ON h.tid = t.tid "
        "WHERE t.vid = ? "
        "ORDER BY t.weight, t.name, t.tid",
        (vid,),
    ).fetchall()

    children: dict[int, list[int]] = defaultdict(list)
    parents: dict[int, list[int]] = defaultdict(list)
    terms: dict[int, tuple[str, str, int]] = {}
    for tid, name, description, weight, parent_tid in rows:
        children[parent_tid].append(tid)
        parents[tid].append(parent_tid)
        terms[tid] = (name, description, weight)

    result: list[TermRecord] = []
    # Stack entries: (tid, depth, tids on the path from the query root)
    stack: list[tuple[int, int, frozenset[int]]] = [
        (tid, 0, frozenset({parent})) for tid in reversed(children.get(parent, []))
    ]
    while stack:
        tid, depth, ancestors = stack.pop()
        if tid in ancestors:
            logger.warning("Skipping term {} in {}: hierarchy loops back to it", tid, vid)
            continue

        name, description, weight = terms[tid]
        result.append(
            TermRecord(
                tid=tid,
                name=name,
                depth=depth,
                vid=vid,
                weight=weight,
                description=description,
                parents=tuple(sorted(parents[tid])),
            )
        )

        if max_depth is None or depth + 1 < max_depth:
            path = ancestors | {tid}
            stack.extend(
                (child, depth + 1, path) for child in reversed(children.get(tid, []))
            )

    logger.debug("Loaded {} terms from {} below {}", len(result), vid, parent)
    return result


class SqliteTermStorage:
    """Term storage backed by the taxonomy database."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def load_tree(
        self, vid: str, parent: int = 0, max_depth: int | None = None
    ) -> list[TermRecord]:
        return load_tree(self.conn, vid, parent=parent, max_depth=max_depth)

    def list_vocabularies(self) -> list[Vocabulary]:
        rows = self.conn.execute(
            "SELECT vid, name, description, weight FROM vocabularies ORDER BY weight, name"
        ).fetchall()
        return [Vocabulary(vid=r[0], name=r[1], description=r[2], weight=r[3]) for r in rows]

    def get_vocabulary(self, vid: str) -> Vocabulary | None:
        row = self.conn.execute(
            "SELECT vid, name, description, weight FROM vocabularies WHERE vid = ?",
            (vid,),
        ).fetchone()
        if row is None:
            return None
        return Vocabulary(vid=row[0], name=row[1], description=row[2], weight=row[3])

    def count_terms(self, vid: str) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM terms WHERE vid = ?", (vid,)).fetchone()[0]
