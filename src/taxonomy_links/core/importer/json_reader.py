"""Parse vocabulary JSON files into domain models."""

from collections import deque
from typing import Any

from taxonomy_links.models.term import Term, Vocabulary


def parse_vocabulary_data(data: dict[str, Any]) -> tuple[Vocabulary, list[Term]]:
    """Parse a vocabulary dict into a Vocabulary and its Terms.

    Args:
        data: Raw vocabulary data with nested ``terms``. Each term has
            ``tid`` and ``name``, and optionally ``description``, ``weight``
            and ``children``. Weight defaults to the position among siblings.
            A tid listed under a second parent gains that parent.

    Returns:
        Tuple of (Vocabulary, list of Terms in breadth-first order).

    Raises:
        ValueError: If a required key is missing or a tid is reused for a
            different name.
    """
    try:
        vocabulary = Vocabulary(
            vid=data["vid"],
            name=data["name"],
            description=data.get("description", ""),
            weight=data.get("weight", 0),
        )
    except KeyError as e:
        msg = f"Vocabulary is missing required key {e.args[0]!r}"
        raise ValueError(msg) from e

    order: list[int] = []
    by_tid: dict[int, dict[str, Any]] = {}
    parents: dict[int, list[int]] = {}

    todo: deque[tuple[dict[str, Any], int, int]] = deque(
        (raw, 0, i) for i, raw in enumerate(data.get("terms", []))
    )
    while todo:
        raw, parent, position = todo.popleft()
        if "tid" not in raw or "name" not in raw:
            msg = f"Term in {vocabulary.vid!r} needs 'tid' and 'name': {raw!r}"
            raise ValueError(msg)
        tid = int(raw["tid"])

        if tid in by_tid:
            if by_tid[tid]["name"] != raw["name"]:
                msg = (
                    f"Term {tid} in {vocabulary.vid!r} has conflicting names: "
                    f"{by_tid[tid]['name']!r} and {raw['name']!r}"
                )
                raise ValueError(msg)
            if parent not in parents[tid]:
                parents[tid].append(parent)
        else:
            order.append(tid)
            by_tid[tid] = {**raw, "weight": raw.get("weight", position)}
            parents[tid] = [parent]

        for i, child in enumerate(raw.get("children", [])):
            todo.append((child, tid, i))

    terms = [
        Term(
            tid=tid,
            vid=vocabulary.vid,
            name=by_tid[tid]["name"],
            description=by_tid[tid].get("description", ""),
            weight=by_tid[tid]["weight"],
            parents=tuple(parents[tid]),
        )
        for tid in order
    ]
    return vocabulary, terms
