from __future__ import annotations

import re
from dataclasses import replace

from .types import DiagramDocument, DiagramEdge

# ============================================================================
# Normalizer - canonical ordering and unique edge ids
# ============================================================================

NUMBERED_ID_REGEX = re.compile(r"^(\D*?)(\d+)$")


def normalize_document(document: DiagramDocument) -> DiagramDocument:
    """Return a canonical copy of ``document``.

    Nodes and subgraphs are sorted by id. Edges and unsupported blocks are
    sorted by id with numbered ids (``e-2``, ``raw-10``) in numeric order,
    which is the order the parser assigns them. Blank edge ids get a
    positional fallback and duplicates are renumbered to the first free
    ``e-<n>``. Content is otherwise untouched, and the transform is
    idempotent.
    """
    return replace(
        document,
        nodes=sorted(document.nodes, key=lambda n: n.id),
        edges=_normalize_edges(document.edges),
        subgraphs=sorted(document.subgraphs, key=lambda s: s.id),
        raw_blocks=sorted(document.raw_blocks, key=lambda b: numbered_id_key(b.id)),
    )


def numbered_id_key(item_id: str) -> tuple[str, int, str]:
    """Sort key placing ``e-2`` before ``e-10``; other ids sort as strings."""
    m = NUMBERED_ID_REGEX.match(item_id)
    if m:
        return m.group(1), int(m.group(2)), item_id
    return item_id, -1, item_id


def _normalize_edges(edges: list[DiagramEdge]) -> list[DiagramEdge]:
    used: set[str] = set()
    unique: list[DiagramEdge] = []

    for index, edge in enumerate(edges):
        candidate = edge.id if edge.id and edge.id.strip() else f"e-{index + 1}"
        if candidate in used:
            seq = index + 1
            while f"e-{seq}" in used:
                seq += 1
            candidate = f"e-{seq}"
        used.add(candidate)
        unique.append(edge if candidate == edge.id else replace(edge, id=candidate))

    return sorted(unique, key=lambda e: numbered_id_key(e.id))
