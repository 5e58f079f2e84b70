from __future__ import annotations

import logging
from dataclasses import replace

from .layout import LayoutOptions, default_node_size, grid_position, snap
from .types import (
    AddNodeResult,
    ComposerSelection,
    ConnectResult,
    DiagramDocument,
    DiagramEdge,
    DiagramNode,
    Direction,
    EdgeSelection,
    NodeSelection,
)

logger = logging.getLogger(__name__)

# ============================================================================
# Composer - pure editing operations for a visual editor
#
# Every operation returns a new document; the input is left untouched.
# Existing ids are never renumbered or reordered here.
# ============================================================================


def next_node_id(nodes: list[DiagramNode]) -> str:
    """Lowest unused id of the form ``N<n>``."""
    return _lowest_unused("N", {n.id for n in nodes})


def next_edge_id(edges: list[DiagramEdge]) -> str:
    """Lowest unused id of the form ``e-<n>``."""
    return _lowest_unused("e-", {e.id for e in edges})


def _lowest_unused(prefix: str, taken: set[str]) -> str:
    index = 1
    while f"{prefix}{index}" in taken:
        index += 1
    return f"{prefix}{index}"


def add_node(
    document: DiagramDocument, options: LayoutOptions | None = None
) -> AddNodeResult:
    """Append a rectangle node in the next free grid slot."""
    x, y = grid_position(len(document.nodes), options)
    return _append_node(document, x, y, options)


def add_node_at(
    document: DiagramDocument,
    x: float,
    y: float,
    options: LayoutOptions | None = None,
) -> AddNodeResult:
    """Append a rectangle node at ``(x, y)`` snapped to the grid."""
    return _append_node(document, snap(x, options), snap(y, options), options)


def _append_node(
    document: DiagramDocument,
    x: float,
    y: float,
    options: LayoutOptions | None,
) -> AddNodeResult:
    node_id = next_node_id(document.nodes)
    width, height = default_node_size(options)
    node = DiagramNode(
        id=node_id,
        label=node_id,
        shape="rectangle",
        x=x,
        y=y,
        width=width,
        height=height,
    )
    return AddNodeResult(
        document=replace(document, nodes=[*document.nodes, node]),
        node_id=node_id,
    )


def update_node_position(
    document: DiagramDocument,
    node_id: str,
    x: float,
    y: float,
    options: LayoutOptions | None = None,
) -> DiagramDocument:
    if not any(n.id == node_id for n in document.nodes):
        logger.debug("Ignoring move of unknown node %r", node_id)
        return document
    sx, sy = snap(x, options), snap(y, options)
    return replace(
        document,
        nodes=[replace(n, x=sx, y=sy) if n.id == node_id else n for n in document.nodes],
    )


def update_node_label(document: DiagramDocument, node_id: str, label: str) -> DiagramDocument:
    if not any(n.id == node_id for n in document.nodes):
        logger.debug("Ignoring relabel of unknown node %r", node_id)
        return document
    return replace(
        document,
        nodes=[replace(n, label=label) if n.id == node_id else n for n in document.nodes],
    )


def remove_selection(document: DiagramDocument, selection: ComposerSelection) -> DiagramDocument:
    """Delete the selected node (with its edges) or the selected edge."""
    match selection:
        case NodeSelection(id=node_id):
            return replace(
                document,
                nodes=[n for n in document.nodes if n.id != node_id],
                edges=[
                    e for e in document.edges
                    if e.source != node_id and e.target != node_id
                ],
            )
        case EdgeSelection(id=edge_id):
            return replace(
                document,
                edges=[e for e in document.edges if e.id != edge_id],
            )
        case _:
            return document


def connect_nodes(document: DiagramDocument, source_id: str, target_id: str) -> ConnectResult:
    """Add a solid edge ``source_id -> target_id``.

    Self-loops and duplicate directed edges are refused: the original
    document comes back with ``edge_id=None``.
    """
    if source_id == target_id:
        logger.debug("Refusing self-loop on %r", source_id)
        return ConnectResult(document=document, edge_id=None)

    if any(e.source == source_id and e.target == target_id for e in document.edges):
        logger.debug("Refusing duplicate edge %r -> %r", source_id, target_id)
        return ConnectResult(document=document, edge_id=None)

    edge_id = next_edge_id(document.edges)
    edge = DiagramEdge(id=edge_id, source=source_id, target=target_id, style="solid")
    return ConnectResult(
        document=replace(document, edges=[*document.edges, edge]),
        edge_id=edge_id,
    )


def update_direction(document: DiagramDocument, direction: Direction) -> DiagramDocument:
    return replace(document, direction=direction)
