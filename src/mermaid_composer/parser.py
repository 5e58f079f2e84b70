from __future__ import annotations

import logging

from .grammar import (
    DirectionStatement,
    EdgeStatement,
    Endpoint,
    NodeStatement,
    UnsupportedStatement,
    classify_line,
    is_skippable,
)
from .layout import LayoutOptions, default_node_size, grid_position
from .normalizer import normalize_document
from .types import (
    DiagramDocument,
    DiagramEdge,
    DiagramNode,
    Direction,
    ParseResult,
    ParseWarning,
    UnsupportedBlock,
)

logger = logging.getLogger(__name__)

MISSING_DIRECTION_MESSAGE = "Missing flowchart/graph directive; assuming TD"
UNSUPPORTED_LINE_MESSAGE = "Line is preserved in text mode but not editable in visual mode."

# ============================================================================
# Flowchart parser - text to editable document
# ============================================================================


def parse_flowchart(text: str, options: LayoutOptions | None = None) -> ParseResult:
    """Parse flowchart text into a normalized document plus warnings.

    Never raises: lines outside the understood subset are kept verbatim as
    unsupported blocks, and a missing direction header defaults to TD.
    """
    warnings: list[ParseWarning] = []
    raw_blocks: list[UnsupportedBlock] = []
    nodes_by_id: dict[str, DiagramNode] = {}
    edges: list[DiagramEdge] = []

    direction: Direction = "TD"
    header_checked = False

    for index, line in enumerate(text.split("\n")):
        line_no = index + 1
        if is_skippable(line):
            continue

        statement = classify_line(line, allow_direction=not header_checked)

        if not header_checked:
            header_checked = True
            if not isinstance(statement, DirectionStatement):
                logger.debug("No direction header on line %d, assuming TD", line_no)
                warnings.append(
                    ParseWarning(
                        message=MISSING_DIRECTION_MESSAGE,
                        code="LOSSY_PARSE",
                        line=line_no,
                    )
                )

        match statement:
            case DirectionStatement(direction=value):
                direction = value
            case NodeStatement(node=endpoint):
                _ensure_node(nodes_by_id, endpoint, options)
            case EdgeStatement(source=source, target=target, style=style, label=label):
                _ensure_node(nodes_by_id, source, options)
                _ensure_node(nodes_by_id, target, options)
                edges.append(
                    DiagramEdge(
                        id=f"e-{len(edges) + 1}",
                        source=source.id,
                        target=target.id,
                        label=label,
                        style=style,
                    )
                )
            case UnsupportedStatement(text=source_text):
                logger.debug("Preserving unsupported line %d: %r", line_no, source_text)
                raw_blocks.append(
                    UnsupportedBlock(
                        id=f"raw-{len(raw_blocks) + 1}",
                        source_text=source_text,
                        reason="unsupported_feature",
                        line=line_no,
                    )
                )
                warnings.append(
                    ParseWarning(
                        message=UNSUPPORTED_LINE_MESSAGE,
                        code="UNSUPPORTED_BLOCK",
                        line=line_no,
                    )
                )

    document = DiagramDocument(
        direction=direction,
        nodes=list(nodes_by_id.values()),
        edges=edges,
        subgraphs=[],
        raw_blocks=raw_blocks,
    )
    return ParseResult(document=normalize_document(document), warnings=warnings)


def _ensure_node(
    nodes_by_id: dict[str, DiagramNode],
    endpoint: Endpoint,
    options: LayoutOptions | None,
) -> DiagramNode:
    existing = nodes_by_id.get(endpoint.id)
    if existing is not None:
        # Later declarations refine earlier ones; bare references never erase
        if endpoint.label:
            existing.label = endpoint.label
        if endpoint.shape != "rectangle":
            existing.shape = endpoint.shape
        return existing

    x, y = grid_position(len(nodes_by_id), options)
    width, height = default_node_size(options)
    node = DiagramNode(
        id=endpoint.id,
        label=endpoint.label or endpoint.id,
        shape=endpoint.shape,
        x=x,
        y=y,
        width=width,
        height=height,
    )
    nodes_by_id[node.id] = node
    return node
