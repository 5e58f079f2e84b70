from __future__ import annotations

from .normalizer import normalize_document
from .types import DiagramDocument, EdgeStyle, NodeShape

# ============================================================================
# Serializer - document to canonical flowchart text
# ============================================================================

PRESERVED_MARKER = "%% Preserved unsupported lines"

SHAPE_BRACKETS: dict[NodeShape, tuple[str, str]] = {
    "rectangle": ("[", "]"),
    "rounded": ("(", ")"),
    "diamond": ("{", "}"),
    "stadium": ("[[", "]]"),
}

EDGE_ARROWS: dict[EdgeStyle, str] = {
    "solid": "-->",
    "thick": "==>",
    "dotted": "-.->",
}


def serialize_flowchart(document: DiagramDocument) -> str:
    """Render a document as flowchart text.

    The document is normalized first, so equal documents always produce
    byte-identical text. Unsupported blocks follow a marker comment,
    verbatim.
    """
    normalized = normalize_document(document)
    lines: list[str] = [f"flowchart {normalized.direction}"]

    for node in normalized.nodes:
        open_token, close_token = SHAPE_BRACKETS.get(node.shape, SHAPE_BRACKETS["rectangle"])
        lines.append(f"  {node.id}{open_token}{node.label}{close_token}")

    for edge in normalized.edges:
        arrow = EDGE_ARROWS.get(edge.style or "solid", EDGE_ARROWS["solid"])
        label = f"|{edge.label}| " if edge.label else ""
        lines.append(f"  {edge.source} {arrow} {label}{edge.target}")

    if normalized.raw_blocks:
        lines.append("")
        lines.append(PRESERVED_MARKER)
        for block in normalized.raw_blocks:
            lines.append(block.source_text)

    return "\n".join(lines)
