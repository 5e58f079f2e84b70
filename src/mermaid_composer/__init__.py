"""mermaid-composer - Lossless flowchart text <-> editable graph document."""

from __future__ import annotations

from .types import (
    DiagramDocument,
    DiagramNode,
    DiagramEdge,
    DiagramSubgraph,
    UnsupportedBlock,
    ParseWarning,
    ParseResult,
    ValidationIssue,
    NodeSelection,
    EdgeSelection,
    ComposerSelection,
    AddNodeResult,
    ConnectResult,
    Direction,
    NodeShape,
    EdgeStyle,
    empty_document,
)
from .layout import LayoutOptions, LAYOUT_DEFAULTS
from .parser import parse_flowchart
from .normalizer import normalize_document
from .serializer import serialize_flowchart
from .grammar import label_round_trips
from .validator import validate_document
from .detection import DiagramType, detect_diagram_type
from .diagnostics import parse_error_line, format_error
from .composer import (
    next_node_id,
    next_edge_id,
    add_node,
    add_node_at,
    update_node_position,
    update_node_label,
    remove_selection,
    connect_nodes,
    update_direction,
)
from .wire import (
    document_to_dict,
    document_from_dict,
    document_to_json,
    document_from_json,
)

__all__ = [
    "parse_flowchart",
    "normalize_document",
    "serialize_flowchart",
    "label_round_trips",
    "validate_document",
    "detect_diagram_type",
    "parse_error_line",
    "format_error",
    "next_node_id",
    "next_edge_id",
    "add_node",
    "add_node_at",
    "update_node_position",
    "update_node_label",
    "remove_selection",
    "connect_nodes",
    "update_direction",
    "document_to_dict",
    "document_from_dict",
    "document_to_json",
    "document_from_json",
    "empty_document",
    "LayoutOptions",
    "LAYOUT_DEFAULTS",
    "DiagramDocument",
    "DiagramNode",
    "DiagramEdge",
    "DiagramSubgraph",
    "UnsupportedBlock",
    "ParseWarning",
    "ParseResult",
    "ValidationIssue",
    "NodeSelection",
    "EdgeSelection",
    "ComposerSelection",
    "AddNodeResult",
    "ConnectResult",
    "Direction",
    "NodeShape",
    "EdgeStyle",
    "DiagramType",
]
