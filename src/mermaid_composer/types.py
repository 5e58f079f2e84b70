from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, NamedTuple, Union

# ============================================================================
# Document model - editable structure derived from flowchart text
# ============================================================================

Direction = Literal["TB", "TD", "BT", "RL", "LR"]

NodeShape = Literal[
    "rectangle",  # [text]
    "rounded",    # (text)
    "diamond",    # {text}
    "stadium",    # [[text]]
]

EdgeStyle = Literal["solid", "dotted", "thick"]

WarningCode = Literal["UNSUPPORTED_BLOCK", "LOSSY_PARSE"]

BlockReason = Literal["unknown_syntax", "unsupported_feature"]

DOCUMENT_VERSION = "1"


@dataclass(slots=True)
class DiagramNode:
    id: str
    label: str
    shape: NodeShape
    x: float
    y: float
    width: float
    height: float


@dataclass(slots=True)
class DiagramEdge:
    id: str
    source: str
    target: str
    label: str | None = None
    style: EdgeStyle | None = None


@dataclass(slots=True)
class DiagramSubgraph:
    id: str
    title: str
    node_ids: list[str] = field(default_factory=list)


@dataclass(slots=True)
class UnsupportedBlock:
    """A source line kept verbatim because the grammar does not model it."""

    id: str
    source_text: str
    reason: BlockReason
    line: int | None = None


@dataclass(slots=True)
class DiagramDocument:
    version: str = DOCUMENT_VERSION
    kind: Literal["flowchart"] = "flowchart"
    direction: Direction = "TD"
    nodes: list[DiagramNode] = field(default_factory=list)
    edges: list[DiagramEdge] = field(default_factory=list)
    subgraphs: list[DiagramSubgraph] = field(default_factory=list)
    raw_blocks: list[UnsupportedBlock] = field(default_factory=list)


def empty_document() -> DiagramDocument:
    return DiagramDocument()


# ============================================================================
# Diagnostics - advisory output of parsing and validation
# ============================================================================


@dataclass(slots=True)
class ParseWarning:
    message: str
    code: WarningCode
    line: int | None = None


@dataclass(slots=True)
class ValidationIssue:
    path: str
    message: str


class ParseResult(NamedTuple):
    document: DiagramDocument
    warnings: list[ParseWarning]


# ============================================================================
# Composer - selection and operation results
# ============================================================================


@dataclass(slots=True, frozen=True)
class NodeSelection:
    id: str


@dataclass(slots=True, frozen=True)
class EdgeSelection:
    id: str


ComposerSelection = Union[NodeSelection, EdgeSelection, None]


class AddNodeResult(NamedTuple):
    document: DiagramDocument
    node_id: str


class ConnectResult(NamedTuple):
    document: DiagramDocument
    edge_id: str | None
