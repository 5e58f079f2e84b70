"""JSON transport shape of a diagram document.

Pydantic models mirror :class:`~mermaid_composer.types.DiagramDocument`
field for field, with camelCase aliases on the wire (``rawBlocks``,
``sourceText``, ``nodeIds``). Optional fields that are ``None`` are left
out, so a payload produced here round-trips byte for byte.
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from .types import (
    BlockReason,
    DiagramDocument,
    DiagramEdge,
    DiagramNode,
    DiagramSubgraph,
    Direction,
    EdgeStyle,
    NodeShape,
    UnsupportedBlock,
)


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class NodeModel(_WireModel):
    id: str
    label: str
    shape: NodeShape
    x: float
    y: float
    width: float = Field(ge=0)
    height: float = Field(ge=0)


class EdgeModel(_WireModel):
    id: str
    source: str
    target: str
    label: str | None = None
    style: EdgeStyle | None = None


class SubgraphModel(_WireModel):
    id: str
    title: str
    node_ids: list[str] = Field(default_factory=list)


class UnsupportedBlockModel(_WireModel):
    id: str
    source_text: str
    reason: BlockReason
    line: int | None = None


class DocumentModel(_WireModel):
    version: Literal["1"] = "1"
    kind: Literal["flowchart"] = "flowchart"
    direction: Direction = "TD"
    nodes: list[NodeModel] = Field(default_factory=list)
    edges: list[EdgeModel] = Field(default_factory=list)
    subgraphs: list[SubgraphModel] = Field(default_factory=list)
    raw_blocks: list[UnsupportedBlockModel] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_node_ids(self) -> DocumentModel:
        seen: set[str] = set()
        for node in self.nodes:
            if node.id in seen:
                raise ValueError(f"Duplicate node id: {node.id}")
            seen.add(node.id)
        return self

    @classmethod
    def from_document(cls, document: DiagramDocument) -> DocumentModel:
        return cls.model_validate(asdict(document))

    def to_document(self) -> DiagramDocument:
        return DiagramDocument(
            version=self.version,
            kind=self.kind,
            direction=self.direction,
            nodes=[DiagramNode(**n.model_dump()) for n in self.nodes],
            edges=[DiagramEdge(**e.model_dump()) for e in self.edges],
            subgraphs=[DiagramSubgraph(**s.model_dump()) for s in self.subgraphs],
            raw_blocks=[UnsupportedBlock(**b.model_dump()) for b in self.raw_blocks],
        )


def document_to_dict(document: DiagramDocument) -> dict[str, Any]:
    return DocumentModel.from_document(document).model_dump(
        mode="json", by_alias=True, exclude_none=True
    )


def document_from_dict(data: dict[str, Any]) -> DiagramDocument:
    """Build a document from a wire payload.

    Raises ``pydantic.ValidationError`` (a ``ValueError``) when the payload
    does not match the document shape.
    """
    return DocumentModel.model_validate(data).to_document()


def document_to_json(document: DiagramDocument) -> str:
    return DocumentModel.from_document(document).model_dump_json(
        by_alias=True, exclude_none=True
    )


def document_from_json(payload: str | bytes) -> DiagramDocument:
    return DocumentModel.model_validate_json(payload).to_document()
