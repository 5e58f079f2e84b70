from __future__ import annotations

from .types import DiagramDocument, ValidationIssue


def validate_document(document: DiagramDocument) -> list[ValidationIssue]:
    """Report edges whose endpoints reference unknown nodes."""
    issues: list[ValidationIssue] = []
    node_ids = {node.id for node in document.nodes}

    for edge in document.edges:
        if edge.source not in node_ids:
            issues.append(
                ValidationIssue(
                    path=f"edges.{edge.id}.source",
                    message=f"Unknown source node: {edge.source}",
                )
            )
        if edge.target not in node_ids:
            issues.append(
                ValidationIssue(
                    path=f"edges.{edge.id}.target",
                    message=f"Unknown target node: {edge.target}",
                )
            )

    return issues
