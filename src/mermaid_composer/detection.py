from __future__ import annotations

import re
from typing import Literal

from .grammar import is_skippable

DiagramType = Literal[
    "flowchart",
    "sequence",
    "class",
    "state",
    "er",
    "gantt",
    "pie",
    "git",
    "mindmap",
    "timeline",
    "c4",
    "architecture",
    "block",
    "requirement",
    "quadrant",
    "sankey",
    "xychart",
    "radar",
    "kanban",
    "journey",
    "packet",
    "unknown",
]

DIAGRAM_PATTERNS: list[tuple[re.Pattern[str], DiagramType]] = [
    (re.compile(r"^(?:flowchart|graph)\b", re.IGNORECASE), "flowchart"),
    (re.compile(r"^sequenceDiagram\b", re.IGNORECASE), "sequence"),
    (re.compile(r"^classDiagram\b", re.IGNORECASE), "class"),
    (re.compile(r"^stateDiagram(?:-v2)?\b", re.IGNORECASE), "state"),
    (re.compile(r"^erDiagram\b", re.IGNORECASE), "er"),
    (re.compile(r"^gantt\b", re.IGNORECASE), "gantt"),
    (re.compile(r"^pie\b", re.IGNORECASE), "pie"),
    (re.compile(r"^gitGraph\b", re.IGNORECASE), "git"),
    (re.compile(r"^mindmap\b", re.IGNORECASE), "mindmap"),
    (re.compile(r"^timeline\b", re.IGNORECASE), "timeline"),
    (re.compile(r"^C4(?:Context|Container|Component|Dynamic|Deployment)\b", re.IGNORECASE), "c4"),
    (re.compile(r"^architecture-beta\b", re.IGNORECASE), "architecture"),
    (re.compile(r"^block-beta\b", re.IGNORECASE), "block"),
    (re.compile(r"^requirementDiagram\b", re.IGNORECASE), "requirement"),
    (re.compile(r"^quadrantChart\b", re.IGNORECASE), "quadrant"),
    (re.compile(r"^sankey-beta\b", re.IGNORECASE), "sankey"),
    (re.compile(r"^xychart-beta\b", re.IGNORECASE), "xychart"),
    (re.compile(r"^radar-beta\b", re.IGNORECASE), "radar"),
    (re.compile(r"^kanban\b", re.IGNORECASE), "kanban"),
    (re.compile(r"^journey\b", re.IGNORECASE), "journey"),
    (re.compile(r"^packet-beta\b", re.IGNORECASE), "packet"),
]


def detect_diagram_type(text: str) -> DiagramType:
    """Detect diagram type from the first content line of mermaid text."""
    for line in text.split("\n"):
        if is_skippable(line):
            continue
        first_line = line.strip()
        for pattern, diagram_type in DIAGRAM_PATTERNS:
            if pattern.match(first_line):
                return diagram_type
        return "unknown"
    return "unknown"
