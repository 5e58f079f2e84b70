from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from .types import Direction, EdgeStyle, NodeShape

# ============================================================================
# Flowchart line grammar
#
# Each content line is classified into exactly one statement:
#
#   flowchart LR              DirectionStatement (first content line only)
#   A[Label]                  NodeStatement
#   A --> |yes| B{Check}      EdgeStatement
#   classDef x fill:#f9f      UnsupportedStatement
#
# Shapes:  [text] rectangle   (text) rounded   {text} diamond   [[text]] stadium
# Arrows:  --> solid          ==> thick        -.-> dotted
# ============================================================================

COMMENT_PREFIX = "%%"

DIRECTION_REGEX = re.compile(
    r"^(?:flowchart|graph)\s+(TB|TD|BT|RL|LR)\s*;?$", re.IGNORECASE
)

# A hyphen never starts an arrow inside an id, so "A-->B" splits at the arrow
ID_REGEX = re.compile(r"[A-Za-z_](?:\w|-(?!->|\.->))*", re.ASCII)

# Longest opener first: "[[" must win over "["
SHAPE_TOKENS: list[tuple[str, str, NodeShape]] = [
    ("[[", "]]", "stadium"),
    ("[", "]", "rectangle"),
    ("(", ")", "rounded"),
    ("{", "}", "diamond"),
]

ARROW_TOKENS: list[tuple[str, EdgeStyle]] = [
    ("-->", "solid"),
    ("==>", "thick"),
    ("-.->", "dotted"),
]

LABEL_FORBIDDEN = frozenset("])}")


@dataclass(slots=True)
class Endpoint:
    id: str
    label: str | None = None
    shape: NodeShape = "rectangle"


@dataclass(slots=True)
class DirectionStatement:
    direction: Direction


@dataclass(slots=True)
class NodeStatement:
    node: Endpoint


@dataclass(slots=True)
class EdgeStatement:
    source: Endpoint
    target: Endpoint
    style: EdgeStyle
    label: str | None = None


@dataclass(slots=True)
class UnsupportedStatement:
    text: str


Statement = Union[DirectionStatement, NodeStatement, EdgeStatement, UnsupportedStatement]


def is_skippable(line: str) -> bool:
    """Blank lines and ``%%`` comments carry no content."""
    stripped = line.strip()
    return not stripped or stripped.startswith(COMMENT_PREFIX)


def label_round_trips(label: str) -> bool:
    """Whether ``label`` reads back unchanged inside a shape bracket.

    Closing brackets end the label early, edge whitespace is stripped on
    parse, and a newline splits the line.
    """
    return (
        bool(label)
        and label == label.strip()
        and "\n" not in label
        and not LABEL_FORBIDDEN.intersection(label)
    )


def classify_line(line: str, allow_direction: bool = False) -> Statement:
    """Classify one content line. Never raises."""
    text = line.strip()

    if allow_direction:
        m = DIRECTION_REGEX.match(text)
        if m:
            return DirectionStatement(direction=m.group(1).upper())  # type: ignore[arg-type]

    node = _parse_node_line(text)
    if node is not None:
        return NodeStatement(node=node)

    edge = _parse_edge_line(text)
    if edge is not None:
        return edge

    return UnsupportedStatement(text=line)


# ============================================================================
# Recursive-descent scanners
# ============================================================================


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _parse_node_line(text: str) -> Endpoint | None:
    scanned = _scan_endpoint(text, 0)
    if scanned is None:
        return None
    endpoint, pos = scanned
    if endpoint.label is None or _skip_ws(text, pos) != len(text):
        return None
    return endpoint


def _parse_edge_line(text: str) -> EdgeStatement | None:
    scanned = _scan_endpoint(text, 0)
    if scanned is None:
        return None
    source, pos = scanned
    pos = _skip_ws(text, pos)

    arrow = _scan_arrow(text, pos)
    if arrow is None:
        return None
    style, pos = arrow
    pos = _skip_ws(text, pos)

    label: str | None = None
    if text.startswith("|", pos):
        close = text.find("|", pos + 1)
        if close < 0:
            return None
        label = text[pos + 1 : close].strip()
        if not label:
            return None
        pos = _skip_ws(text, close + 1)

    scanned = _scan_endpoint(text, pos)
    if scanned is None:
        return None
    target, pos = scanned
    if _skip_ws(text, pos) != len(text):
        return None

    return EdgeStatement(source=source, target=target, style=style, label=label)


def _scan_arrow(text: str, pos: int) -> tuple[EdgeStyle, int] | None:
    for token, style in ARROW_TOKENS:
        if text.startswith(token, pos):
            return style, pos + len(token)
    return None


def _scan_endpoint(text: str, pos: int) -> tuple[Endpoint, int] | None:
    """Scan ``id`` optionally followed by one bracketed shape/label pair."""
    m = ID_REGEX.match(text, pos)
    if not m:
        return None
    node_id = m.group(0)
    after_id = m.end()
    pos = _skip_ws(text, after_id)

    for opener, closer, shape in SHAPE_TOKENS:
        if not text.startswith(opener, pos):
            continue
        start = pos + len(opener)
        end = text.find(closer, start)
        if end < 0:
            return None
        raw_label = text[start:end]
        label = raw_label.strip()
        if not label or LABEL_FORBIDDEN.intersection(raw_label):
            return None
        return Endpoint(id=node_id, label=label, shape=shape), end + len(closer)

    return Endpoint(id=node_id), after_id
