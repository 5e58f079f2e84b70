"""Tests for the flowchart parser."""

from __future__ import annotations

import logging

import pytest

from mermaid_composer.layout import LayoutOptions
from mermaid_composer.parser import parse_flowchart
from mermaid_composer.types import empty_document


def node_map(doc):
    return {n.id: n for n in doc.nodes}


# ============================================================================
# Direction header
# ============================================================================


class TestDirectionHeader:
    def test_parses_flowchart_lr_header(self):
        doc, warnings = parse_flowchart("flowchart LR\n  A --> B")
        assert doc.direction == "LR"
        assert warnings == []

    def test_parses_graph_keyword(self):
        doc, _ = parse_flowchart("graph BT\n  A --> B")
        assert doc.direction == "BT"

    @pytest.mark.parametrize("direction", ["TD", "TB", "LR", "BT", "RL"])
    def test_accepts_all_directions(self, direction):
        doc, _ = parse_flowchart(f"flowchart {direction}\n  A --> B")
        assert doc.direction == direction

    def test_case_insensitive_keyword_and_direction(self):
        doc, _ = parse_flowchart("Graph lr\n  A --> B")
        assert doc.direction == "LR"

    def test_missing_header_defaults_to_td_with_lossy_warning(self):
        result = parse_flowchart("A --> B")
        assert result.document.direction == "TD"
        assert result.warnings[0].code == "LOSSY_PARSE"
        assert result.warnings[0].line == 1

    def test_first_line_without_header_is_still_parsed(self):
        doc, _ = parse_flowchart("A --> B")
        assert len(doc.nodes) == 2
        assert len(doc.edges) == 1

    def test_only_first_content_line_is_a_header(self):
        doc, warnings = parse_flowchart("flowchart TD\nflowchart LR")
        assert doc.direction == "TD"
        assert len(doc.raw_blocks) == 1
        assert doc.raw_blocks[0].source_text == "flowchart LR"
        assert warnings[0].code == "UNSUPPORTED_BLOCK"

    def test_leading_comments_and_blanks_do_not_count(self):
        doc, warnings = parse_flowchart("\n%% title\n\nflowchart RL\n%% note\nA --> B")
        assert doc.direction == "RL"
        assert warnings == []


# ============================================================================
# Empty and garbage input
# ============================================================================


class TestNeverFails:
    def test_empty_input_gives_empty_document(self):
        doc, warnings = parse_flowchart("")
        assert doc == empty_document()
        assert warnings == []

    def test_only_comments(self):
        doc, warnings = parse_flowchart("%% just a comment\n   \n%% another")
        assert doc.nodes == []
        assert warnings == []

    @pytest.mark.parametrize(
        "text",
        [
            "}}}{{{",
            "-->",
            "A -->",
            "--> B",
            "A[",
            "A[]",
            "A -->|| B",
            "A -->|open B",
            "\t\r\n\x00",
            "flowchart",
            "[[[[]]]]",
        ],
    )
    def test_garbage_is_preserved_not_raised(self, text):
        doc, warnings = parse_flowchart(text)
        assert doc.direction == "TD"
        assert doc.nodes == []
        assert doc.edges == []
        assert warnings[0].code == "LOSSY_PARSE"


# ============================================================================
# Node declarations
# ============================================================================


class TestNodeDeclarations:
    @pytest.mark.parametrize(
        "line,shape,label",
        [
            ("A[Hello World]", "rectangle", "Hello World"),
            ("A(Rounded)", "rounded", "Rounded"),
            ("A{Decision}", "diamond", "Decision"),
            ("A[[Stadium]]", "stadium", "Stadium"),
        ],
    )
    def test_parses_shapes(self, line, shape, label):
        doc, _ = parse_flowchart(f"flowchart TD\n  {line}")
        node = node_map(doc)["A"]
        assert node.shape == shape
        assert node.label == label

    def test_trims_labels(self):
        doc, _ = parse_flowchart("flowchart TD\n  A[   spaced out  ]")
        assert node_map(doc)["A"].label == "spaced out"

    def test_supports_hyphenated_ids(self):
        doc, _ = parse_flowchart("flowchart TD\n  my-node[My Node]")
        assert node_map(doc)["my-node"].label == "My Node"

    def test_bare_id_line_is_unsupported(self):
        doc, warnings = parse_flowchart("flowchart TD\n  A")
        assert doc.nodes == []
        assert doc.raw_blocks[0].source_text == "  A"
        assert warnings[0].code == "UNSUPPORTED_BLOCK"

    def test_mismatched_brackets_are_unsupported(self):
        doc, _ = parse_flowchart("flowchart TD\n  A[oops)")
        assert doc.nodes == []
        assert len(doc.raw_blocks) == 1

    def test_default_size(self):
        doc, _ = parse_flowchart("flowchart TD\n  A[x]")
        node = doc.nodes[0]
        assert (node.width, node.height) == (160, 72)


# ============================================================================
# Label/shape merge on repeated references
# ============================================================================


class TestNodeMerge:
    def test_later_declaration_refines_bare_reference(self):
        doc, _ = parse_flowchart("flowchart TD\n  A --> B\n  A(Round)")
        a = node_map(doc)["A"]
        assert a.label == "Round"
        assert a.shape == "rounded"

    def test_later_bare_reference_keeps_label(self):
        doc, _ = parse_flowchart("flowchart TD\n  A{Check}\n  A --> B")
        a = node_map(doc)["A"]
        assert a.label == "Check"
        assert a.shape == "diamond"

    def test_later_rectangle_keeps_earlier_shape(self):
        doc, _ = parse_flowchart("flowchart TD\n  A(Round)\n  A[Renamed]")
        a = node_map(doc)["A"]
        assert a.label == "Renamed"
        assert a.shape == "rounded"

    def test_merge_keeps_original_position(self):
        doc, _ = parse_flowchart("flowchart TD\n  A --> B\n  A[Later]")
        a = node_map(doc)["A"]
        assert (a.x, a.y) == (120, 100)


# ============================================================================
# Edges
# ============================================================================


class TestEdges:
    def test_parses_nodes_and_edges(self):
        doc, warnings = parse_flowchart("flowchart LR\nA[Start] --> B{Check}\nB --> C[Done]")
        assert doc.direction == "LR"
        assert len(doc.nodes) == 3
        assert len(doc.edges) == 2
        assert warnings == []
        nodes = node_map(doc)
        assert nodes["B"].shape == "diamond"
        assert nodes["B"].label == "Check"

    def test_creates_bare_endpoint_nodes(self):
        doc, _ = parse_flowchart("flowchart TD\n  A --> B")
        nodes = node_map(doc)
        assert nodes["A"].label == "A"
        assert nodes["A"].shape == "rectangle"
        assert nodes["B"].label == "B"

    @pytest.mark.parametrize(
        "arrow,style",
        [("-->", "solid"), ("==>", "thick"), ("-.->", "dotted")],
    )
    def test_arrow_styles(self, arrow, style):
        doc, _ = parse_flowchart(f"flowchart TD\n  A {arrow} B")
        assert doc.edges[0].style == style

    def test_arrow_without_spaces(self):
        doc, _ = parse_flowchart("flowchart TD\n  A-->B")
        assert doc.edges[0].source == "A"
        assert doc.edges[0].target == "B"

    def test_hyphenated_ids_around_arrow(self):
        doc, _ = parse_flowchart("flowchart TD\n  my-a-->my-b")
        assert (doc.edges[0].source, doc.edges[0].target) == ("my-a", "my-b")

    def test_pipe_label(self):
        doc, _ = parse_flowchart("flowchart TD\n  A -->|Yes| B")
        assert doc.edges[0].label == "Yes"

    def test_pipe_label_with_spaces(self):
        doc, _ = parse_flowchart("flowchart TD\n  A --> | No way | B")
        assert doc.edges[0].label == "No way"

    def test_edge_without_label_has_none(self):
        doc, _ = parse_flowchart("flowchart TD\n  A --> B")
        assert doc.edges[0].label is None

    def test_sequential_edge_ids(self):
        doc, _ = parse_flowchart("flowchart TD\n  A --> B\n  B --> C\n  C --> A")
        assert [e.id for e in doc.edges] == ["e-1", "e-2", "e-3"]
        assert (doc.edges[2].source, doc.edges[2].target) == ("C", "A")

    def test_chained_edges_are_unsupported(self):
        doc, warnings = parse_flowchart("flowchart TD\n  A --> B --> C")
        assert doc.edges == []
        assert doc.raw_blocks[0].source_text == "  A --> B --> C"
        assert warnings[0].code == "UNSUPPORTED_BLOCK"


# ============================================================================
# Unsupported lines
# ============================================================================


class TestUnsupportedLines:
    def test_preserves_classdef_line(self):
        doc, warnings = parse_flowchart("flowchart TD\nA --> B\nclassDef default fill:#f9f")
        assert len(doc.raw_blocks) == 1
        assert "classDef" in doc.raw_blocks[0].source_text
        assert any(w.code == "UNSUPPORTED_BLOCK" for w in warnings)

    def test_block_keeps_text_verbatim_with_indentation(self):
        doc, _ = parse_flowchart("flowchart TD\n    style A fill:#f00,stroke:#333  ")
        assert doc.raw_blocks[0].source_text == "    style A fill:#f00,stroke:#333  "

    def test_block_metadata(self):
        doc, warnings = parse_flowchart("flowchart TD\n\nsubgraph One\nA --> B\nend")
        assert [b.id for b in doc.raw_blocks] == ["raw-1", "raw-2"]
        assert [b.line for b in doc.raw_blocks] == [3, 5]
        assert all(b.reason == "unsupported_feature" for b in doc.raw_blocks)
        assert [w.line for w in warnings] == [3, 5]

    def test_unsupported_line_does_not_break_following_lines(self):
        doc, _ = parse_flowchart("flowchart TD\n  click A callback\n  A --> B")
        assert len(doc.edges) == 1
        assert len(doc.nodes) == 2

    def test_comments_never_become_blocks(self):
        doc, _ = parse_flowchart("flowchart TD\n  %% A --> B\n  A[x]")
        assert doc.raw_blocks == []
        assert doc.edges == []


# ============================================================================
# Placement and canonical order
# ============================================================================


class TestPlacement:
    def test_grid_positions_in_creation_order(self):
        doc, _ = parse_flowchart("flowchart TD\n  A --> B")
        nodes = node_map(doc)
        assert (nodes["A"].x, nodes["A"].y) == (120, 100)
        assert (nodes["B"].x, nodes["B"].y) == (360, 100)

    def test_wraps_after_four_columns(self):
        doc, _ = parse_flowchart("flowchart TD\n" + "\n".join(f"{c}[{c}]" for c in "ABCDE"))
        nodes = node_map(doc)
        assert (nodes["D"].x, nodes["D"].y) == (840, 100)
        assert (nodes["E"].x, nodes["E"].y) == (120, 240)

    def test_layout_options_override_spacing(self):
        options = LayoutOptions(columns=2, origin_x=0, origin_y=0, column_spacing=100, row_spacing=50)
        doc, _ = parse_flowchart("flowchart TD\n  A --> B\n  C --> D", options)
        nodes = node_map(doc)
        assert (nodes["C"].x, nodes["C"].y) == (0, 50)

    def test_output_is_normalized(self):
        doc, _ = parse_flowchart("flowchart TD\n  C --> B\n  B --> A")
        assert [n.id for n in doc.nodes] == ["A", "B", "C"]

    def test_equivalent_inputs_yield_same_order(self):
        one, _ = parse_flowchart("flowchart TD\n  B[b]\n  A[a]")
        two, _ = parse_flowchart("flowchart TD\n  A[a]\n  B[b]")
        assert [n.id for n in one.nodes] == [n.id for n in two.nodes]
        assert [n.label for n in one.nodes] == [n.label for n in two.nodes]


# ============================================================================
# Logging
# ============================================================================


class TestLogging:
    def test_logs_preserved_lines_at_debug(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="mermaid_composer.parser"):
            parse_flowchart("A --> B\nclassDef x fill:#fff")
        messages = [r.getMessage() for r in caplog.records]
        assert any("assuming TD" in m for m in messages)
        assert any("classDef x fill:#fff" in m for m in messages)
