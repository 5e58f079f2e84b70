from __future__ import annotations

import math
from dataclasses import dataclass

# ============================================================================
# Deterministic placement - grid slots for new nodes and grid snapping
# ============================================================================

# Layout defaults
LAYOUT_DEFAULTS = {
    "columns": 4,
    "origin_x": 120,
    "origin_y": 100,
    "column_spacing": 240,
    "row_spacing": 140,
    "node_width": 160,
    "node_height": 72,
    "grid_size": 10,
}


@dataclass(slots=True)
class LayoutOptions:
    columns: int | None = None
    origin_x: float | None = None
    origin_y: float | None = None
    column_spacing: float | None = None
    row_spacing: float | None = None
    node_width: float | None = None
    node_height: float | None = None
    grid_size: int | None = None


def merge_options(options: LayoutOptions | None) -> dict:
    opts = dict(LAYOUT_DEFAULTS)
    if options:
        for key in LAYOUT_DEFAULTS:
            value = getattr(options, key)
            if value is not None:
                opts[key] = value
    return opts


def grid_position(index: int, options: LayoutOptions | None = None) -> tuple[float, float]:
    """Slot ``index`` of a row-major wrap layout (4 columns by default)."""
    opts = merge_options(options)
    col = index % opts["columns"]
    row = index // opts["columns"]
    return (
        opts["origin_x"] + col * opts["column_spacing"],
        opts["origin_y"] + row * opts["row_spacing"],
    )


def snap(value: float, options: LayoutOptions | None = None) -> int:
    """Round to the nearest multiple of the grid pitch, halves rounding up."""
    grid = merge_options(options)["grid_size"]
    return math.floor(value / grid + 0.5) * grid


def default_node_size(options: LayoutOptions | None = None) -> tuple[float, float]:
    opts = merge_options(options)
    return opts["node_width"], opts["node_height"]
