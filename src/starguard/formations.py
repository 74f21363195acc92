"""Initial enemy layouts for each level."""

from __future__ import annotations

from enum import Enum
import math

from .utils import Point

GRID_SPACING = 60
GRID_ROW_SPACING = 50
V_SPACING = 40
TOP_MARGIN = 50
WAVE_AMPLITUDE = 30


class Formation(str, Enum):
    """Supported formation layouts."""

    GRID = "grid"
    V_SHAPE = "v-shape"
    WAVE = "wave"


def grid_positions(count: int, width: float) -> list[Point]:
    """Lay enemies out in a horizontally centred, near-square grid."""
    cols, _ = grid_shape(count)
    start_x = (width - (cols - 1) * GRID_SPACING) / 2
    positions: list[Point] = []
    for index in range(count):
        col = index % cols
        row = index // cols
        positions.append((start_x + col * GRID_SPACING, TOP_MARGIN + row * GRID_ROW_SPACING))
    return positions


def grid_shape(count: int) -> tuple[int, int]:
    """Return (columns, rows) used by the grid layout."""
    if count <= 0:
        return (0, 0)
    cols = math.ceil(math.sqrt(count))
    return cols, math.ceil(count / cols)


def v_shape_positions(count: int, width: float) -> list[Point]:
    """Alternate left/right of centre, dropping lower as the arms widen."""
    center_x = width / 2
    positions: list[Point] = []
    for index in range(count):
        side = 1 if index % 2 == 0 else -1
        offset = (index // 2) * V_SPACING
        positions.append((center_x + side * offset, TOP_MARGIN + abs(offset) * 0.5))
    return positions


def wave_positions(count: int, width: float) -> list[Point]:
    """Spread enemies evenly across the screen on a sine baseline."""
    spacing = width / (count + 1)
    return [
        (spacing * (index + 1), TOP_MARGIN + math.sin(index * 0.5) * WAVE_AMPLITUDE)
        for index in range(count)
    ]


_LAYOUTS = {
    Formation.GRID: grid_positions,
    Formation.V_SHAPE: v_shape_positions,
    Formation.WAVE: wave_positions,
}


def formation_positions(formation: Formation, count: int, width: float) -> list[Point]:
    """Compute initial enemy positions for a formation."""
    return _LAYOUTS[formation](count, width)
