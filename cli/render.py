"""Text rendering of the block grid for the terminal."""

import math
from typing import List

from models.layout import Block, GridLayout
from models.palette import find_color, hex_to_rgba

EMPTY_CELL = "··"
RESET = "\033[0m"


def block_cell(block: Block, labels: dict, color: bool) -> str:
    """Render one block as a two-character cell."""
    if color:
        r, g, b, _ = hex_to_rgba(find_color(block.color_id).main)
        return f"\033[38;2;{r};{g};{b}m██{RESET}"
    return labels.get(block.category_id, "??")


def category_labels(categories) -> dict:
    """Map category ids to two-character labels (first letter + index)."""
    return {
        c.id: f"{(c.name[:1] or '?').upper()}{i % 10}"
        for i, c in enumerate(categories)
    }


def render_grid(
    blocks: List[Block], layout: GridLayout, labels: dict, color: bool = False
) -> List[str]:
    """Render blocks row by row following the layout's column count."""
    if not blocks or layout.columns <= 0:
        return []
    rows = math.ceil(len(blocks) / layout.columns)
    grid = [[EMPTY_CELL] * layout.columns for _ in range(rows)]
    for index, block in enumerate(blocks):
        row, column = layout.position(index)
        grid[row][column] = block_cell(block, labels, color)
    return [" ".join(cells) for cells in grid]


def describe_layout(layout: GridLayout) -> str:
    text = (
        f"{layout.columns} columns x {layout.rows} rows, "
        f"block {layout.block_size:.1f}, gap {layout.gap:g}"
    )
    if layout.is_default:
        text += " (default)"
    return text
