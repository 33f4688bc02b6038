"""Layout models for the block grid."""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LayoutPolicy:
    """Sizing rules for one place the block grid is drawn.

    Attributes:
        name: Policy name (main, small, medium, large).
        padding: Space removed from each axis before fitting blocks.
        gap: Space between neighbouring blocks.
        min_block_size: Smallest acceptable block edge.
        max_block_size: Largest acceptable block edge.
        min_columns: Lowest column count tried.
        max_columns: Highest column count tried.
        default_columns: Column count used when nothing fits.
        default_block_size: Block edge used when nothing fits.
        prefer_more_columns: Search from max_columns down when True,
            from min_columns up otherwise.
        min_rows: Rows the height is divided into even when fewer are
            needed, so a fixed grid keeps its block size as hours change.
    """

    name: str
    padding: float
    gap: float
    min_block_size: float
    max_block_size: float
    min_columns: int
    max_columns: int
    default_columns: int
    default_block_size: float
    prefer_more_columns: bool = True
    min_rows: int = 1

    def column_candidates(self) -> range:
        if self.prefer_more_columns:
            return range(self.max_columns, self.min_columns - 1, -1)
        return range(self.min_columns, self.max_columns + 1)


@dataclass(frozen=True)
class GridLayout:
    """Result of fitting blocks into an area.

    Attributes:
        columns: Number of columns.
        rows: Number of rows holding blocks.
        block_size: Edge length of one block.
        gap: Space between blocks.
        is_default: True when the policy default was used instead of a fit.
    """

    columns: int
    rows: int
    block_size: float
    gap: float
    is_default: bool = False

    @property
    def width(self) -> float:
        if self.columns <= 0:
            return 0.0
        return self.columns * self.block_size + (self.columns - 1) * self.gap

    @property
    def height(self) -> float:
        if self.rows <= 0:
            return 0.0
        return self.rows * self.block_size + (self.rows - 1) * self.gap

    def position(self, index: int) -> Tuple[int, int]:
        """Return the (row, column) cell of the block at index."""
        return divmod(index, self.columns)


@dataclass(frozen=True)
class Block:
    """One hour of a category, as drawn in the grid.

    Attributes:
        category_id: Owning category.
        color_id: Palette entry of the owning category.
        index: Zero-based position within the category.
    """

    category_id: str
    color_id: str
    index: int

    @property
    def number(self) -> int:
        """Label drawn on the block (1-based)."""
        return self.index + 1
