"""Block grid layout: fit N blocks into a rectangle.

One search serves every place the grid is drawn; the planner window and
each widget family differ only in their LayoutPolicy.
"""

import math
from typing import List

from models.category import Category
from models.layout import Block, GridLayout, LayoutPolicy

# Tolerance for footprint comparisons, absorbs float error in the size math
_EPSILON = 1e-9

MAIN_POLICY = LayoutPolicy(
    name="main",
    padding=30.0,
    gap=6.0,
    min_block_size=20.0,
    max_block_size=80.0,
    min_columns=3,
    max_columns=10,
    default_columns=4,
    default_block_size=60.0,
)

# Widgets draw a fixed 12x14 (or 24x7) grid so a full week fills it exactly.
SMALL_WIDGET_POLICY = LayoutPolicy(
    name="small",
    padding=4.0,
    gap=0.5,
    min_block_size=1.0,
    max_block_size=40.0,
    min_columns=12,
    max_columns=12,
    default_columns=12,
    default_block_size=8.0,
    min_rows=14,
)

MEDIUM_WIDGET_POLICY = LayoutPolicy(
    name="medium",
    padding=8.0,
    gap=0.8,
    min_block_size=1.0,
    max_block_size=40.0,
    min_columns=24,
    max_columns=24,
    default_columns=24,
    default_block_size=6.0,
    min_rows=7,
)

LARGE_WIDGET_POLICY = LayoutPolicy(
    name="large",
    padding=8.0,
    gap=1.0,
    min_block_size=1.0,
    max_block_size=60.0,
    min_columns=12,
    max_columns=12,
    default_columns=12,
    default_block_size=15.0,
    min_rows=14,
)

_LAYOUT_POLICIES = {
    "main": MAIN_POLICY,
    "small": SMALL_WIDGET_POLICY,
    "medium": MEDIUM_WIDGET_POLICY,
    "large": LARGE_WIDGET_POLICY,
}


def get_layout_policy(policy_name: str) -> LayoutPolicy:
    """Get a layout policy by name."""
    if policy_name not in _LAYOUT_POLICIES:
        raise ValueError(f"Unknown layout policy: {policy_name}")
    return _LAYOUT_POLICIES[policy_name]


def get_available_policies() -> List[str]:
    """Get list of available layout policy names."""
    return list(_LAYOUT_POLICIES.keys())


def expand_blocks(categories: List[Category]) -> List[Block]:
    """One Block per hour of each category with hours, in collection order."""
    return [
        Block(category_id=c.id, color_id=c.color_id, index=i)
        for c in categories
        if c.hours > 0
        for i in range(c.blocks_count)
    ]


def default_layout(total_blocks: int, policy: LayoutPolicy) -> GridLayout:
    """The fallback layout a policy uses when nothing fits."""
    columns = policy.default_columns
    rows = math.ceil(total_blocks / columns) if total_blocks > 0 else 0
    return GridLayout(
        columns=columns,
        rows=rows,
        block_size=policy.default_block_size,
        gap=policy.gap,
        is_default=True,
    )


def calculate_layout(
    total_blocks: int,
    width: float,
    height: float,
    policy: LayoutPolicy = MAIN_POLICY,
    reserved_height: float = 0.0,
) -> GridLayout:
    """Choose a column count and block size that fits all blocks.

    Column counts are tried in the policy's preferred order and the first
    one whose block size lies within the policy bounds, and whose grid fits
    inside the usable area, wins. The block size for a column count is the
    largest square that fits both the width and the height.

    Args:
        total_blocks: Number of blocks to lay out.
        width: Available width of the container.
        height: Available height of the container.
        policy: Sizing rules for this container.
        reserved_height: Height taken by other content (e.g. a legend).

    Returns:
        GridLayout for the best fit, or the policy default when there are
        no blocks or no column count fits.
    """
    if total_blocks <= 0:
        return default_layout(0, policy)

    usable_width = max(0.0, width - policy.padding)
    usable_height = max(0.0, height - reserved_height - policy.padding)

    for columns in policy.column_candidates():
        if columns <= 0:
            continue
        rows = max(math.ceil(total_blocks / columns), policy.min_rows)

        width_based = (usable_width - (columns - 1) * policy.gap) / columns
        height_based = (usable_height - (rows - 1) * policy.gap) / rows
        block_size = min(width_based, height_based)

        if block_size <= 0:
            continue
        if not policy.min_block_size <= block_size <= policy.max_block_size:
            continue

        footprint_width = columns * block_size + (columns - 1) * policy.gap
        footprint_height = rows * block_size + (rows - 1) * policy.gap
        if footprint_width > usable_width + _EPSILON:
            continue
        if footprint_height > usable_height + _EPSILON:
            continue

        return GridLayout(
            columns=columns,
            rows=math.ceil(total_blocks / columns),
            block_size=block_size,
            gap=policy.gap,
        )

    return default_layout(total_blocks, policy)
