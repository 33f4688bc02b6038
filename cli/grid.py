#!/usr/bin/env python3

from cli.categories import resolve_category
from cli.render import category_labels, describe_layout, render_grid
from logger import get_logger
from services.grid_layout import (
    calculate_layout,
    get_available_policies,
    get_layout_policy,
)

logger = get_logger()


def cmd_show(args, services):
    """Show the week as a grid of blocks."""
    allocation = services.allocation
    blocks = allocation.blocks()
    policy = get_layout_policy(args.family)
    layout = calculate_layout(len(blocks), args.width, args.height, policy)

    logger.info(f"\n{len(blocks)} blocks in {args.width:g}x{args.height:g}")
    logger.info(describe_layout(layout))
    logger.info("")

    if not blocks:
        logger.info("No hours allocated yet.")
        return

    labels = category_labels(allocation.categories)
    for line in render_grid(blocks, layout, labels, color=args.color):
        logger.info(line)

    logger.info("")
    for category in allocation.visible_categories():
        logger.info(f"{labels[category.id]}  {category.name}: {category.hours:g}h")


def cmd_stats(args, services):
    """Show hours, blocks and share of the week per category."""
    logger.info("\nStatistics:")
    logger.info("=" * 80)
    for row in services.allocation.stats():
        logger.info(
            f"{row.label:<24} {row.hours:>6g}h {row.blocks:>4} blocks "
            f"{row.percentage:>6.1f}%"
        )
    logger.info("=" * 80)
    logger.info(f"Used: {services.allocation.total_used_hours():g}h")
    logger.info(f"Remaining: {services.allocation.remaining_hours():g}h")

    if args.category:
        category = resolve_category(services, args.category)
        if category is not None:
            logger.info(
                f"\n'{category.name}' can grow to "
                f"{services.allocation.max_available_hours(category.id):g}h"
            )


def setup_parser(subparsers):
    """Setup grid and stats command parsers.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "grid",
        help="Show the block grid",
        description="Lay out one block per allocated hour",
    )

    grid_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available grid commands",
        dest="subcommand",
        required=True,
    )

    # grid show
    show_parser = grid_subparsers.add_parser("show", help="Render the grid")
    show_parser.add_argument(
        "--family",
        choices=get_available_policies(),
        default="main",
        help="Layout policy to use (default: main)",
    )
    show_parser.add_argument(
        "--width", type=float, default=800.0, help="Container width (default: 800)"
    )
    show_parser.add_argument(
        "--height", type=float, default=600.0, help="Container height (default: 600)"
    )
    show_parser.add_argument(
        "--color", action="store_true", help="Draw blocks in their palette colors"
    )
    show_parser.set_defaults(func=cmd_show)

    # stats
    stats_parser = subparsers.add_parser(
        "stats", help="Show allocation statistics"
    )
    stats_parser.add_argument(
        "--category", help="Also show how far this category can grow"
    )
    stats_parser.set_defaults(func=cmd_stats)
