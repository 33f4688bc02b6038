#!/usr/bin/env python3

from cli.render import category_labels, describe_layout, render_grid
from logger import get_logger

logger = get_logger()

# Nominal widget sizes in points, per family
WIDGET_SIZES = {
    "small": (170.0, 170.0),
    "medium": (364.0, 170.0),
    "large": (364.0, 382.0),
}


def cmd_show(args, services):
    """Render the widget from the shared snapshot."""
    entry = services.widget.entry()
    width, height = WIDGET_SIZES[args.family]
    legend = entry.legend() if args.family != "small" else []
    rows = entry.legend_rows(args.family, width) if legend else 0
    layout = entry.layout(args.family, width, height, legend_rows=rows)

    logger.info(f"\nWidget ({args.family}) at {entry.date:%Y-%m-%d %H:%M:%S}")
    logger.info(describe_layout(layout))

    error = services.widget.last_error()
    if error is not None:
        logger.warning(f"Showing default data: {error}")

    requested = services.widget.last_reload_request()
    if requested is not None:
        logger.info(f"Last refresh requested at {requested:%Y-%m-%d %H:%M:%S}")
    logger.info("")

    labels = category_labels(entry.categories)
    for line in render_grid(entry.blocks(), layout, labels, color=args.color):
        logger.info(line)

    if legend:
        logger.info("")
        for item in legend:
            logger.info(f"{item.name}: {item.hours:g}h ({item.share:.0f}%)")


def cmd_reload(args, services):
    """Ask the widget to refresh."""
    if services.widget_center.reload_all_timelines():
        logger.info("✓ Widget refresh requested.")
    else:
        logger.info("Widget refresh is disabled or could not be recorded.")


def setup_parser(subparsers):
    """Setup widget subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "widget",
        help="Preview the home-screen widget",
        description="Render the widget from shared storage and request refreshes",
    )

    widget_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available widget commands",
        dest="subcommand",
        required=True,
    )

    # widget show
    show_parser = widget_subparsers.add_parser("show", help="Render the widget")
    show_parser.add_argument(
        "--family",
        choices=list(WIDGET_SIZES.keys()),
        default="small",
        help="Widget family (default: small)",
    )
    show_parser.add_argument(
        "--color", action="store_true", help="Draw blocks in their palette colors"
    )
    show_parser.set_defaults(func=cmd_show)

    # widget reload
    reload_parser = widget_subparsers.add_parser(
        "reload", help="Request a widget refresh"
    )
    reload_parser.set_defaults(func=cmd_reload)
