#!/usr/bin/env python3

import sys
from logger import get_logger
from models.palette import PALETTE

logger = get_logger()


def resolve_category(services, ref):
    """Find a category by id, unique id prefix, or exact name.

    Returns:
        The matching Category, or None.
    """
    categories = services.allocation.categories

    for category in categories:
        if category.id == ref:
            return category

    by_prefix = [c for c in categories if c.id.lower().startswith(ref.lower())]
    if len(by_prefix) == 1:
        return by_prefix[0]

    by_name = [c for c in categories if c.name == ref]
    if len(by_name) == 1:
        return by_name[0]

    return None


def _require_category(services, ref):
    category = resolve_category(services, ref)
    if category is None:
        logger.error(f"Category '{ref}' not found.")
        sys.exit(1)
    return category


def _print_category(category, max_available):
    logger.info(f"ID: {category.id}")
    logger.info(f"Name: {category.name}")
    logger.info(f"Hours: {category.hours:g} ({category.percentage:.1f}%)")
    logger.info(f"Blocks: {category.blocks_count}")
    logger.info(f"Color: {category.color_id}")
    logger.info(f"Max available: {max_available:g}")


def cmd_list(args, services):
    """List all categories with their hours."""
    allocation = services.allocation
    categories = allocation.categories

    if not categories:
        logger.info("No categories found.")
        return

    logger.info("\nCategories:")
    logger.info("=" * 80)
    for category in categories:
        _print_category(category, allocation.max_available_hours(category.id))
        logger.info("-" * 80)

    logger.info(f"\nUsed: {allocation.total_used_hours():g}h")
    logger.info(f"Remaining: {allocation.remaining_hours():g}h")


def cmd_add(args, services):
    """Add a new empty category."""
    category = services.allocation.add_category()
    if args.name:
        services.allocation.rename_category(category.id, args.name)
    if args.hours:
        services.allocation.set_category_hours(category.id, args.hours)

    category = services.allocation.find(category.id)
    logger.info(f"✓ Category created with ID: {category.id}")
    logger.info(f"  Name: {category.name}")
    logger.info(f"  Hours: {category.hours:g}")
    logger.info(f"  Color: {category.color_id}")


def cmd_remove(args, services):
    """Remove a category."""
    category = _require_category(services, args.category)
    services.allocation.remove_category(category.id)
    logger.info(f"✓ Category '{category.name}' removed.")


def cmd_rename(args, services):
    """Rename a category."""
    category = _require_category(services, args.category)
    services.allocation.rename_category(category.id, args.name)
    renamed = services.allocation.find(category.id)
    logger.info(f"✓ Renamed '{category.name}' to '{renamed.name}'.")


def cmd_color(args, services):
    """Change a category's color."""
    category = _require_category(services, args.category)
    palette_ids = [entry.id for entry in PALETTE]
    if args.color_id not in palette_ids:
        logger.warning(
            f"'{args.color_id}' is not in the palette; it will display as "
            f"'{palette_ids[0]}'."
        )
    services.allocation.set_category_color(category.id, args.color_id)
    logger.info(f"✓ '{category.name}' color set to {args.color_id}.")


def cmd_hours(args, services):
    """Set a category's hours (clamped to what the week has left)."""
    category = _require_category(services, args.category)
    services.allocation.set_category_hours(category.id, args.hours)
    updated = services.allocation.find(category.id)
    if updated.hours != args.hours:
        logger.info(f"Requested {args.hours:g}h, clamped to {updated.hours:g}h.")
    logger.info(f"✓ '{updated.name}' now has {updated.hours:g}h.")


def cmd_step(args, services):
    """Add or remove whole blocks from a category."""
    category = _require_category(services, args.category)
    services.allocation.adjust_category_hours(category.id, args.steps)
    updated = services.allocation.find(category.id)
    logger.info(f"✓ '{updated.name}' now has {updated.hours:g}h.")


def cmd_move(args, services):
    """Move one block from one category to another."""
    source = _require_category(services, args.source)
    target = _require_category(services, args.target)

    if services.allocation.move_block(source.id, target.id):
        logger.info(f"✓ Moved one block from '{source.name}' to '{target.name}'.")
    else:
        logger.info("No block moved.")


def setup_parser(subparsers):
    """Setup categories subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "categories",
        help="Manage categories",
        description="Add, edit, and remove the categories the week is split into",
    )

    categories_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available category commands",
        dest="subcommand",
        required=True,
    )

    # categories list
    list_parser = categories_subparsers.add_parser("list", help="List all categories")
    list_parser.set_defaults(func=cmd_list)

    # categories add
    add_parser = categories_subparsers.add_parser("add", help="Add a new category")
    add_parser.add_argument("--name", help="Name of the new category")
    add_parser.add_argument(
        "--hours", type=float, default=0.0, help="Initial hours per week"
    )
    add_parser.set_defaults(func=cmd_add)

    # categories remove
    remove_parser = categories_subparsers.add_parser(
        "remove", help="Remove a category"
    )
    remove_parser.add_argument("category", help="Category id, id prefix, or name")
    remove_parser.set_defaults(func=cmd_remove)

    # categories rename
    rename_parser = categories_subparsers.add_parser(
        "rename", help="Rename a category"
    )
    rename_parser.add_argument("category", help="Category id, id prefix, or name")
    rename_parser.add_argument("name", help="New name (empty for the placeholder)")
    rename_parser.set_defaults(func=cmd_rename)

    # categories color
    color_parser = categories_subparsers.add_parser(
        "color", help="Change a category's color"
    )
    color_parser.add_argument("category", help="Category id, id prefix, or name")
    color_parser.add_argument(
        "color_id", help=f"Palette color ({', '.join(e.id for e in PALETTE)})"
    )
    color_parser.set_defaults(func=cmd_color)

    # categories hours
    hours_parser = categories_subparsers.add_parser(
        "hours", help="Set a category's hours per week"
    )
    hours_parser.add_argument("category", help="Category id, id prefix, or name")
    hours_parser.add_argument("hours", type=float, help="Requested hours")
    hours_parser.set_defaults(func=cmd_hours)

    # categories step
    step_parser = categories_subparsers.add_parser(
        "step", help="Add or remove whole blocks"
    )
    step_parser.add_argument("category", help="Category id, id prefix, or name")
    step_parser.add_argument(
        "steps", type=int, help="Number of blocks to add (negative to remove)"
    )
    step_parser.set_defaults(func=cmd_step)

    # categories move
    move_parser = categories_subparsers.add_parser(
        "move", help="Move one block between categories"
    )
    move_parser.add_argument("source", help="Category to take the block from")
    move_parser.add_argument("target", help="Category to give the block to")
    move_parser.set_defaults(func=cmd_move)
