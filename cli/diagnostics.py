#!/usr/bin/env python3

import sys
from logger import get_logger
from services.diagnostics import force_save_defaults, run_diagnostics

logger = get_logger()


def cmd_check(args, services):
    """Check that the widget can read the shared snapshot."""
    report = run_diagnostics(
        services.store, services.config.storage_key, services.config.app_group_id
    )
    for line in report.lines():
        logger.info(line)

    if not report.healthy:
        sys.exit(1)


def cmd_force_save(args, services):
    """Overwrite shared storage with the default categories."""
    confirm = (
        input("This replaces all categories with the defaults. Continue? (yes/no): ")
        .strip()
        .lower()
    )
    if confirm != "yes":
        logger.info("Cancelled.")
        return

    if force_save_defaults(services.storage):
        logger.info("✓ Default categories saved.")
    else:
        logger.error(f"Failed to save: {services.storage.last_error}")
        sys.exit(1)


def setup_parser(subparsers):
    """Setup diagnostics subcommand parser.

    Args:
        subparsers: The subparsers object from the main CLI
    """
    parser = subparsers.add_parser(
        "diagnostics",
        help="Check shared storage",
        description="Diagnose data sharing between the planner and the widget",
    )

    diagnostics_subparsers = parser.add_subparsers(
        title="subcommands",
        description="Available diagnostics commands",
        dest="subcommand",
        required=True,
    )

    check_parser = diagnostics_subparsers.add_parser(
        "check", help="Check the shared snapshot"
    )
    check_parser.set_defaults(func=cmd_check)

    force_save_parser = diagnostics_subparsers.add_parser(
        "force-save", help="Save the default categories"
    )
    force_save_parser.set_defaults(func=cmd_force_save)
