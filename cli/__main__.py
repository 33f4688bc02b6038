#!/usr/bin/env python3
"""
Blockstime CLI - Split the 168 hours of a week into colored blocks.

Usage:
    python -m cli <command> <subcommand> [options]

Commands:
    categories   Manage categories and their hours
    grid         Show the block grid
    stats        Show allocation statistics
    widget       Preview the home-screen widget
    diagnostics  Check storage shared with the widget

Examples:
    python -m cli categories list
    python -m cli categories add --name Reading --hours 5
    python -m cli categories hours Work 45
    python -m cli categories move Free Work
    python -m cli grid show --width 800 --height 600 --color
    python -m cli widget show --family medium
    python -m cli diagnostics check
"""

import sys
import argparse
from cli import categories, diagnostics, grid, widget
from config import load_config
from services.base import Services
from logger import setup_logging


def main():
    """Main CLI entry point with subcommands."""
    parser = argparse.ArgumentParser(
        prog="cli",
        description="Blockstime - Weekly time allocation in blocks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        description="Available commands",
        dest="command",
        required=True,
    )

    # Register each command's subparser
    categories.setup_parser(subparsers)
    grid.setup_parser(subparsers)
    widget.setup_parser(subparsers)
    diagnostics.setup_parser(subparsers)

    args = parser.parse_args()

    if hasattr(args, "func"):
        try:
            config = load_config()
            setup_logging(config)

            # Create services container for dependency injection
            services = Services(config)
            args.func(args, services)
        except Exception as e:
            print(f"Error: {e}")
            sys.exit(1)
    else:
        parser.print_help()
        sys.exit(1)


if __name__ == "__main__":
    main()
