#!/usr/bin/env python3
"""CLI for ordering API management tasks.

Usage:
    python -m cli <command>

Commands:
    migrate    Run database migrations
    seed       Load sample users, orders and items
"""

import argparse
import asyncio
import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def cmd_migrate() -> int:
    """Run database migrations."""
    from alembic import command
    from scripts.migrate import get_alembic_config

    logger.info("Running database migrations...")
    command.upgrade(get_alembic_config(), "head")
    logger.info("Migrations complete")
    return 0


def cmd_seed() -> int:
    """Load sample data into an empty database."""
    from scripts.seed_sample_data import main as seed_main

    logger.info("Seeding sample data...")
    asyncio.run(seed_main())
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Online ordering API CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("migrate", help="Run database migrations")
    subparsers.add_parser("seed", help="Load sample users, orders and items")

    args = parser.parse_args()

    if args.command == "migrate":
        return cmd_migrate()
    elif args.command == "seed":
        return cmd_seed()
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
