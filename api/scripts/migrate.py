#!/usr/bin/env python3
"""Run Alembic migrations for the configured database.

Usage:
    cd api
    python -m scripts.migrate upgrade
    python -m scripts.migrate downgrade -1
    python -m scripts.migrate current
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from alembic import command
from alembic.config import Config


def get_alembic_config() -> Config:
    """Alembic config that works from any working directory."""
    api_dir = Path(__file__).resolve().parents[1]
    sys.path.insert(0, str(api_dir))

    cfg = Config(str(api_dir / "alembic.ini"))
    cfg.set_main_option("script_location", str(api_dir / "alembic"))
    return cfg


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run Alembic migrations")
    sub = parser.add_subparsers(dest="cmd", required=True)

    upgrade = sub.add_parser("upgrade", help="Apply migrations")
    upgrade.add_argument("target", nargs="?", default="head")

    downgrade = sub.add_parser("downgrade", help="Revert migrations")
    downgrade.add_argument("target", nargs="?", default="-1")

    sub.add_parser("current", help="Show current revision")

    return parser.parse_args()


def main() -> None:
    args = _parse_args()
    cfg = get_alembic_config()

    match args.cmd:
        case "upgrade":
            command.upgrade(cfg, args.target)
        case "downgrade":
            command.downgrade(cfg, args.target)
        case "current":
            command.current(cfg)
        case _:
            raise ValueError(f"Unknown command: {args.cmd}")


if __name__ == "__main__":
    main()
