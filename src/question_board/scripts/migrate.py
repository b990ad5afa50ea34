# src/question_board/scripts/migrate.py
"""Apply or roll back Alembic migrations against the configured database.

Usage:
    python -m question_board.scripts.migrate [revision]
    python -m question_board.scripts.migrate --downgrade [revision]
"""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from question_board.core.settings import settings

logger = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parents[3] / "migrations"


def alembic_config() -> Config:
    """Build an Alembic config pointed at this checkout's migrations."""
    cfg = Config(str(MIGRATIONS_DIR / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", settings.database_url_sync)
    return cfg


def run_upgrade_head() -> None:
    """Apply every pending migration."""
    run_upgrade("head")


def run_upgrade(revision: str) -> None:
    """Upgrade the schema to ``revision``."""
    logger.info("Upgrading database schema to %s", revision)
    command.upgrade(alembic_config(), revision)


def run_downgrade(revision: str) -> None:
    """Roll the schema back to ``revision``."""
    logger.info("Downgrading database schema to %s", revision)
    command.downgrade(alembic_config(), revision)


def main() -> None:
    parser = argparse.ArgumentParser(description="Migrate the Question Board schema")
    parser.add_argument("revision", nargs="?")
    parser.add_argument(
        "--downgrade",
        action="store_true",
        help="roll back to the revision (default: base) instead of upgrading",
    )
    args = parser.parse_args()
    if args.downgrade:
        run_downgrade(args.revision or "base")
    else:
        run_upgrade(args.revision or "head")


if __name__ == "__main__":
    main()
