#!/usr/bin/env python3
"""
Migration Management Helper Script

This script provides a simple interface for managing the LeetLab
database schema through Alembic.

Usage:
    leetlab-db upgrade [revision]      # Apply migrations (default: head)
    leetlab-db downgrade [revision]    # Revert migrations (default: -1)
    leetlab-db current                 # Show the applied revision
    leetlab-db reset                   # Drop everything, then upgrade

Examples:
    leetlab-db upgrade
    leetlab-db downgrade base
    leetlab-db reset
"""

import sys
from pathlib import Path
from typing import Optional

from alembic import command
from alembic.config import Config

from leetlab.common.config import get_settings
from leetlab.common.logging_conf import setup_logging_from_settings

from .reset_db import reset_database

MIGRATION_DIR = Path(__file__).resolve().parent

COMMANDS = ("upgrade", "downgrade", "current", "reset")


def build_alembic_config(database_url: str) -> Config:
    """
    Build an Alembic config pointing at this package's migrations.

    Args:
        database_url: Target database URL

    Returns:
        Config: Alembic configuration
    """
    config = Config()
    config.set_main_option("script_location", str(MIGRATION_DIR))
    # ConfigParser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    return config


def print_usage():
    """Print usage information."""
    print("Migration Management Helper")
    print()
    print("Usage:")
    print("  leetlab-db upgrade [revision]    # Apply migrations (default: head)")
    print("  leetlab-db downgrade [revision]  # Revert migrations (default: -1)")
    print("  leetlab-db current               # Show the applied revision")
    print("  leetlab-db reset                 # Drop all tables, then upgrade")
    print()
    print("Environment Variables Required:")
    print("  DATABASE_URL          SQLAlchemy connection string")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    if not args:
        print_usage()
        return 1

    command_name = args[0].lower()

    # Validate command
    if command_name not in COMMANDS:
        print(f"Error: Unknown command '{command_name}'")
        print()
        print_usage()
        return 1

    settings = get_settings()
    setup_logging_from_settings(settings, service_name="leetlab-migrate")
    config = build_alembic_config(settings.db_url)

    if command_name == "upgrade":
        revision = args[1] if len(args) > 1 else "head"
        print(f"Upgrading database to {revision}...")
        command.upgrade(config, revision)
    elif command_name == "downgrade":
        revision = args[1] if len(args) > 1 else "-1"
        print(f"Downgrading database to {revision}...")
        command.downgrade(config, revision)
    elif command_name == "current":
        command.current(config, verbose=True)
    elif command_name == "reset":
        reset_database(settings.db_url)
        print("Re-applying migrations...")
        command.upgrade(config, "head")

    print("✓ Done")
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        print()
        print("Operation cancelled by user")
        sys.exit(130)
