#!/usr/bin/env python3
"""
Reset database - Drop all tables and clear alembic version history.
WARNING: This will delete ALL data!
"""

import os
import sys

from sqlalchemy import text

from leetlab.common.db import create_engine_from_url, drop_schema


def get_database_url():
    """Get database URL from environment."""
    database_url = os.getenv("DATABASE_URL")
    if not database_url:
        print("ERROR: DATABASE_URL environment variable not set")
        sys.exit(1)
    return database_url


def reset_database(database_url: str) -> None:
    """Drop all tables and clear alembic version."""
    engine = create_engine_from_url(database_url)

    print("WARNING: This will drop ALL tables and delete ALL data!")
    print(f"Database: {database_url.split('@')[1] if '@' in database_url else database_url}")

    try:
        # drop_all orders tables so children go before parents
        print("\n1. Dropping tables...")
        drop_schema(engine)
        print("   ✓ Dropped application tables")

        print("\n2. Clearing alembic version history...")
        with engine.begin() as conn:
            conn.execute(text("DROP TABLE IF EXISTS alembic_version"))
        print("   ✓ Cleared alembic_version")

        # enum types outlive their tables on PostgreSQL
        if engine.dialect.name == "postgresql":
            with engine.begin() as conn:
                conn.execute(text("DROP TYPE IF EXISTS user_role"))
                conn.execute(text("DROP TYPE IF EXISTS difficulty"))
            print("   ✓ Dropped enum types")
    finally:
        engine.dispose()

    print("\n✓ Database reset complete!")


if __name__ == "__main__":
    try:
        reset_database(get_database_url())
    except Exception as e:
        print(f"\nERROR: {e}")
        sys.exit(1)
