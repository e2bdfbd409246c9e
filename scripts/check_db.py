#!/usr/bin/env python
"""Check database connectivity and schema.

Usage:
    uv run python scripts/check_db.py
"""

import asyncio
import sys

from sqlalchemy import text

from app.core.config import get_settings
from app.core.database import Database

EXPECTED_TABLES = ("stores", "products", "product_sales")


async def check_database():
    """Verify database connection and that the inventory tables exist."""
    settings = get_settings()

    print("InventoryAnalytics - Database Connectivity Check")
    print("=" * 48)
    print(f"Database URL: {settings.database_url.split('@')[-1]}")  # Hide credentials
    print()

    database = Database.from_settings(settings)

    try:
        await database.ping()
        print("[OK] Basic connectivity")

        async with database.engine.connect() as conn:
            result = await conn.execute(text("SELECT version()"))
            version = result.scalar()
            print(f"[OK] PostgreSQL version: {version[:50]}...")

            result = await conn.execute(
                text(
                    "SELECT table_name FROM information_schema.tables "
                    "WHERE table_schema = 'public'"
                )
            )
            present = {row[0] for row in result}

        missing = [table for table in EXPECTED_TABLES if table not in present]
        if missing:
            print(f"[WARN] Missing tables: {', '.join(missing)}")
            print("       Run: uv run alembic upgrade head")
        else:
            print(f"[OK] Tables present: {', '.join(EXPECTED_TABLES)}")

        print()
        print("Database check completed successfully!")
        return 0

    except Exception as e:
        print(f"[FAIL] Connection failed: {e}")
        print()
        print("Troubleshooting:")
        print("  1. Ensure PostgreSQL is running: docker-compose up -d")
        print("  2. Check DATABASE_URL in .env file")
        print("  3. Verify the database user can connect: psql $DATABASE_URL")
        return 1

    finally:
        await database.dispose()


def main():
    sys.exit(asyncio.run(check_database()))


if __name__ == "__main__":
    main()
