#!/usr/bin/env python3
"""
Seed the shared exercise catalog.

Usage:
    python scripts/seed_exercises.py [--create-tables]

Exercises already present (by name) are skipped.
"""

import argparse
import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

# Add the project root to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


async def main(create_tables: bool) -> int:
    from app.db.async_session import AsyncDatabaseManager
    from app.db.seed import seed_exercises

    manager = AsyncDatabaseManager.from_settings()
    try:
        if create_tables:
            await manager.create_all()
            print("Tables created")

        async for session in manager.get_async_session():
            inserted = await seed_exercises(session)
        print(f"Successfully seeded {inserted} exercises!")
        return inserted
    finally:
        await manager.close()


if __name__ == "__main__":
    load_dotenv(override=True)
    logging.basicConfig(level=logging.INFO)

    parser = argparse.ArgumentParser(description="Seed the exercise catalog")
    parser.add_argument("--create-tables", action="store_true",
                        help="Create all tables before seeding (development databases without migrations)")
    args = parser.parse_args()

    try:
        asyncio.run(main(args.create_tables))
    except Exception as e:
        print(f"Exercise seeding failed: {e}")
        sys.exit(1)
