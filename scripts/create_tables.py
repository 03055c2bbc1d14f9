"""
Create the bookings and payment_gateways tables directly from the models.
Run: python scripts/create_tables.py
"""

import asyncio
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from app.database import Base, engine
import app.models  # noqa: F401


async def create_tables():
    if not engine:
        print("DATABASE_URL not configured")
        sys.exit(1)

    print("Creating tables...")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    for table in Base.metadata.sorted_tables:
        print(f"  - {table.name}")

    await engine.dispose()
    print("Done.")


if __name__ == "__main__":
    if sys.platform == "win32":
        asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
    asyncio.run(create_tables())
