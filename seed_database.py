#!/usr/bin/env python3
"""
Seed the catalog with the demo fixtures.

Usage:
    python seed_database.py
"""

import asyncio
import logging
import sys

from rural_properties.config import settings, validate_startup_configuration
from rural_properties.database import AsyncSessionLocal, create_tables, close_db_connection
from rural_properties.services.seeding import SeedingService, SeedReport

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def print_summary(report: SeedReport) -> None:
    """Print per-collection counts and any errors."""
    print("\n📊 Seeding summary")
    print("=" * 40)
    print(f"  Properties:      {report.properties}")
    print(f"  Users:           {report.users}")
    print(f"  Agents:          {report.agents}")
    print(f"  Inquiries:       {report.inquiries}")
    print(f"  Reviews:         {report.reviews}")
    print(f"  Saved searches:  {report.saved_searches}")
    print(f"  System settings: {'✅' if report.system_settings else '❌'}")

    if report.errors:
        print(f"\n⚠️  {len(report.errors)} error(s):")
        for error in report.errors:
            print(f"  - {error}")
    else:
        print("\n✅ Database seeded successfully")


async def seed() -> SeedReport:
    validate_startup_configuration(settings)
    await create_tables()

    try:
        async with AsyncSessionLocal() as session:
            return await SeedingService(session).seed_all()
    finally:
        await close_db_connection()


def main() -> int:
    print(f"🌱 Seeding {settings.app_name} ({settings.environment})")
    try:
        report = asyncio.run(seed())
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        print(f"\n❌ Seeding failed: {e}")
        return 1

    print_summary(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
