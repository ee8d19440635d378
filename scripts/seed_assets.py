#!/usr/bin/env python3
"""Seed the inventory database with demo assets.

Usage:
    python scripts/seed_assets.py --count 50

Creates the tables if they do not exist and inserts ``count`` assets with
a few IP addresses and ports each. Uses DATABASE_URL from the environment
unless --url is given.
"""

import argparse
import asyncio
import random
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

OWNERS = ["alice", "bob", "carol", "dave", "erin"]
COMMON_PORTS = [22, 25, 53, 80, 110, 143, 443, 3306, 5432, 6379, 8080, 8443]


def build_assets(count: int, seed: int) -> list:
    """Build unsaved asset models with IPs and ports."""
    from assetsig.models import Asset, AssetIP, AssetPort

    rng = random.Random(seed)
    assets = []
    for i in range(1, count + 1):
        # Every tenth asset has no IPs or ports
        bare = i % 10 == 0
        ips = [] if bare else [
            AssetIP(address=f"10.{i // 256}.{i % 256}.{n + 1}")
            for n in range(rng.randint(1, 3))
        ]
        ports = [] if bare else [
            AssetPort(port=port)
            for port in sorted(rng.sample(COMMON_PORTS, rng.randint(1, 4)))
        ]
        assets.append(Asset(
            host=f"host-{i:03d}.example.internal",
            comment=f"demo asset {i}",
            owner=rng.choice(OWNERS),
            ips=ips,
            ports=ports,
        ))
    return assets


async def seed(count: int, url: str | None, seed_value: int) -> None:
    """Create the schema and insert demo assets."""
    from assetsig.common.config import DatabaseSettings, get_settings
    from assetsig.common.database import Database

    db_settings = DatabaseSettings(url=url) if url else get_settings().database
    database = Database.from_settings(db_settings)

    try:
        await database.create_schema()
        async with database.session() as session:
            session.add_all(build_assets(count, seed_value))
            await session.commit()
    finally:
        await database.close()

    print(f"Inserted {count} assets into {db_settings.url}")


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Seed the AssetSig inventory with demo data")
    parser.add_argument("--count", type=int, default=25, help="Number of assets to insert")
    parser.add_argument("--url", help="Database URL (defaults to DATABASE_URL)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed for reproducible data")

    args = parser.parse_args()

    if args.count < 1:
        print("Error: --count must be at least 1")
        sys.exit(1)

    asyncio.run(seed(args.count, args.url, args.seed))


if __name__ == "__main__":
    main()
