#!/usr/bin/env python3
"""
Seed Curated Competitors

Writes the built-in curated stores for each catalog niche into the
database, replacing whatever was stored for those niches.

Usage:
    python scripts/seed_curated.py
    python scripts/seed_curated.py --niche golf --niche sauna
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.database import configure_engine, count_curated, init_db, replace_curated
from src.discovery import get_default_catalog


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(),
        ]
    )


def seed(niches=None) -> int:
    """Seed curated stores; returns the number of niches written."""
    catalog = get_default_catalog()
    keys = niches or catalog.keys()

    written = 0
    for key in keys:
        if not catalog.has(key):
            print(f"  skip  {key}: not a catalog niche")
            continue
        stores = catalog.get_known(key)
        if replace_curated(key, stores):
            written += 1
            print(f"  seed  {key}: {count_curated(key)} stores")
        else:
            print(f"  FAIL  {key}")
    return written


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Seed curated competitor stores into the database"
    )
    parser.add_argument(
        "--niche",
        action="append",
        help="Catalog niche to seed (repeatable, default: all)"
    )
    parser.add_argument(
        "--database-url",
        help="Database URL (default: DATABASE_URL or SQLite)"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Verbose logging"
    )

    args = parser.parse_args()

    load_dotenv()
    setup_logging(args.verbose)

    if args.database_url:
        configure_engine(args.database_url)
    init_db()

    written = seed(args.niche)
    print(f"\nSeeded {written} niches")


if __name__ == "__main__":
    main()
