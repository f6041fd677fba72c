#!/usr/bin/env python3
"""
Print Curated Competitors

Prints per-niche store counts followed by the stored stores as JSON.

Usage:
    python scripts/print_competitors.py
"""

import argparse
import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.database import configure_engine, list_curated


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Print curated competitor stores per niche"
    )
    parser.add_argument(
        "--database-url",
        help="Database URL (default: DATABASE_URL or SQLite)"
    )
    args = parser.parse_args()

    load_dotenv()
    if args.database_url:
        configure_engine(args.database_url)

    try:
        grouped = list_curated()
    except Exception as e:
        print(f"Failed to read competitors: {e}", file=sys.stderr)
        sys.exit(1)

    print("Per-niche counts:")
    for niche in sorted(grouped):
        print(f"- {niche}: {len(grouped[niche])}")

    print("\nJSON detail by niche:")
    print(json.dumps(
        {niche: [s.to_dict() for s in stores] for niche, stores in grouped.items()},
        indent=2,
    ))


if __name__ == "__main__":
    main()
