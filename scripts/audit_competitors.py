#!/usr/bin/env python3
"""
Audit Curated Competitors

Re-verifies the curated stores of every niche (popular niches plus the
niches already stored) and saves the survivors back to the database.

Usage:
    python scripts/audit_competitors.py
    python scripts/audit_competitors.py --niche golf --time-limit 90
    python scripts/audit_competitors.py --output audit.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

from src.database import configure_engine, count_curated, init_db, list_niche_names
from src.discovery import CompetitorFinder, audit_niches
from src.discovery.niche_data import POPULAR_NICHES
from src.utils.config import get_settings


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
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def niches_to_audit(selected: Optional[List[str]] = None) -> List[str]:
    """Selected niches, or popular niches followed by stored ones."""
    if selected:
        return list(dict.fromkeys(selected))
    return [n for n in dict.fromkeys(list(POPULAR_NICHES) + list_niche_names()) if n]


async def run_audit(niches: List[str], time_limit: float, keep: int, output_file: str = None):
    """Audit niches and print a JSON summary."""
    print(f"\n{'='*60}")
    print("CURATED COMPETITOR AUDIT")
    print(f"{'='*60}")
    print(f"Niches: {len(niches)}")
    print(f"Time limit per niche: {time_limit}s")
    print(f"{'='*60}\n")

    async with CompetitorFinder() as finder:
        results = await audit_niches(niches, finder, time_limit=time_limit, keep=keep)

    print("\nPer-niche saved counts:")
    for niche in niches:
        print(f"- {niche}: {count_curated(niche)}")

    summary = {
        "total": len(results),
        "results": [r.to_dict() for r in results],
    }
    print("\nJSON Summary:\n" + json.dumps(summary, indent=2))

    if output_file:
        with open(output_file, "w") as f:
            json.dump(summary, f, indent=2, default=str)
        print(f"\nSaved summary to {output_file}")

    return summary


def main():
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(
        description="Audit and persist working competitor stores per niche"
    )
    parser.add_argument(
        "--niche",
        action="append",
        help="Niche to audit (repeatable, default: popular + stored niches)"
    )
    parser.add_argument(
        "--time-limit",
        type=float,
        default=settings.AUDIT_TIME_LIMIT,
        help=f"Seconds per niche, at least 30 (default: {settings.AUDIT_TIME_LIMIT})"
    )
    parser.add_argument(
        "--keep",
        type=int,
        default=settings.AUDIT_KEEP,
        help=f"Stores to save per niche (default: {settings.AUDIT_KEEP})"
    )
    parser.add_argument(
        "--database-url",
        help="Database URL (default: DATABASE_URL or SQLite)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Save JSON summary to file"
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

    niches = niches_to_audit(args.niche)
    if not niches:
        print("No niches found to audit. Seed some niches first.")
        return

    asyncio.run(run_audit(
        niches=niches,
        time_limit=args.time_limit,
        keep=args.keep,
        output_file=args.output,
    ))


if __name__ == "__main__":
    main()
