#!/usr/bin/env python3
"""
Import raw company names from a JSON job store into the companies database.

Usage:
    python scripts/import_store_companies.py --json data/store.json --db data/companies.db
"""

import argparse
import json
from collections import defaultdict
from pathlib import Path
import sys

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from employermatch.database import init_database, get_session
from storage.repositories.companies import add_names


def collect_names(store: dict) -> dict:
    """Group raw company names by source ("unknown" when missing)."""
    by_source = defaultdict(list)
    for role_data in store.get("roles", {}).values():
        current = role_data.get("current", {})
        company = current.get("company")
        if not company or not str(company).strip():
            continue
        by_source[current.get("source") or "unknown"].append(company)
    return dict(by_source)


def import_store(json_path: Path, db_path: Path, dry_run: bool = False) -> int:
    """
    Import company names from a JSON store.

    Args:
        json_path: Path to JSON store file ({"roles": {role_id: {"current": {...}}}})
        db_path: Path to SQLite database file
        dry_run: If True, don't write to database

    Returns:
        Number of names inserted
    """
    print(f"Loading roles from {json_path}...")
    with open(json_path, encoding="utf-8") as f:
        store = json.load(f)

    by_source = collect_names(store)
    total = sum(len(v) for v in by_source.values())
    print(f"Found {total} company names across {len(by_source)} sources")

    if dry_run:
        print("\n[DRY RUN] Would import:")
        for source, names in sorted(by_source.items()):
            preview = ", ".join(sorted(set(names))[:5])
            print(f"  {source}: {len(names)} names ({preview}{', ...' if len(set(names)) > 5 else ''})")
        return 0

    init_database(db_path)
    session = get_session(db_path)
    inserted = 0
    try:
        for source, names in sorted(by_source.items()):
            inserted += add_names(session, names, source)
    finally:
        session.close()

    print(f"\nImport complete: {inserted} inserted")
    return inserted


def main():
    parser = argparse.ArgumentParser(description="Import company names from a JSON job store")
    parser.add_argument("--json", type=Path, default=Path("data/store.json"),
                       help="Path to JSON store file")
    parser.add_argument("--db", type=Path, default=Path("data/companies.db"),
                       help="Path to SQLite database file")
    parser.add_argument("--dry-run", action="store_true",
                       help="Show what would be imported without writing")

    args = parser.parse_args()

    if not args.json.exists():
        print(f"JSON file not found: {args.json}")
        sys.exit(1)

    import_store(args.json, args.db, dry_run=args.dry_run)


if __name__ == "__main__":
    main()
