#!/usr/bin/env python3
"""Import catalog CSV script.

Loads a catalog CSV (Product, Mark, Category, Description, Price, Stock)
straight into the database, outside the HTTP API.

Usage:
    python scripts/import_catalog.py catalog.csv
    python scripts/import_catalog.py catalog.csv --create-tables
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from storefront.catalog.importer import CatalogImporter, ImportReport
from storefront.infrastructure.database import async_session_factory, create_tables, engine


async def import_file(path: Path) -> ImportReport:
    """Import one CSV file in a single transaction.

    Args:
        path: CSV file path.

    Returns:
        Import counts.
    """
    text = path.read_text(encoding="utf-8")
    async with async_session_factory() as session:
        report = await CatalogImporter(session).import_csv(text)
        await session.commit()
        return report


async def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Import a product catalog CSV",
    )
    parser.add_argument(
        "csv_path",
        type=Path,
        help="CSV file with columns Product, Mark, Category, Description, Price, Stock",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create database tables before importing",
    )

    args = parser.parse_args()

    print("=" * 60)
    print("Storefront Catalog Import")
    print("=" * 60)
    print(f"File: {args.csv_path}")
    print()

    try:
        if args.create_tables:
            print("Creating database tables...")
            await create_tables()
            print("Tables ready.")
            print()

        try:
            report = await import_file(args.csv_path)
        except Exception as e:
            print(f"  ✗ Error: {e}")
            raise

        print(f"  ✓ Rows: {report.rows}")
        print(f"  ✓ Products created: {report.products_created}")
        print(f"  ✓ Products updated: {report.products_updated}")
        print(f"  ✓ Categories created: {report.categories_created}")
        print(f"  ✓ Marks created: {report.marks_created}")
        print()
    finally:
        await engine.dispose()

    print("=" * 60)
    print("Import complete!")
    print("=" * 60)


if __name__ == "__main__":
    asyncio.run(main())
