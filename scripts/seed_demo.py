#!/usr/bin/env python
"""Demo database seeder CLI.

Generate stores, products and a sales history for local development and demos.

Usage:
    # Generate complete dataset
    uv run python scripts/seed_demo.py --full-new --seed 42 --confirm

    # Delete all data
    uv run python scripts/seed_demo.py --delete --confirm

    # Add another 30 days of sales for the existing products
    uv run python scripts/seed_demo.py --append --days 30

    # Run pre-built scenario
    uv run python scripts/seed_demo.py --full-new --scenario busy --confirm

    # Preview deletion
    uv run python scripts/seed_demo.py --delete --dry-run
"""

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Literal

import yaml
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import Database
from app.core.logging import configure_logging
from app.shared.seeder import (
    DataSeeder,
    DimensionConfig,
    SalesConfig,
    ScenarioPreset,
    SeederConfig,
)


def load_config_from_yaml(path: Path) -> SeederConfig:
    """Load seeder configuration from YAML file.

    Expected layout::

        seed: 42
        batch_size: 1000
        stores: {count: 8, products_per_store: 6, categories: [...]}
        stock: {min: 0, max: 80}
        sales: {days: 30, min_daily: 3, max_daily: 8, max_quantity: 5}

    Args:
        path: Path to YAML config file.

    Returns:
        SeederConfig loaded from file.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with path.open() as f:
        data = yaml.safe_load(f) or {}

    defaults = DimensionConfig()
    stores_data = data.get("stores", {})
    stock_data = data.get("stock", {})
    dimensions = DimensionConfig(
        stores=stores_data.get("count", defaults.stores),
        products_per_store=stores_data.get("products_per_store", defaults.products_per_store),
        product_categories=stores_data.get("categories", defaults.product_categories),
        min_stock=stock_data.get("min", defaults.min_stock),
        max_stock=stock_data.get("max", defaults.max_stock),
    )

    sales_defaults = SalesConfig()
    sales_data = data.get("sales", {})
    sales = SalesConfig(
        days=sales_data.get("days", sales_defaults.days),
        min_daily_sales=sales_data.get("min_daily", sales_defaults.min_daily_sales),
        max_daily_sales=sales_data.get("max_daily", sales_defaults.max_daily_sales),
        max_quantity=sales_data.get("max_quantity", sales_defaults.max_quantity),
    )

    return SeederConfig(
        seed=data.get("seed", 42),
        dimensions=dimensions,
        sales=sales,
        batch_size=data.get("batch_size", 1000),
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        description="InventoryAnalytics Demo Database Seeder",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate standard dataset
  seed_demo.py --full-new --seed 42 --confirm

  # Busy scenario
  seed_demo.py --full-new --scenario busy --confirm

  # Preview deletion
  seed_demo.py --delete --dry-run

  # Load config from YAML
  seed_demo.py --full-new --config seed.yaml --confirm
        """,
    )

    # Operation modes (mutually exclusive)
    mode_group = parser.add_mutually_exclusive_group(required=True)
    mode_group.add_argument(
        "--full-new",
        action="store_true",
        help="Generate stores, products and sales from scratch",
    )
    mode_group.add_argument(
        "--delete",
        action="store_true",
        help="Delete data",
    )
    mode_group.add_argument(
        "--append",
        action="store_true",
        help="Append sales for the existing products",
    )
    mode_group.add_argument(
        "--status",
        action="store_true",
        help="Show current data counts",
    )
    mode_group.add_argument(
        "--verify",
        action="store_true",
        help="Verify data integrity",
    )

    # Data generation options
    parser.add_argument(
        "--seed",
        type=int,
        default=42,
        help="Random seed for reproducibility (default: 42)",
    )
    parser.add_argument(
        "--stores",
        type=int,
        default=8,
        help="Number of stores to generate (default: 8)",
    )
    parser.add_argument(
        "--products-per-store",
        type=int,
        default=6,
        help="Number of products per store (default: 6)",
    )
    parser.add_argument(
        "--days",
        type=int,
        default=30,
        help="Days of sales history to generate (default: 30)",
    )

    # Scenario and config
    parser.add_argument(
        "--scenario",
        choices=[s.value for s in ScenarioPreset],
        help="Use a pre-built scenario",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Load configuration from YAML file",
    )

    # Delete options
    parser.add_argument(
        "--scope",
        choices=["all", "sales"],
        default="all",
        help="Deletion scope (default: all)",
    )

    # Safety options
    parser.add_argument(
        "--confirm",
        action="store_true",
        help="Confirm destructive operations",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Preview without executing",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=1000,
        help="Batch insert size (default: 1000)",
    )

    return parser


def print_banner() -> None:
    """Print the seeder banner."""
    print()
    print("=" * 60)
    print("  InventoryAnalytics")
    print("  Demo Database Seeder")
    print("=" * 60)
    print()


def print_counts(counts: dict[str, int], title: str = "Current Data Counts") -> None:
    """Print table counts in a formatted way."""
    print(f"\n{title}:")
    print("-" * 40)
    for table, count in counts.items():
        print(f"  {table:<30} {count:>8,}")
    print("-" * 40)
    print(f"  {'Total':<30} {sum(counts.values()):>8,}")
    print()


def production_blocked() -> bool:
    """True when running against production without an explicit override."""
    settings = get_settings()
    if settings.is_production and not settings.seeder_allow_production:
        print("ERROR: Cannot run seeder in production environment.")
        print("Set SEEDER_ALLOW_PRODUCTION=true to override (not recommended).")
        return True
    return False


async def run_full_new(args: argparse.Namespace, session: AsyncSession) -> int:
    """Run full new generation."""
    if production_blocked():
        return 1

    if not args.confirm:
        print("ERROR: --confirm flag required for data generation.")
        print("This will create new data. Use --confirm to proceed.")
        return 1

    if args.config:
        print(f"Loading configuration from: {args.config}")
        config = load_config_from_yaml(args.config)
    elif args.scenario:
        print(f"Using scenario: {args.scenario}")
        config = SeederConfig.from_scenario(ScenarioPreset(args.scenario), seed=args.seed)
    else:
        config = SeederConfig(
            seed=args.seed,
            dimensions=DimensionConfig(
                stores=args.stores,
                products_per_store=args.products_per_store,
            ),
            sales=SalesConfig(days=args.days),
            batch_size=args.batch_size,
        )

    print("Configuration:")
    print(f"  Seed: {config.seed}")
    print(f"  Stores: {config.dimensions.stores}")
    print(f"  Products per store: {config.dimensions.products_per_store}")
    print(f"  Days of sales: {config.sales.days}")
    print()

    seeder = DataSeeder(config)
    result = await seeder.generate_full(session)

    print("\nGeneration Complete!")
    print("-" * 40)
    print(f"  Stores:           {result.stores_count:>8,}")
    print(f"  Products:         {result.products_count:>8,}")
    print(f"  Sales records:    {result.sales_count:>8,}")
    print("-" * 40)
    print(f"  Seed used:        {result.seed}")
    print()

    return 0


async def run_delete(args: argparse.Namespace, session: AsyncSession) -> int:
    """Run delete operation."""
    if production_blocked():
        return 1

    if args.dry_run:
        print("DRY RUN - No data will be deleted")
        print()
    elif not args.confirm:
        print("ERROR: --confirm flag required for data deletion.")
        print("Use --dry-run to preview or --confirm to proceed.")
        return 1

    seeder = DataSeeder(SeederConfig(seed=args.seed))

    scope: Literal["all", "sales"] = args.scope
    counts = await seeder.delete_data(session, scope=scope, dry_run=args.dry_run)

    action = "Would delete" if args.dry_run else "Deleted"
    print_counts(counts, title=f"{action} ({scope})")

    return 0


async def run_append(args: argparse.Namespace, session: AsyncSession) -> int:
    """Run append operation."""
    if production_blocked():
        return 1

    print(f"Appending {args.days} days of sales")
    print()

    config = SeederConfig(
        seed=args.seed,
        sales=SalesConfig(days=args.days),
        batch_size=args.batch_size,
    )
    seeder = DataSeeder(config)

    try:
        result = await seeder.append_sales(session)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1

    print("\nAppend Complete!")
    print("-" * 40)
    print(f"  Sales records added:  {result.sales_count:>8,}")
    print("-" * 40)
    print()

    return 0


async def run_status(session: AsyncSession) -> int:
    """Show current data status."""
    seeder = DataSeeder(SeederConfig())
    counts = await seeder.get_current_counts(session)
    print_counts(counts)
    return 0


async def run_verify(session: AsyncSession) -> int:
    """Verify data integrity."""
    print("Verifying data integrity...")
    print()

    seeder = DataSeeder(SeederConfig())
    errors = await seeder.verify_data_integrity(session)

    if errors:
        print("ERRORS FOUND:")
        for error in errors:
            print(f"  - {error}")
        return 1

    print("All integrity checks passed!")
    return 0


async def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    configure_logging()
    print_banner()

    database = Database.from_settings()

    try:
        async with database.session_maker() as session:
            if args.full_new:
                return await run_full_new(args, session)
            if args.delete:
                return await run_delete(args, session)
            if args.append:
                return await run_append(args, session)
            if args.status:
                return await run_status(session)
            if args.verify:
                return await run_verify(session)
            parser.print_help()
            return 1
    finally:
        await database.dispose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
