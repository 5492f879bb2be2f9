"""
Import a Scryfall set into the database.

Fetches, validates, transforms and uploads every printing in a set.

Usage:
    python -m setloader.jobs.import_set dsk
    python -m setloader.jobs.import_set dsk --dry-run
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from setloader.config import settings
from setloader.db.database import create_engine_from_settings, init_db
from setloader.models.import_result import ImportResult
from setloader.services.importer import import_set

logger = logging.getLogger(__name__)

POPULAR_SETS = {
    "dsk": "Duskmourn: House of Horror",
    "blb": "Bloomburrow",
    "mh3": "Modern Horizons 3",
    "otj": "Outlaws of Thunder Junction",
}


def build_parser(*, force_dry_run: bool = False) -> argparse.ArgumentParser:
    """Argument parser for the import command."""
    popular = "\n".join(f"  {code} - {name}" for code, name in POPULAR_SETS.items())
    parser = argparse.ArgumentParser(
        prog="import-set-dry" if force_dry_run else "import-set",
        description="Import a Scryfall set into the card database",
        epilog=f"Popular recent sets:\n{popular}",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("set_code", nargs="?", help="Set code to import (e.g., dsk)")
    if not force_dry_run:
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Fetch and transform but do not upload to the database",
        )
    parser.add_argument(
        "--no-save",
        action="store_true",
        help="Do not write a JSON sample of the transformed cards",
    )
    parser.add_argument(
        "--complete",
        action="store_true",
        help="Write every card to the JSON dump instead of a 5-card sample",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=settings.output_dir,
        help=f"Directory for JSON dumps (default: {settings.output_dir})",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=settings.upload_batch_size,
        help=f"Cards per upsert (default: {settings.upload_batch_size})",
    )
    parser.add_argument(
        "--create-tables",
        action="store_true",
        help="Create the cards table before uploading if it does not exist",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


async def run_import(args: argparse.Namespace, *, dry_run: bool) -> ImportResult:
    """Run one import from parsed arguments."""
    if args.create_tables and not dry_run:
        engine = create_engine_from_settings()
        try:
            await init_db(engine)
        finally:
            await engine.dispose()

    return await import_set(
        args.set_code.lower(),
        dry_run=dry_run,
        save_to_file=not args.no_save,
        output_dir=args.output_dir,
        complete_dump=args.complete,
        batch_size=args.batch_size,
    )


def print_summary(result: ImportResult, *, dry_run: bool) -> None:
    print(f"\n{'Dry Run' if dry_run else 'Import'} Summary:")
    print(f"Set: {result.set_metadata.name}")
    print(f"Cards {'processed' if dry_run else 'imported'}: {result.cards_imported}")
    print(f"Validation passed: {'yes' if result.validation_passed else 'no'}")
    if result.saved_to_file:
        print(f"Sample saved to: {result.saved_to_file}")
    if dry_run:
        print(f"\nTo actually import, run: import-set {result.set_metadata.code}")


def main(argv: list[str] | None = None, *, force_dry_run: bool = False) -> int:
    """
    CLI entry point.

    Returns:
        Process exit status: 0 on success, 1 on a missing set code or any pipeline error.
    """
    parser = build_parser(force_dry_run=force_dry_run)
    args = parser.parse_args(argv)
    if not args.set_code:
        print(parser.format_help(), file=sys.stderr)
        return 1

    dry_run = force_dry_run or args.dry_run

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.batch_size < 1:
        parser.error("--batch-size must be at least 1")

    try:
        result = asyncio.run(run_import(args, dry_run=dry_run))
    except Exception as e:
        logger.error("%s failed: %s", "Dry run" if dry_run else "Import", e)
        return 1

    print_summary(result, dry_run=dry_run)
    return 0


def main_dry(argv: list[str] | None = None) -> int:
    """CLI entry point that never uploads."""
    return main(argv, force_dry_run=True)


if __name__ == "__main__":
    sys.exit(main())
