"""
End-to-end set import.

fetch metadata -> fetch cards -> validate count -> transform -> (save) -> (upload)

Each step runs once, in order. Catalog and upload failures abort the run;
a count mismatch does not. Nothing is rolled back on failure, and a re-run
starts from scratch, relying on the upsert being idempotent.
"""

import logging
from pathlib import Path

from sqlalchemy.ext.asyncio import AsyncEngine

from setloader.config import Settings, settings
from setloader.db.database import create_engine_from_settings, create_session_factory
from setloader.models.card import CardRecord
from setloader.models.import_result import ImportResult
from setloader.services.card_export import save_cards_to_file, save_complete_cards_to_file
from setloader.services.scryfall_client import ScryfallClient
from setloader.services.transformer import transform_cards
from setloader.services.uploader import CardStore, SqlCardStore, upload_cards
from setloader.services.validator import validate_count

logger = logging.getLogger(__name__)


def _log_summary(set_name: str, records: list[CardRecord]) -> None:
    logger.info("Data summary: set=%s cards=%d", set_name, len(records))
    if records:
        sample = records[0]
        logger.info(
            "Sample card: name=%s mana_cost=%s type=%s rarity=%s set=%s",
            sample.name,
            sample.mana_cost or "N/A",
            sample.type_line,
            sample.rarity,
            sample.set_code,
        )


async def import_set(
    set_code: str,
    *,
    dry_run: bool = False,
    save_to_file: bool = False,
    output_dir: Path | None = None,
    complete_dump: bool = False,
    batch_size: int | None = None,
    client: ScryfallClient | None = None,
    store: CardStore | None = None,
    config: Settings | None = None,
) -> ImportResult:
    """
    Import every printing in a set.

    Args:
        set_code: Set code (e.g., "dsk")
        dry_run: Run every step except the upload
        save_to_file: Write a JSON dump of the transformed cards
        output_dir: Where to write the dump (defaults to settings.output_dir)
        complete_dump: Dump every card instead of a 5-card sample
        batch_size: Cards per upsert (defaults to settings.upload_batch_size)
        client: Catalog client; one is created and closed here if omitted
        store: Destination store; built from settings if omitted, ignored on a dry run
        config: Settings override

    Returns:
        ImportResult summarising the run

    Raises:
        ConfigurationError: If an upload is needed and no database is configured.
            Raised before any request is made.
        CatalogError: If a catalog request fails
        UploadError: If a batch fails to commit
    """
    config = config or settings
    output_dir = output_dir or config.output_dir
    batch_size = batch_size if batch_size is not None else config.upload_batch_size

    logger.info("Starting import of set: %s%s", set_code, " (DRY RUN)" if dry_run else "")

    engine: AsyncEngine | None = None
    if dry_run:
        store = None
    elif store is None:
        engine = create_engine_from_settings(config)
        store = SqlCardStore(create_session_factory(engine))

    owns_client = client is None
    if client is None:
        client = ScryfallClient(config=config)

    try:
        logger.info("Fetching set metadata...")
        set_metadata = await client.fetch_set_metadata(set_code)
        logger.info("Set: %s (%d cards)", set_metadata.name, set_metadata.card_count)

        logger.info("Fetching cards from Scryfall...")
        scryfall_cards = await client.search_cards_in_set(set_code)

        logger.info("Validating card count...")
        validation_passed = await validate_count(client, set_code, scryfall_cards)
        if not validation_passed:
            logger.warning("Validation failed, but continuing...")

        logger.info("Transforming cards for database...")
        records = transform_cards(scryfall_cards)
        _log_summary(set_metadata.name, records)

        saved_to_file: Path | None = None
        if save_to_file:
            if complete_dump:
                saved_to_file = save_complete_cards_to_file(records, set_code, output_dir)
            else:
                saved_to_file = save_cards_to_file(records, set_code, output_dir)

        if store is None:
            logger.info(
                "DRY RUN: skipping upload. Would upsert %d cards into the database", len(records)
            )
        else:
            logger.info("Uploading cards to database...")
            await upload_cards(store, records, batch_size=batch_size)

        logger.info(
            "Set %s import %scompleted successfully", set_code, "simulation " if dry_run else ""
        )
        return ImportResult(
            set_metadata=set_metadata,
            cards_imported=len(records),
            validation_passed=validation_passed,
            saved_to_file=saved_to_file,
        )

    except Exception as e:
        logger.error("Failed to import set %s: %s", set_code, e)
        raise

    finally:
        if owns_client:
            await client.aclose()
        if engine is not None:
            await engine.dispose()
