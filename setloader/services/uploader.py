"""
Batched, idempotent upload of card records.

Records are upserted one chunk at a time, in order. The first failing chunk
stops the upload. Chunks committed before it stay committed: there is no
rollback across chunks, and re-running the import is safe because the
upsert is keyed on ``scryfall_id``.
"""

import logging
import math
from collections.abc import Iterator, Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from setloader.config import DEFAULT_BATCH_SIZE
from setloader.db.operations import upsert_cards
from setloader.models.card import CardRecord

logger = logging.getLogger(__name__)

CONFLICT_KEY = "scryfall_id"


class UploadError(Exception):
    """
    Raised when a batch fails to commit.

    Attributes:
        batch_index: 1-based index of the failing batch
        cause: The underlying exception
    """

    def __init__(self, batch_index: int, cause: BaseException) -> None:
        self.batch_index = batch_index
        self.cause = cause
        super().__init__(f"Failed to upload cards batch {batch_index}: {cause}")


class CardStore(Protocol):
    """Anything that can upsert a chunk of CardRecords."""

    async def upsert(self, records: Sequence[CardRecord], conflict_key: str) -> None: ...


class SqlCardStore:
    """CardStore backed by an async SQLAlchemy session factory.

    Each call runs in its own session and transaction.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def upsert(self, records: Sequence[CardRecord], conflict_key: str) -> None:
        async with self.session_factory() as session:
            await upsert_cards(session, records, conflict_key=conflict_key)
            await session.commit()


def chunked(records: Sequence[CardRecord], size: int) -> Iterator[Sequence[CardRecord]]:
    """Consecutive slices of at most ``size`` records."""
    for start in range(0, len(records), size):
        yield records[start : start + size]


async def upload_cards(
    store: CardStore,
    records: Sequence[CardRecord],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> int:
    """
    Upsert records in sequential batches.

    Args:
        store: Destination store
        records: Records to upload
        batch_size: Maximum records per upsert call

    Returns:
        Number of records uploaded

    Raises:
        ValueError: If batch_size is less than 1
        UploadError: On the first batch that fails; later batches are not attempted
    """
    if batch_size < 1:
        raise ValueError(f"batch_size must be >= 1, got {batch_size}")

    total_batches = math.ceil(len(records) / batch_size)
    logger.info("Uploading %d cards to database in batches of %d...", len(records), batch_size)

    for batch_index, batch in enumerate(chunked(records, batch_size), start=1):
        logger.info(
            "Uploading batch %d/%d (%d cards)...", batch_index, total_batches, len(batch)
        )
        try:
            await store.upsert(batch, conflict_key=CONFLICT_KEY)
        except Exception as e:
            logger.error("Error uploading batch %d: %s", batch_index, e)
            raise UploadError(batch_index, e) from e

        logger.info("Batch %d/%d uploaded successfully", batch_index, total_batches)

    logger.info("Successfully uploaded all %d cards to database", len(records))
    return len(records)
