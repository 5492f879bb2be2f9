"""Count validation for fetched sets."""

import logging
from collections.abc import Sized

from setloader.services.scryfall_client import ScryfallClient

logger = logging.getLogger(__name__)


async def validate_count(client: ScryfallClient, set_code: str, fetched_cards: Sized) -> bool:
    """
    Check that we got every card in a set.

    Refetches set metadata and compares its declared ``card_count`` with the
    number of cards fetched. A mismatch is logged as a warning and reported
    as False; it is not an error.

    Raises:
        CatalogError: If the metadata request fails
    """
    set_metadata = await client.fetch_set_metadata(set_code)
    expected = set_metadata.card_count
    actual = len(fetched_cards)

    if expected != actual:
        logger.warning(
            "Card count mismatch for set %s: expected %d, got %d", set_code, expected, actual
        )
        return False

    logger.info("Set %s validation passed: %d/%d cards", set_code, actual, expected)
    return True
