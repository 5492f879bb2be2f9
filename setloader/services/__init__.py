"""
SetLoader services.

The import pipeline: catalog client, validation, transformation, export and upload.
"""

from setloader.services.card_export import save_cards_to_file, save_complete_cards_to_file
from setloader.services.importer import import_set
from setloader.services.rate_limiter import RateLimiter
from setloader.services.scryfall_client import CatalogError, ScryfallClient
from setloader.services.transformer import transform_card, transform_cards
from setloader.services.uploader import (
    CardStore,
    SqlCardStore,
    UploadError,
    chunked,
    upload_cards,
)
from setloader.services.validator import validate_count

__all__ = [
    "CardStore",
    "CatalogError",
    "RateLimiter",
    "ScryfallClient",
    "SqlCardStore",
    "UploadError",
    "chunked",
    "import_set",
    "save_cards_to_file",
    "save_complete_cards_to_file",
    "transform_card",
    "transform_cards",
    "upload_cards",
    "validate_count",
]
